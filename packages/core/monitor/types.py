from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional

MonitorPhase = Literal["DECIDING", "IDLE", "WATCHING", "TERMINATED"]


@dataclass(frozen=True)
class UnitState:
    """ActiveState/SubState pair reported by systemd for one unit."""
    active_state: str
    sub_state: str

    @property
    def is_terminal(self) -> bool:
        return self == TERMINAL_STATE

    @property
    def is_failed(self) -> bool:
        return self.active_state == "failed"

    def __str__(self) -> str:
        return f"{self.active_state} ({self.sub_state})"


# a one-shot unit that ran to completion
TERMINAL_STATE = UnitState("active", "exited")


@dataclass
class CompletionMonitorConfig:
    """Configuration for the completion monitor."""
    target_unit: str
    poll_interval_ms: int  # milliseconds
    title: str
    body: str
    duration_ms: int  # display hint for the notification
    failure_alert_threshold: int  # consecutive tick failures


@dataclass
class MonitorSession:
    """Runtime state of the single watch session in this process."""
    target_unit: str
    poll_interval_ms: int
    phase: MonitorPhase = "DECIDING"
    ui_engaged: bool = False
    last_state: Optional[UnitState] = None
    ticks: int = 0
    consecutive_failures: int = 0
    exit_code: Optional[int] = None
