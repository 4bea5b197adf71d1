"""
Completion monitor for a one-shot systemd unit.

State machine: DECIDING -> (IDLE | WATCHING) -> TERMINATED

The monitor owns no thread. Poll ticks arrive from a PollTimer and tray
activations from the NotificationSink, both on the UI event-loop thread.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Callable, Optional, Protocol

from packages.core.errors import ServiceQueryError
from packages.core.notify.notice import Notice, build_notice
from packages.core.notify.notifier import ActivationReason, NotificationSink
from packages.core.service.systemd_query import UnitStateQuery

from .types import CompletionMonitorConfig, MonitorPhase, MonitorSession, UnitState

log = logging.getLogger(__name__)


class PollTimer(Protocol):
    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...

    def is_active(self) -> bool:
        ...


class CompletionMonitor:
    """
    Shows a notification while the target unit is still working and exits
    once it reports active (exited).
    """

    def __init__(
        self,
        config: dict,
        query: UnitStateQuery,
        sink: NotificationSink,
        timer: PollTimer,
    ) -> None:
        self._cfg = self._parse_config(config)
        self._notice: Notice = build_notice(self._cfg)
        self._query = query
        self._sink = sink
        self._timer = timer
        self._session = MonitorSession(
            target_unit=self._cfg.target_unit,
            poll_interval_ms=self._cfg.poll_interval_ms,
        )
        self._alerted = False

        self._exit_cb: Optional[Callable[[int], None]] = None
        self._error_cb: Optional[Callable[[str], None]] = None
        self._recovered_cb: Optional[Callable[[], None]] = None

        self._sink.on_activated(self.on_activated)

    @staticmethod
    def _parse_config(config: dict) -> CompletionMonitorConfig:
        """Parse config dict into CompletionMonitorConfig."""
        return CompletionMonitorConfig(
            target_unit=config.get("target_unit", "snapd.seeded.service"),
            poll_interval_ms=config.get("poll_interval_ms", 5000),
            title=config.get("title", "Installation Notice"),
            body=config.get("body", "Finalizing installation of snaps, please wait..."),
            duration_ms=config.get("duration_ms", 15000),
            failure_alert_threshold=config.get("failure_alert_threshold", 3),
        )

    def on_exit(self, cb: Callable[[int], None]) -> None:
        self._exit_cb = cb

    def on_error(self, cb: Callable[[str], None]) -> None:
        self._error_cb = cb

    def on_recovered(self, cb: Callable[[], None]) -> None:
        """Called on the first successful poll after an error was reported."""
        self._recovered_cb = cb

    @property
    def phase(self) -> MonitorPhase:
        return self._session.phase

    @property
    def exit_code(self) -> Optional[int]:
        return self._session.exit_code

    def get_session(self) -> MonitorSession:
        return replace(self._session)

    def start(self) -> MonitorPhase:
        """
        Take the initial snapshot and decide whether to engage the UI.

        Query failures propagate: without an initial state there is nothing
        to decide on.
        """
        if self._session.phase != "DECIDING":
            return self._session.phase

        unit = self._cfg.target_unit
        state = self._query.query(unit)
        self._session.last_state = state
        log.info("%s is %s", unit, state)

        if state.is_terminal:
            self._session.phase = "IDLE"
            log.info("%s already completed, nothing to show", unit)
            self._terminate()
            return self._session.phase

        self._session.phase = "WATCHING"
        self._session.ui_engaged = True
        self._show_notice()
        self._timer.start(self._cfg.poll_interval_ms, self.on_tick)
        log.info("Watching %s every %d ms", unit, self._cfg.poll_interval_ms)
        return self._session.phase

    def on_tick(self) -> None:
        if self._session.phase != "WATCHING":
            return

        self._session.ticks += 1
        try:
            state = self._query.query(self._cfg.target_unit)
        except ServiceQueryError as e:
            self._record_failure(e)
            return

        self._session.consecutive_failures = 0
        if self._alerted:
            self._alerted = False
            log.info("State of %s readable again", self._cfg.target_unit)
            self._emit_recovered()
        previous = self._session.last_state
        self._session.last_state = state

        if state.is_terminal:
            log.info("%s completed (%s)", self._cfg.target_unit, state)
            self._terminate()
            return

        if state.is_failed and (previous is None or not previous.is_failed):
            log.warning("%s reports %s, still waiting for it to complete", self._cfg.target_unit, state)

    def on_activated(self, reason: ActivationReason) -> None:
        if self._session.phase != "WATCHING":
            return
        if reason == "trigger":
            self._show_notice()

    def _show_notice(self) -> None:
        self._sink.show(self._notice.title, self._notice.body, self._notice.duration_ms)

    def _record_failure(self, err: ServiceQueryError) -> None:
        self._session.consecutive_failures += 1
        failures = self._session.consecutive_failures
        log.warning("Poll %d: cannot read state of %s (%s), retrying", self._session.ticks, self._cfg.target_unit, err)

        if failures >= self._cfg.failure_alert_threshold and not self._alerted:
            self._alerted = True
            msg = f"State of {self._cfg.target_unit} unavailable for {failures} consecutive polls: {err}"
            log.error("%s", msg)
            self._emit_error(msg)

    def _terminate(self) -> None:
        if self._session.phase == "WATCHING":
            self._timer.stop()
        if self._session.ui_engaged:
            self._sink.clear()
            self._session.ui_engaged = False
        self._session.phase = "TERMINATED"
        self._session.exit_code = 0
        self._emit_exit(0)

    def _emit_exit(self, code: int) -> None:
        if self._exit_cb:
            self._exit_cb(code)

    def _emit_error(self, msg: str) -> None:
        if self._error_cb:
            self._error_cb(msg)

    def _emit_recovered(self) -> None:
        if self._recovered_cb:
            self._recovered_cb()
