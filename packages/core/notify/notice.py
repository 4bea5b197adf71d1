from __future__ import annotations

from dataclasses import dataclass

from packages.core.monitor.types import CompletionMonitorConfig


@dataclass(frozen=True)
class Notice:
    title: str
    body: str
    duration_ms: int


def build_notice(cfg: CompletionMonitorConfig) -> Notice:
    return Notice(title=cfg.title, body=cfg.body, duration_ms=cfg.duration_ms)
