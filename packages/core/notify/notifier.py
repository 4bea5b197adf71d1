from __future__ import annotations

from typing import Callable, Literal, Protocol

ActivationReason = Literal["trigger", "context", "double_click", "middle_click", "unknown"]


class NotificationSink(Protocol):
    def show(self, title: str, body: str, duration_ms: int) -> None:
        ...

    def clear(self) -> None:
        ...

    def on_activated(self, cb: Callable[[ActivationReason], None]) -> None:
        ...
