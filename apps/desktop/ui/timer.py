from __future__ import annotations

from typing import Callable, Optional

from PySide6.QtCore import QTimer


class QtPollTimer:
    """PollTimer driven by a QTimer on the GUI thread."""

    def __init__(self) -> None:
        self._timer = QTimer()
        self._timer.timeout.connect(self._fire)
        self._callback: Optional[Callable[[], None]] = None

    def start(self, interval_ms: int, callback: Callable[[], None]) -> None:
        self._callback = callback
        self._timer.start(interval_ms)

    def stop(self) -> None:
        self._timer.stop()
        self._callback = None

    def is_active(self) -> bool:
        return self._timer.isActive()

    def _fire(self) -> None:
        if self._callback:
            self._callback()
