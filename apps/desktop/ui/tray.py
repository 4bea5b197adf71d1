"""
System tray notification for the installation monitor.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtGui import QIcon
from PySide6.QtWidgets import QSystemTrayIcon

from packages.core.notify.notifier import ActivationReason

log = logging.getLogger(__name__)

_REASONS: dict[QSystemTrayIcon.ActivationReason, ActivationReason] = {
    QSystemTrayIcon.ActivationReason.Trigger: "trigger",
    QSystemTrayIcon.ActivationReason.Context: "context",
    QSystemTrayIcon.ActivationReason.DoubleClick: "double_click",
    QSystemTrayIcon.ActivationReason.MiddleClick: "middle_click",
}


class TrayNotifier:
    """NotificationSink backed by a QSystemTrayIcon balloon message."""

    def __init__(self, icon: QIcon, tooltip: str) -> None:
        self._tray = QSystemTrayIcon(icon)
        self._tray.setToolTip(tooltip)
        self._tray.activated.connect(self._on_tray_activated)
        self._activated_cb: Optional[Callable[[ActivationReason], None]] = None

        if not QSystemTrayIcon.isSystemTrayAvailable():
            log.warning("No system tray available, notifications may not be visible")

    def on_activated(self, cb: Callable[[ActivationReason], None]) -> None:
        self._activated_cb = cb

    def show(self, title: str, body: str, duration_ms: int) -> None:
        if not self._tray.isVisible():
            self._tray.show()
        self._tray.showMessage(title, body, QSystemTrayIcon.MessageIcon.Information, duration_ms)

    def clear(self) -> None:
        self._tray.hide()

    def set_tooltip(self, text: str) -> None:
        self._tray.setToolTip(text)

    def is_visible(self) -> bool:
        return self._tray.isVisible()

    def _on_tray_activated(self, reason: QSystemTrayIcon.ActivationReason) -> None:
        mapped = _REASONS.get(reason, "unknown")
        log.debug("Tray activated: %s", mapped)
        if self._activated_cb:
            self._activated_cb(mapped)
