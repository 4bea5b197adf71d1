from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_TARGET_UNIT = "snapd.seeded.service"


class AppConfig(BaseModel):
    target_unit: str = Field(default=DEFAULT_TARGET_UNIT, min_length=1)
    poll_interval_ms: int = Field(default=5000, ge=100)
    notification_title: str = "Installation Notice"
    notification_body: str = "Finalizing installation of snaps, please wait..."
    notification_duration_ms: int = Field(default=15000, ge=0)
    tooltip: str = "Snap Installation Monitor"
    icon_name: str = "dialog-information"
    failure_alert_threshold: int = Field(default=3, ge=1)

    def to_monitor_config(self) -> dict:
        return {
            "target_unit": self.target_unit,
            "poll_interval_ms": self.poll_interval_ms,
            "title": self.notification_title,
            "body": self.notification_body,
            "duration_ms": self.notification_duration_ms,
            "failure_alert_threshold": self.failure_alert_threshold,
        }
