"""Exception types for the installation monitor and the seed-glue check."""

from __future__ import annotations

from typing import Optional, Sequence


class InstallationMonitorError(Exception):
    """Base exception for all errors raised by this project."""


class ServiceQueryError(InstallationMonitorError):
    """Raised when the state of a systemd unit cannot be determined."""


class TransportError(ServiceQueryError):
    """Raised when the D-Bus system bus is unreachable or a call on it fails."""


class UnitNotFoundError(ServiceQueryError):
    """Raised when systemd does not know the requested unit."""

    def __init__(self, unit_name: str) -> None:
        super().__init__(f"unit {unit_name!r} is not loaded")
        self.unit_name = unit_name


class ExternalToolFailure(InstallationMonitorError):
    """Raised when snapd-seed-glue does not honor its command-line contract."""

    def __init__(
        self,
        message: str,
        command: Sequence[str] = (),
        exit_code: Optional[int] = None,
        output: str = "",
    ) -> None:
        super().__init__(message)
        self.command = list(command)
        self.exit_code = exit_code
        self.output = output
