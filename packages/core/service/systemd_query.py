"""
Unit state lookup against systemd over the D-Bus system bus.

Each query resolves the unit to its object path with Manager.GetUnit and then
reads ActiveState and SubState through org.freedesktop.DBus.Properties.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

from packages.core.errors import TransportError, UnitNotFoundError
from packages.core.monitor.types import UnitState

log = logging.getLogger(__name__)

SYSTEMD_BUS_NAME = "org.freedesktop.systemd1"
SYSTEMD_OBJECT_PATH = "/org/freedesktop/systemd1"
MANAGER_INTERFACE = "org.freedesktop.systemd1.Manager"
UNIT_INTERFACE = "org.freedesktop.systemd1.Unit"
PROPERTIES_INTERFACE = "org.freedesktop.DBus.Properties"
NO_SUCH_UNIT_ERROR = "org.freedesktop.systemd1.NoSuchUnit"


class UnitStateQuery(ABC):
    """Interface for reading the lifecycle state of a named unit."""

    @abstractmethod
    def query(self, unit_name: str) -> UnitState:
        """Return the current state of unit_name. Raises ServiceQueryError subclasses."""
        ...


class SystemdUnitQuery(UnitStateQuery):
    """
    systemd implementation using dbus-python.

    A private bus connection is opened on first use and kept. A transport
    failure closes it so that the next query opens a fresh one. An injected
    bus is never closed.
    """

    def __init__(self, bus: Optional[Any] = None) -> None:
        self._bus = bus
        self._owns_bus = False

    def query(self, unit_name: str) -> UnitState:
        if not unit_name:
            raise ValueError("unit name must not be empty")

        import dbus

        bus = self._connect(dbus)
        try:
            manager = bus.get_object(SYSTEMD_BUS_NAME, SYSTEMD_OBJECT_PATH)
            unit_path = manager.GetUnit(unit_name, dbus_interface=MANAGER_INTERFACE)
        except dbus.exceptions.DBusException as e:
            if e.get_dbus_name() == NO_SUCH_UNIT_ERROR:
                raise UnitNotFoundError(unit_name) from e
            self._drop_bus()
            raise TransportError(f"GetUnit({unit_name!r}) failed: {e}") from e

        if not unit_path:
            raise UnitNotFoundError(unit_name)

        try:
            unit = bus.get_object(SYSTEMD_BUS_NAME, unit_path)
            active_state = unit.Get(UNIT_INTERFACE, "ActiveState", dbus_interface=PROPERTIES_INTERFACE)
            sub_state = unit.Get(UNIT_INTERFACE, "SubState", dbus_interface=PROPERTIES_INTERFACE)
        except dbus.exceptions.DBusException as e:
            self._drop_bus()
            raise TransportError(f"Reading state of {unit_name!r} failed: {e}") from e

        state = UnitState(str(active_state), str(sub_state))
        log.debug("%s at %s is %s", unit_name, unit_path, state)
        return state

    def _connect(self, dbus: Any) -> Any:
        if self._bus is None:
            try:
                # private: SystemBus() alone returns the per-process shared connection
                self._bus = dbus.SystemBus(private=True)
            except dbus.exceptions.DBusException as e:
                raise TransportError(f"Cannot connect to the system bus: {e}") from e
            self._owns_bus = True
        return self._bus

    def _drop_bus(self) -> None:
        if self._owns_bus and self._bus is not None:
            self._bus.close()
        self._bus = None
        self._owns_bus = False
