"""Shared fakes for the installation monitor tests."""

from typing import Callable, List, Optional

import pytest

from packages.core.monitor.types import UnitState
from packages.core.service.systemd_query import UnitStateQuery

RUNNING = UnitState("active", "running")
ACTIVATING = UnitState("activating", "start")
EXITED = UnitState("active", "exited")
FAILED = UnitState("failed", "failed")


class ScriptedQuery(UnitStateQuery):
    """Returns (or raises) the scripted results in order, repeating the last one."""

    def __init__(self, *results):
        self.results = list(results)
        self.calls: List[str] = []

    def query(self, unit_name):
        self.calls.append(unit_name)
        result = self.results.pop(0) if len(self.results) > 1 else self.results[0]
        if isinstance(result, Exception):
            raise result
        return result


class RecordingSink:
    """NotificationSink that records calls instead of drawing anything."""

    def __init__(self):
        self.shown: List[tuple] = []
        self.cleared = 0
        self.activated_cb: Optional[Callable] = None
        self.tooltips: List[str] = []

    def show(self, title, body, duration_ms):
        self.shown.append((title, body, duration_ms))

    def clear(self):
        self.cleared += 1

    def on_activated(self, cb):
        self.activated_cb = cb

    def set_tooltip(self, text):
        self.tooltips.append(text)

    def activate(self, reason):
        self.activated_cb(reason)


class ManualTimer:
    """PollTimer advanced by calling fire() from the test."""

    def __init__(self):
        self.interval_ms: Optional[int] = None
        self.callback: Optional[Callable[[], None]] = None
        self.starts = 0
        self.stops = 0

    def start(self, interval_ms, callback):
        self.interval_ms = interval_ms
        self.callback = callback
        self.starts += 1

    def stop(self):
        self.stops += 1
        self.callback = None

    def is_active(self):
        return self.callback is not None

    def fire(self):
        if self.callback is not None:
            self.callback()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def timer():
    return ManualTimer()


@pytest.fixture
def tmp_xdg(tmp_path, monkeypatch):
    """Point config and state directories into tmp_path."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_STATE_HOME", str(tmp_path / "state"))
    yield tmp_path
