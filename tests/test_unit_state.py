"""Tests for the UnitState value type."""

import pytest

from packages.core.monitor.types import TERMINAL_STATE, UnitState


@pytest.mark.parametrize(
    "active,sub,terminal",
    [
        ("active", "exited", True),
        ("active", "running", False),
        ("inactive", "exited", False),
        ("activating", "start", False),
        ("failed", "failed", False),
        ("Active", "Exited", False),
    ],
)
def test_terminal_requires_exact_pair(active, sub, terminal):
    assert UnitState(active, sub).is_terminal is terminal


def test_terminal_constant():
    assert TERMINAL_STATE == UnitState("active", "exited")
    assert TERMINAL_STATE.is_terminal


def test_failed():
    assert UnitState("failed", "failed").is_failed
    assert not UnitState("active", "running").is_failed


def test_str_matches_systemctl_style():
    assert str(UnitState("active", "exited")) == "active (exited)"


def test_is_hashable_and_frozen():
    state = UnitState("active", "running")
    assert {state, UnitState("active", "running")} == {state}
    with pytest.raises(AttributeError):
        state.active_state = "failed"
