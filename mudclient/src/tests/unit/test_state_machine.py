"""
Unit tests for the table-driven state machine.
"""

from enum import Enum, auto

import pytest
from unittest.mock import MagicMock

from mudclient.src.core.state_machine import StateMachine


class Light(Enum):
    RED = auto()
    GREEN = auto()
    AMBER = auto()


TABLE = {
    Light.RED: [Light.GREEN],
    Light.GREEN: [Light.AMBER],
    Light.AMBER: [Light.RED],
}


@pytest.fixture
def machine():
    return StateMachine(Light.RED, TABLE)


class TestStateMachine:

    def test_initial_state(self, machine):
        assert machine.current_state is Light.RED
        assert machine.previous_state is None

    def test_valid_transition(self, machine):
        assert machine.transition_to(Light.GREEN) is True
        assert machine.current_state is Light.GREEN
        assert machine.previous_state is Light.RED

    def test_invalid_transition_rejected(self, machine):
        assert machine.can_transition_to(Light.AMBER) is False
        assert machine.transition_to(Light.AMBER) is False
        assert machine.current_state is Light.RED

    def test_listeners(self, machine):
        specific = MagicMock()
        any_listener = MagicMock()
        machine.on_transition_to(Light.AMBER, specific)
        machine.on_any_transition(any_listener)

        machine.transition_to(Light.GREEN, {"why": "timer"})
        machine.transition_to(Light.AMBER)

        assert any_listener.call_count == 2
        first = any_listener.call_args_list[0][0][0]
        assert first.from_state is Light.RED
        assert first.to_state is Light.GREEN
        assert first.data == {"why": "timer"}
        specific.assert_called_once()

    def test_rejected_transition_notifies_nobody(self, machine):
        listener = MagicMock()
        machine.on_any_transition(listener)
        machine.transition_to(Light.AMBER)
        listener.assert_not_called()
