"""
Table-driven state machine.

Tracks the current state of a component and validates transitions against a
table of allowed moves. Listeners are told about every accepted transition.
"""

from enum import Enum
from typing import Callable, Dict, Generic, Iterable, List, Optional, TypeVar
from dataclasses import dataclass

from ..logging_config import get_logger

logger = get_logger(__name__)

S = TypeVar("S", bound=Enum)


@dataclass
class StateTransition(Generic[S]):
    """Represents a state transition."""
    from_state: Optional[S]
    to_state: S
    data: Optional[dict]


class StateMachine(Generic[S]):
    """Manages transitions between the members of a state enum."""

    def __init__(self, initial: S, transitions: Dict[S, Iterable[S]]):
        self._current_state: S = initial
        self._previous_state: Optional[S] = None
        self._transitions: Dict[S, frozenset] = {
            state: frozenset(targets) for state, targets in transitions.items()
        }
        self._transition_listeners: Dict[S, List[Callable]] = {}
        self._any_transition_listeners: List[Callable] = []

    @property
    def current_state(self) -> S:
        """Get the current state."""
        return self._current_state

    @property
    def previous_state(self) -> Optional[S]:
        """Get the previous state."""
        return self._previous_state

    def can_transition_to(self, state: S) -> bool:
        """Check if transition to given state is valid."""
        return state in self._transitions.get(self._current_state, frozenset())

    def transition_to(self, state: S, data: Optional[dict] = None) -> bool:
        """
        Transition to a new state.

        Args:
            state: The state to transition to
            data: Optional data passed along to listeners

        Returns:
            True if transition was successful, False otherwise
        """
        if not self.can_transition_to(state):
            logger.warning(f"Rejected transition {self._current_state.name} -> {state.name}")
            return False

        self._previous_state = self._current_state
        self._current_state = state

        transition = StateTransition(
            from_state=self._previous_state,
            to_state=state,
            data=data
        )

        for listener in list(self._transition_listeners.get(state, [])):
            listener(transition)

        for listener in list(self._any_transition_listeners):
            listener(transition)

        return True

    def on_transition_to(self, state: S, callback: Callable[[StateTransition], None]) -> None:
        """Register a callback for transitions to a specific state."""
        if state not in self._transition_listeners:
            self._transition_listeners[state] = []
        self._transition_listeners[state].append(callback)

    def on_any_transition(self, callback: Callable[[StateTransition], None]) -> None:
        """Register a callback for any state transition."""
        self._any_transition_listeners.append(callback)
