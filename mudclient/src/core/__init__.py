"""Core systems for the MUD client."""

from .event_bus import EventBus, EventType, Event
from .state_machine import StateMachine, StateTransition
from .scheduler import AsyncioScheduler, Scheduler, TimerHandle

__all__ = [
    "EventBus",
    "EventType",
    "Event",
    "StateMachine",
    "StateTransition",
    "AsyncioScheduler",
    "Scheduler",
    "TimerHandle",
]
