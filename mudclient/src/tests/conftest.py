"""
Shared test fixtures.

Fast fixtures that need neither a network nor a display.
"""

from typing import List, Tuple

import pytest

from mudclient.src.config import ClientConfig
from mudclient.src.core.event_bus import Event, EventBus, EventType
from mudclient.src.tests.utils.time_mock import ManualScheduler


class RecordingDisplay:
    """Display sink that remembers everything it was asked to show."""

    def __init__(self):
        self.shown: List[Tuple[str, str]] = []

    def show(self, text: str, tag: str) -> None:
        self.shown.append((text, tag))

    def texts(self, tag: str = None) -> List[str]:
        return [text for text, t in self.shown if tag is None or t == tag]


class EventRecorder:
    """Subscribes to every event type on a bus and keeps the events."""

    def __init__(self, bus: EventBus):
        self.events: List[Event] = []
        for event_type in EventType:
            bus.subscribe(event_type, self.events.append)

    def of(self, event_type: EventType) -> List[Event]:
        return [event for event in self.events if event.type is event_type]

    def types(self) -> List[EventType]:
        return [event.type for event in self.events]


@pytest.fixture
def event_bus():
    return EventBus()


@pytest.fixture
def recorder(event_bus):
    return EventRecorder(event_bus)


@pytest.fixture
def display():
    return RecordingDisplay()


@pytest.fixture
def scheduler():
    return ManualScheduler()


@pytest.fixture
def client_config():
    """Default configuration, never read from disk."""
    return ClientConfig()
