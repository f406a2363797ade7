"""
Core event bus for internal client communication.

Provides a pub/sub system for decoupled component communication. Each
session owns its own bus so several sessions can live in one process.
"""

from typing import Callable, Dict, List, Any, Optional
from enum import Enum, auto
import asyncio
from dataclasses import dataclass, field

from ..logging_config import get_logger

logger = get_logger(__name__)


class EventType(Enum):
    """Internal client event types."""
    # Transport events
    STATE_CHANGED = auto()
    CAPABILITY_UNAVAILABLE = auto()
    CONNECTING = auto()
    CONNECTED = auto()
    DISCONNECTED = auto()
    CONNECTION_FAILED = auto()
    DATA_RECEIVED = auto()

    # Input events
    INPUT_CHANGED = auto()
    INPUT_SUBMITTED = auto()
    ECHO_MODE_CHANGED = auto()
    INPUT_FOCUS_CHANGED = auto()
    COMPLETION_CYCLED = auto()
    SCROLL_REQUESTED = auto()

    # Notification events
    NOTIFICATION_SHOWN = auto()
    NOTIFICATION_DISMISSED = auto()

    # Status tray events
    TRAY_UPDATED = auto()


@dataclass
class Event:
    """Event data structure."""
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None


class EventBus:
    """Central event bus for client communication."""

    def __init__(self):
        self._handlers: Dict[EventType, List[Callable]] = {}
        self._once_handlers: Dict[EventType, List[Callable]] = {}

    def subscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def subscribe_once(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Subscribe a handler that will be called only once."""
        if event_type not in self._once_handlers:
            self._once_handlers[event_type] = []
        self._once_handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers and handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

        if event_type in self._once_handlers and handler in self._once_handlers[event_type]:
            self._once_handlers[event_type].remove(handler)

    def emit(self, event_type: EventType, data: Optional[Dict[str, Any]] = None, source: Optional[str] = None) -> None:
        """
        Emit an event to all subscribers.

        Handlers run synchronously in subscription order. Async handlers are
        scheduled as tasks on the running event loop.
        """
        event = Event(type=event_type, data=data or {}, source=source)

        # Copy so handlers may (un)subscribe while being called
        for handler in list(self._handlers.get(event_type, [])):
            self._dispatch(handler, event)

        once_handlers = self._once_handlers.pop(event_type, [])
        for handler in once_handlers:
            self._dispatch(handler, event)

    def _dispatch(self, handler: Callable, event: Event) -> None:
        try:
            if asyncio.iscoroutinefunction(handler):
                try:
                    loop = asyncio.get_running_loop()
                except RuntimeError:
                    logger.warning(f"Async handler {handler!r} for {event.type.name} skipped: no running event loop")
                    return
                loop.create_task(handler(event))
            else:
                handler(event)
        except Exception:
            logger.exception(f"Error in event handler for {event.type.name}")

    def clear(self, event_type: Optional[EventType] = None) -> None:
        """Clear all handlers for an event type, or all handlers if None."""
        if event_type:
            self._handlers.pop(event_type, None)
            self._once_handlers.pop(event_type, None)
        else:
            self._handlers.clear()
            self._once_handlers.clear()
