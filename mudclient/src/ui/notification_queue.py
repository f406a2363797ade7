"""
Notification queue.

Advisories compete for a single display slot. They are shown strictly in the
order they were queued, one at a time, and an item's timeout only starts
counting once it is actually on screen.
"""

import itertools
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence, Tuple

from ..core.event_bus import EventBus, EventType
from ..core.scheduler import Scheduler, TimerHandle
from ..errors import InvalidReference
from ..logging_config import get_logger

logger = get_logger(__name__)

_ids = itertools.count(1)

Button = Tuple[str, Callable[[], None]]


@dataclass(eq=False)
class NotificationItem:
    """A single advisory."""
    text: str
    tag: str = "info"
    timeout: Optional[float] = None
    on_click: Optional[Callable[[], None]] = None
    on_dismiss: Optional[Callable[[], None]] = None
    buttons: Sequence[Button] = ()
    id: int = field(default_factory=lambda: next(_ids))


class NotificationQueue:
    """FIFO of advisories with at most one active at a time."""

    def __init__(self, scheduler: Scheduler, event_bus: Optional[EventBus] = None):
        self._scheduler = scheduler
        self._event_bus = event_bus
        self._pending: List[NotificationItem] = []
        self._active: Optional[NotificationItem] = None
        self._timer: Optional[TimerHandle] = None

    @property
    def active(self) -> Optional[NotificationItem]:
        return self._active

    @property
    def pending(self) -> Tuple[NotificationItem, ...]:
        """Queued items waiting behind the active one, oldest first."""
        return tuple(self._pending)

    def __len__(self) -> int:
        return len(self._pending) + (1 if self._active is not None else 0)

    def enqueue(self, item: NotificationItem) -> NotificationItem:
        """Queue an item; it is shown at once if nothing else is."""
        self._pending.append(item)
        logger.debug(f"Queued notification {item.id} ({item.tag})")
        if self._active is None:
            self._activate_next()
        return item

    def notify(
        self,
        text: str,
        tag: str = "info",
        timeout: Optional[float] = None,
        on_click: Optional[Callable[[], None]] = None,
        on_dismiss: Optional[Callable[[], None]] = None,
        buttons: Sequence[Button] = (),
    ) -> NotificationItem:
        """Build and queue an item in one call."""
        return self.enqueue(NotificationItem(
            text=text,
            tag=tag,
            timeout=timeout,
            on_click=on_click,
            on_dismiss=on_dismiss,
            buttons=tuple(buttons),
        ))

    def enqueue_immediate(self, item: NotificationItem) -> bool:
        """Queue an item only if it would be shown straight away."""
        if self._active is not None:
            return False
        self.enqueue(item)
        return True

    def dismiss(self) -> None:
        """Close the active item, run its dismiss callback, show the next one."""
        item = self._close_active("dismissed")
        if item is not None and item.on_dismiss is not None:
            item.on_dismiss()

    def click(self) -> None:
        """Close the active item and run its click callback."""
        item = self._close_active("clicked")
        if item is not None and item.on_click is not None:
            item.on_click()

    def press_button(self, index: int) -> None:
        """
        Close the active item and run one of its button callbacks.

        Raises:
            InvalidReference: If nothing is active or the index is out of range.
        """
        item = self._active
        if item is None or not 0 <= index < len(item.buttons):
            raise InvalidReference(f"No notification button at index {index}")

        _, callback = item.buttons[index]
        self._close_active("button")
        callback()

    def clear(self) -> None:
        """Drop every queued item and close the active one without callbacks."""
        self._pending.clear()
        self._close_active("cleared")

    def _activate_next(self) -> None:
        if not self._pending:
            return

        item = self._pending.pop(0)
        self._active = item
        if item.timeout and item.timeout > 0:
            self._timer = self._scheduler.call_later(item.timeout, self._on_timeout, item)

        logger.debug(f"Showing notification {item.id}")
        self._emit(EventType.NOTIFICATION_SHOWN, item)

    def _close_active(self, reason: str) -> Optional[NotificationItem]:
        """
        Deactivate the active item and promote the next one.

        The next item is promoted before any callback of the closed item
        runs, so callbacks that queue more items append to the tail.
        """
        item = self._active
        if item is None:
            return None

        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

        self._active = None
        self._emit(EventType.NOTIFICATION_DISMISSED, item, reason=reason)
        self._activate_next()
        return item

    def _on_timeout(self, item: NotificationItem) -> None:
        # A timer can only dismiss the item it was armed for
        if self._active is not item:
            logger.debug(f"Ignoring stale timer for notification {item.id}")
            return
        self._timer = None
        self.dismiss()

    def _emit(self, event_type: EventType, item: NotificationItem, **extra) -> None:
        if self._event_bus is None:
            return
        data = {"id": item.id, "text": item.text, "tag": item.tag, **extra}
        self._event_bus.emit(event_type, data, "notifications")
