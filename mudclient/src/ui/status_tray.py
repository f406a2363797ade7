"""
Status tray.

Registry of small status indicators (connectivity and the like) that the
presentation layer draws next to the input line. Icons are addressed by id;
ids are never reused, so removing one cannot shift the others.
"""

import itertools
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional

from ..core.event_bus import EventBus, EventType
from ..errors import InvalidReference


@dataclass
class TrayIcon:
    id: int
    text: str
    tag: str = ""
    on_click: Optional[Callable[[], None]] = None


class StatusTray:
    """Sparse id -> icon map."""

    def __init__(self, event_bus: Optional[EventBus] = None):
        self._event_bus = event_bus
        self._icons: Dict[int, TrayIcon] = {}
        self._next_id = itertools.count()

    def __len__(self) -> int:
        return len(self._icons)

    def __contains__(self, icon_id: int) -> bool:
        return icon_id in self._icons

    def add_icon(self, text: str, tag: str = "", on_click: Optional[Callable[[], None]] = None) -> int:
        icon = TrayIcon(id=next(self._next_id), text=text, tag=tag, on_click=on_click)
        self._icons[icon.id] = icon
        self._emit("added", icon)
        return icon.id

    def get(self, icon_id: int) -> TrayIcon:
        try:
            return self._icons[icon_id]
        except KeyError:
            raise InvalidReference(f"Invalid icon id {icon_id}") from None

    def update_icon(self, icon_id: int, text: Optional[str] = None, tag: Optional[str] = None) -> TrayIcon:
        """Change an icon's text and/or tag. Omitted values are kept."""
        icon = self.get(icon_id)
        if text:
            icon.text = text
        if tag:
            icon.tag = tag
        self._emit("updated", icon)
        return icon

    def remove_icon(self, icon_id: int) -> None:
        icon = self.get(icon_id)
        del self._icons[icon_id]
        self._emit("removed", icon)

    def click(self, icon_id: int) -> bool:
        """Run the icon's click callback. Returns False if it has none."""
        icon = self.get(icon_id)
        if icon.on_click is None:
            return False
        icon.on_click()
        return True

    def icons(self) -> List[TrayIcon]:
        """Icons in the order they were added."""
        return list(self._icons.values())

    def _emit(self, action: str, icon: TrayIcon) -> None:
        if self._event_bus is not None:
            self._event_bus.emit(
                EventType.TRAY_UPDATED,
                {"action": action, "id": icon.id, "text": icon.text, "tag": icon.tag},
                "tray"
            )
