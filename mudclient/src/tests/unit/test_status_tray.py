"""
Unit tests for the status tray.
"""

import pytest
from unittest.mock import MagicMock

from mudclient.src.core.event_bus import EventType
from mudclient.src.errors import InvalidReference
from mudclient.src.ui.status_tray import StatusTray


@pytest.fixture
def tray(event_bus):
    return StatusTray(event_bus)


class TestStatusTray:

    def test_add_returns_distinct_ids(self, tray):
        first = tray.add_icon("one")
        second = tray.add_icon("two")
        assert first != second
        assert [icon.text for icon in tray.icons()] == ["one", "two"]

    def test_ids_not_reused_after_remove(self, tray):
        first = tray.add_icon("one")
        tray.remove_icon(first)
        second = tray.add_icon("two")

        assert second != first
        assert first not in tray
        assert second in tray
        assert len(tray) == 1

    def test_update_keeps_omitted_values(self, tray):
        icon_id = tray.add_icon("Disconnected", "connectivity disconnected")

        tray.update_icon(icon_id, text="Connected")

        icon = tray.get(icon_id)
        assert icon.text == "Connected"
        assert icon.tag == "connectivity disconnected"

    def test_unknown_id(self, tray):
        with pytest.raises(InvalidReference):
            tray.update_icon(99, text="x")
        with pytest.raises(InvalidReference):
            tray.remove_icon(99)
        with pytest.raises(LookupError):
            tray.get(99)

    def test_click(self, tray):
        on_click = MagicMock()
        with_callback = tray.add_icon("a", on_click=on_click)
        without_callback = tray.add_icon("b")

        assert tray.click(with_callback) is True
        assert tray.click(without_callback) is False
        on_click.assert_called_once_with()

    def test_events(self, tray, recorder):
        icon_id = tray.add_icon("a", "t")
        tray.update_icon(icon_id, text="b")
        tray.remove_icon(icon_id)

        actions = [event.data["action"] for event in recorder.of(EventType.TRAY_UPDATED)]
        assert actions == ["added", "updated", "removed"]
        assert recorder.of(EventType.TRAY_UPDATED)[1].data["text"] == "b"
