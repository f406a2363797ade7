"""
Unit tests for the event bus.
"""

import asyncio

import pytest
from unittest.mock import MagicMock

from mudclient.src.core.event_bus import EventBus, EventType


class TestEventBus:

    def test_handlers_called_in_subscription_order(self, event_bus):
        calls = []
        event_bus.subscribe(EventType.CONNECTED, lambda e: calls.append("first"))
        event_bus.subscribe(EventType.CONNECTED, lambda e: calls.append("second"))

        event_bus.emit(EventType.CONNECTED, {"url": "ws://x:1/"})

        assert calls == ["first", "second"]

    def test_event_carries_data_and_source(self, event_bus):
        handler = MagicMock()
        event_bus.subscribe(EventType.DATA_RECEIVED, handler)

        event_bus.emit(EventType.DATA_RECEIVED, {"data": b"x"}, "transport")

        event = handler.call_args[0][0]
        assert event.type is EventType.DATA_RECEIVED
        assert event.data == {"data": b"x"}
        assert event.source == "transport"

    def test_other_types_not_delivered(self, event_bus):
        handler = MagicMock()
        event_bus.subscribe(EventType.CONNECTED, handler)
        event_bus.emit(EventType.DISCONNECTED)
        handler.assert_not_called()

    def test_subscribe_once(self, event_bus):
        handler = MagicMock()
        event_bus.subscribe_once(EventType.CONNECTED, handler)

        event_bus.emit(EventType.CONNECTED)
        event_bus.emit(EventType.CONNECTED)

        assert handler.call_count == 1

    def test_unsubscribe(self, event_bus):
        handler = MagicMock()
        event_bus.subscribe(EventType.CONNECTED, handler)
        event_bus.unsubscribe(EventType.CONNECTED, handler)

        event_bus.emit(EventType.CONNECTED)

        handler.assert_not_called()

    def test_failing_handler_does_not_stop_others(self, event_bus):
        after = MagicMock()
        event_bus.subscribe(EventType.CONNECTED, MagicMock(side_effect=RuntimeError("boom")))
        event_bus.subscribe(EventType.CONNECTED, after)

        event_bus.emit(EventType.CONNECTED)

        after.assert_called_once()

    def test_handler_may_unsubscribe_itself(self, event_bus):
        calls = []

        def handler(event):
            calls.append(event)
            event_bus.unsubscribe(EventType.CONNECTED, handler)

        event_bus.subscribe(EventType.CONNECTED, handler)
        event_bus.emit(EventType.CONNECTED)
        event_bus.emit(EventType.CONNECTED)

        assert len(calls) == 1

    def test_buses_are_independent(self):
        first, second = EventBus(), EventBus()
        handler = MagicMock()
        first.subscribe(EventType.CONNECTED, handler)

        second.emit(EventType.CONNECTED)

        handler.assert_not_called()

    def test_clear(self, event_bus):
        handler = MagicMock()
        event_bus.subscribe(EventType.CONNECTED, handler)
        event_bus.subscribe(EventType.DISCONNECTED, handler)

        event_bus.clear(EventType.CONNECTED)
        event_bus.emit(EventType.CONNECTED)
        event_bus.emit(EventType.DISCONNECTED)
        assert handler.call_count == 1

        event_bus.clear()
        event_bus.emit(EventType.DISCONNECTED)
        assert handler.call_count == 1

    @pytest.mark.asyncio
    async def test_async_handler_scheduled_on_loop(self, event_bus):
        received = asyncio.Event()

        async def handler(event):
            received.set()

        event_bus.subscribe(EventType.CONNECTED, handler)
        event_bus.emit(EventType.CONNECTED)

        await asyncio.wait_for(received.wait(), timeout=1)
