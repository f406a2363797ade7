"""
Unit tests for the websockets-backed connection primitive.
"""

import pytest
from unittest.mock import AsyncMock, patch

from mudclient.src.network.websocket_primitive import BINARY_SUBPROTOCOL, WebSocketPrimitive


class TestWebSocketPrimitive:

    def test_unavailable_without_event_loop(self):
        assert WebSocketPrimitive().is_available() is False

    @pytest.mark.asyncio
    async def test_available_inside_event_loop(self):
        assert WebSocketPrimitive().is_available() is True

    @pytest.mark.asyncio
    async def test_connect_requests_binary_subprotocol(self):
        primitive = WebSocketPrimitive(open_timeout=3)

        with patch(
            "mudclient.src.network.websocket_primitive.websockets.connect",
            new_callable=AsyncMock,
        ) as mock_connect:
            mock_connect.return_value = "handle"
            handle = await primitive.connect("ws://h:1/x", (BINARY_SUBPROTOCOL,))

        assert handle == "handle"
        mock_connect.assert_awaited_once_with(
            "ws://h:1/x",
            subprotocols=["binary"],
            open_timeout=3,
            compression=None,
        )
