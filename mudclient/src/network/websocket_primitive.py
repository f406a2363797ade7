"""
WebSocket connection primitive.

Thin wrapper around the websockets client so the transport channel can be
driven by any message-oriented duplex primitive with the same shape.
"""

import asyncio
from typing import Any, Optional, Protocol, Sequence

import websockets

from ..logging_config import get_logger

logger = get_logger(__name__)

BINARY_SUBPROTOCOL = "binary"


class ConnectionPrimitive(Protocol):
    """What the transport channel needs from the underlying connection."""

    def is_available(self) -> bool: ...

    async def connect(self, url: str, subprotocols: Sequence[str]) -> Any: ...


class WebSocketPrimitive:
    """Opens client connections with the websockets library."""

    def __init__(self, open_timeout: Optional[float] = 10.0):
        self.open_timeout = open_timeout

    def is_available(self) -> bool:
        """Connections need a running asyncio event loop to live on."""
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return False
        return True

    async def connect(self, url: str, subprotocols: Sequence[str] = (BINARY_SUBPROTOCOL,)):
        logger.debug(f"Opening websocket {url} (subprotocols={list(subprotocols)})")
        return await websockets.connect(
            url,
            subprotocols=list(subprotocols),
            open_timeout=self.open_timeout,
            compression=None,
        )
