"""Network layer for byte-exact WebSocket communication."""

from .codec import decode, encode
from .connection import ConnectionState, TransportChannel
from .websocket_primitive import WebSocketPrimitive

__all__ = [
    "ConnectionState",
    "TransportChannel",
    "WebSocketPrimitive",
    "decode",
    "encode",
]
