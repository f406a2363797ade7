"""
Transport channel.

Keeps one byte-exact duplex connection to the remote game over a
message-oriented WebSocket. Every send becomes exactly one binary message and
every inbound message surfaces as exactly one byte payload. Outcomes are
published on the event bus; nothing here blocks the caller.
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Optional, Set

from websockets.exceptions import ConnectionClosed

from ..config import Endpoint, SocketConfig, get_config
from ..core.event_bus import EventBus, EventType
from ..core.state_machine import StateMachine, StateTransition
from ..errors import CapabilityUnavailable, ConnectFailed, NotConnected
from ..logging_config import get_logger
from .codec import ByteSource, decode, encode
from .websocket_primitive import BINARY_SUBPROTOCOL, ConnectionPrimitive, WebSocketPrimitive

logger = get_logger(__name__)

# Queued behind pending writes to close the handle once they are flushed
_CLOSE = object()


class ConnectionState(Enum):
    """Transport channel states."""
    IDLE = auto()
    CONNECTING = auto()
    OPEN = auto()
    CLOSED = auto()
    FAILED = auto()


VALID_TRANSITIONS = {
    ConnectionState.IDLE: [ConnectionState.CONNECTING, ConnectionState.CLOSED],
    ConnectionState.CONNECTING: [ConnectionState.OPEN, ConnectionState.FAILED, ConnectionState.CLOSED],
    ConnectionState.OPEN: [ConnectionState.CLOSED],
    ConnectionState.CLOSED: [ConnectionState.CONNECTING],
    ConnectionState.FAILED: [ConnectionState.CONNECTING, ConnectionState.CLOSED],
}


@dataclass(eq=False)
class Connection:
    """One connection attempt and the resources it owns."""
    endpoint: Endpoint
    outbound: asyncio.Queue = field(default_factory=asyncio.Queue)
    handle: Optional[Any] = None
    reader: Optional[asyncio.Task] = None
    writer: Optional[asyncio.Task] = None


class TransportChannel:
    """Byte-exact duplex channel over a message-oriented primitive."""

    def __init__(
        self,
        event_bus: EventBus,
        primitive: Optional[ConnectionPrimitive] = None,
        config: Optional[SocketConfig] = None,
    ):
        self._event_bus = event_bus
        self._config = config or get_config().socket
        self._primitive = primitive or WebSocketPrimitive(open_timeout=self._config.open_timeout)
        self._machine = StateMachine(ConnectionState.IDLE, VALID_TRANSITIONS)
        self._machine.on_any_transition(self._publish_transition)
        self._connection: Optional[Connection] = None
        self._capable: Optional[bool] = None
        self._releasing: Set[asyncio.Task] = set()

    @property
    def state(self) -> ConnectionState:
        """Get current connection state."""
        return self._machine.current_state

    @property
    def is_open(self) -> bool:
        return self.state is ConnectionState.OPEN

    @property
    def endpoint(self) -> Optional[Endpoint]:
        """Endpoint of the current attempt, if any."""
        return self._connection.endpoint if self._connection else None

    def open(self, endpoint: Optional[Endpoint] = None) -> None:
        """
        Start a connection attempt.

        The endpoint is resolved from configuration at call time unless one
        is given. Any attempt already connecting or open is closed first.

        Raises:
            CapabilityUnavailable: If the primitive cannot run here at all.
        """
        self._check_capability()

        if self._connection is not None:
            logger.info("Superseding the current connection")
            self.close()

        endpoint = endpoint or self._config.resolve_endpoint()
        connection = Connection(endpoint=endpoint)
        self._connection = connection

        logger.info(f"Connecting to {endpoint.url}")
        self._machine.transition_to(ConnectionState.CONNECTING, {"url": endpoint.url})
        self._event_bus.emit(EventType.CONNECTING, {"url": endpoint.url}, "transport")

        connection.reader = asyncio.get_running_loop().create_task(self._run(connection))

    def send(self, data: ByteSource) -> None:
        """
        Queue one message for the remote host.

        Raises:
            NotConnected: If the channel is not open.
            ValueError: If data holds values outside [0, 255].
        """
        connection = self._connection
        if connection is None or not self.is_open:
            raise NotConnected("The transport channel is not currently connected.")

        connection.outbound.put_nowait(encode(data))

    def close(self) -> None:
        """Close the channel. Safe to call from any state, any number of times."""
        connection, self._connection = self._connection, None
        was_open = self.is_open

        if connection is not None:
            self._release(connection)

        if self.state is not ConnectionState.CLOSED:
            self._machine.transition_to(ConnectionState.CLOSED)

        if was_open:
            logger.info("Disconnected from server")
            self._event_bus.emit(EventType.DISCONNECTED, {"reason": "local"}, "transport")

    async def shutdown(self) -> None:
        """Close the channel and wait until every released handle is gone."""
        self.close()
        while self._releasing:
            await asyncio.gather(*list(self._releasing), return_exceptions=True)

    def _check_capability(self) -> None:
        if self._capable is None:
            self._capable = self._primitive.is_available()
            if not self._capable:
                logger.error("Connection primitive is unavailable in this environment")
                self._event_bus.emit(EventType.CAPABILITY_UNAVAILABLE, {}, "transport")

        if not self._capable:
            raise CapabilityUnavailable("Unable to create a WebSocket in this environment.")

    async def _run(self, connection: Connection) -> None:
        """Connect, then pump inbound messages until the connection ends."""
        url = connection.endpoint.url
        try:
            handle = await self._primitive.connect(url, (BINARY_SUBPROTOCOL,))
        except asyncio.CancelledError:
            raise
        except Exception as e:
            if connection is self._connection:
                self._fail(connection, e)
            return

        connection.handle = handle
        if connection is not self._connection:
            # Superseded or closed while the handshake was in flight
            await self._close_handle(handle)
            return

        # The writer exists before any handler can close or supersede us
        connection.writer = asyncio.create_task(self._write_loop(connection))

        self._machine.transition_to(ConnectionState.OPEN, {"url": url})
        if connection is self._connection:
            self._event_bus.emit(EventType.CONNECTED, {"url": url}, "transport")
        if connection is not self._connection:
            # A handler above closed or replaced this connection; the released
            # writer closes the handle
            return

        try:
            async for message in handle:
                if connection is not self._connection:
                    break
                self._deliver(message)
        except ConnectionClosed as e:
            logger.warning(f"Connection closed by server: {e}")
        finally:
            if connection is self._connection:
                self._remote_closed(connection)

    async def _write_loop(self, connection: Connection) -> None:
        """Single writer so messages leave in the order send() accepted them."""
        handle = connection.handle
        try:
            while True:
                payload = await connection.outbound.get()
                if payload is _CLOSE:
                    break
                await handle.send(payload)
        except ConnectionClosed:
            dropped = connection.outbound.qsize()
            logger.warning(f"Connection closed with {dropped} message(s) unsent")
        finally:
            await self._close_handle(handle)

    def _deliver(self, message) -> None:
        data = decode(message)
        logger.debug(f"Received {len(data)} bytes")
        self._event_bus.emit(EventType.DATA_RECEIVED, {"data": data}, "transport")

    def _remote_closed(self, connection: Connection) -> None:
        self._connection = None
        self._release(connection)
        self._machine.transition_to(ConnectionState.CLOSED)
        logger.info("Connection closed by remote host")
        self._event_bus.emit(EventType.DISCONNECTED, {"reason": "remote"}, "transport")

    def _fail(self, connection: Connection, error: Exception) -> None:
        self._connection = None
        failure = ConnectFailed(connection.endpoint.url, str(error) or type(error).__name__)
        logger.error(str(failure))
        self._machine.transition_to(ConnectionState.FAILED, {"url": connection.endpoint.url})
        self._event_bus.emit(EventType.CONNECTION_FAILED, {"error": failure}, "transport")

    def _release(self, connection: Connection) -> None:
        """Detach a connection: stop reading, flush queued writes, close the handle."""
        current = asyncio.current_task() if self._has_running_loop() else None

        if connection.reader is not None and connection.reader is not current:
            connection.reader.cancel()
            self._track(connection.reader)

        if connection.writer is not None:
            connection.outbound.put_nowait(_CLOSE)
            self._track(connection.writer)

    def _track(self, task: asyncio.Task) -> None:
        if not task.done():
            self._releasing.add(task)
            task.add_done_callback(self._releasing.discard)

    async def _close_handle(self, handle) -> None:
        try:
            await handle.close()
        except Exception as e:
            logger.warning(f"Error closing websocket: {e}")

    @staticmethod
    def _has_running_loop() -> bool:
        try:
            asyncio.get_running_loop()
        except RuntimeError:
            return False
        return True

    def _publish_transition(self, transition: StateTransition) -> None:
        self._event_bus.emit(
            EventType.STATE_CHANGED,
            {
                "from": transition.from_state.name if transition.from_state else None,
                "to": transition.to_state.name,
                "data": transition.data,
            },
            "transport"
        )
