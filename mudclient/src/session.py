"""
Session façade.

Wires one transport channel, input controller, notification queue and status
tray together around a private event bus. Everything a session needs hangs
off the instance, so several sessions can run side by side in one process.
"""

import codecs
from typing import Optional

from .config import ClientConfig, Endpoint, get_config
from .core.event_bus import Event, EventBus, EventType
from .core.scheduler import AsyncioScheduler, Scheduler
from .errors import NotConnected
from .input.completion import CompletionProvider
from .input.input_controller import InputController
from .input.line_buffer import EchoMode
from .logging_config import get_logger
from .network.connection import TransportChannel
from .network.websocket_primitive import ConnectionPrimitive
from .ui.display import NOTICE, OUTPUT, DisplaySink
from .ui.notification_queue import NotificationQueue
from .ui.status_tray import StatusTray

logger = get_logger(__name__)


class Session:
    """One operator's connection to one remote game."""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        display: Optional[DisplaySink] = None,
        primitive: Optional[ConnectionPrimitive] = None,
        scheduler: Optional[Scheduler] = None,
        completion_provider: Optional[CompletionProvider] = None,
    ):
        self.config = config or get_config()
        self.display = display
        self.event_bus = EventBus()

        self.transport = TransportChannel(self.event_bus, primitive, self.config.socket)
        self.input = InputController.from_config(
            self.event_bus,
            self.config.interface,
            display=display,
            completion_provider=completion_provider,
        )
        self.notifications = NotificationQueue(scheduler or AsyncioScheduler(), self.event_bus)
        self.tray = StatusTray(self.event_bus)
        self.connectivity_icon = self.tray.add_icon(
            "You are currently disconnected.", "connectivity disconnected"
        )

        self._decoder = self._new_decoder()
        self._subscribe()

    def _subscribe(self) -> None:
        bus = self.event_bus
        bus.subscribe(EventType.DATA_RECEIVED, self._on_data)
        bus.subscribe(EventType.INPUT_SUBMITTED, self._on_submit)
        bus.subscribe(EventType.CONNECTING, self._on_connecting)
        bus.subscribe(EventType.CONNECTED, self._on_connected)
        bus.subscribe(EventType.DISCONNECTED, self._on_disconnected)
        bus.subscribe(EventType.CONNECTION_FAILED, self._on_failed)
        bus.subscribe(EventType.CAPABILITY_UNAVAILABLE, self._on_capability_unavailable)

    def _new_decoder(self):
        return codecs.getincrementaldecoder(self.config.interface.encoding)(errors="replace")

    # -- commands ----------------------------------------------------------

    def connect(self, endpoint: Optional[Endpoint] = None) -> None:
        """Start connecting; progress arrives as events."""
        self._decoder = self._new_decoder()
        self.transport.open(endpoint)

    def disconnect(self) -> None:
        self.transport.close()

    async def shutdown(self) -> None:
        """Disconnect and release every resource the session holds."""
        await self.transport.shutdown()
        self.notifications.clear()

    def send_line(self, text: str) -> None:
        """
        Send one line of input to the remote game.

        Raises:
            NotConnected: If the transport is not open.
            UnicodeEncodeError: If the text does not fit the configured encoding.
        """
        interface = self.config.interface
        self.transport.send((text + interface.line_ending).encode(interface.encoding))

    def set_echo(self, echo: bool) -> None:
        """Turn local echo on (plain entry) or off (masked entry)."""
        self.input.set_echo_mode(EchoMode.PLAIN if echo else EchoMode.MASKED)

    def display_key(self, char: str) -> None:
        """A key pressed over the output pane goes to the input line."""
        if not self.input.has_focus:
            self.input.focus()
        self.input.insert_text(char)

    # -- event handlers ----------------------------------------------------

    def _show(self, text: str, tag: str) -> None:
        if self.display is not None:
            self.display.show(text, tag)

    def _on_data(self, event: Event) -> None:
        text = self._decoder.decode(event.data["data"])
        if text:
            self._show(text, OUTPUT)

    def _on_submit(self, event: Event) -> None:
        try:
            self.send_line(event.data["text"])
        except NotConnected:
            logger.warning("Input not sent: not connected")
            self._show("You are not connected.", NOTICE)
        except UnicodeEncodeError:
            # The line may be masked, so its text stays out of the log
            encoding = self.config.interface.encoding
            logger.warning(f"Input not sent: not encodable as {encoding}")
            self._show(f"Input not sent: it cannot be encoded as {encoding}.", NOTICE)

    def _on_connecting(self, event: Event) -> None:
        self.tray.update_icon(
            self.connectivity_icon, "Attempting to connect.", "connectivity connecting"
        )

    def _on_connected(self, event: Event) -> None:
        self.tray.update_icon(
            self.connectivity_icon, "You are currently connected.", "connectivity connected"
        )
        self._show(f"Connected to {event.data['url']}.", NOTICE)

    def _on_disconnected(self, event: Event) -> None:
        self.tray.update_icon(
            self.connectivity_icon, "You are currently disconnected.", "connectivity disconnected"
        )
        # Bytes of a half-received character will never be completed
        tail = self._decoder.decode(b"", final=True)
        if tail:
            self._show(tail, OUTPUT)
        self.notifications.notify(
            "You have been disconnected.",
            tag="warning",
            timeout=self.config.interface.notice_timeout,
        )

    def _on_failed(self, event: Event) -> None:
        self.tray.update_icon(
            self.connectivity_icon, "You are currently disconnected.", "connectivity disconnected"
        )
        self.notifications.notify(str(event.data["error"]), tag="error")

    def _on_capability_unavailable(self, event: Event) -> None:
        self.notifications.notify(
            "Unable to create a WebSocket connection in this environment.", tag="error"
        )
