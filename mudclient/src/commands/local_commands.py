"""
Slash commands every front end offers.

Lines such as "/connect" or "/password" are handled by the client itself.
Front ends hand each typed line to ``dispatch`` before it reaches the game.
"""

from typing import Callable

from ..logging_config import get_logger
from ..session import Session
from ..ui.display import NOTICE
from .command_registry import CommandRegistry

logger = get_logger(__name__)


class LocalCommands:
    """Local commands bound to one session."""

    def __init__(self, session: Session, on_quit: Callable[[], None]):
        self.session = session
        self.on_quit = on_quit
        self.registry = CommandRegistry()
        self._register_commands()
        # Tab completes command names
        session.input.completion_provider = self.registry.complete

    def _register_commands(self) -> None:
        self.registry.register("connect", self._cmd_connect, "Connect, optionally to HOST [PORT]")
        self.registry.register("disconnect", self._cmd_disconnect, "Close the connection")
        self.registry.register("password", self._cmd_password, "Hide the next line you type")
        self.registry.register("history", self._cmd_history, "List recently sent lines")
        self.registry.register("help", self._cmd_help, "List local commands")
        self.registry.register("quit", self._cmd_quit, "Disconnect and exit")

    def dispatch(self, line: str) -> bool:
        """
        Run a local command if the line is one.

        Returns:
            True if the line was handled here and must not reach the game.
        """
        try:
            result = self.registry.try_handle(line)
        except ValueError as e:
            self._show(f"Bad arguments: {e}")
            return True

        if result is None:
            return False
        if result:
            self._show(result)
        return True

    def submit_input(self) -> None:
        """Submit the input line, running it here instead when it is a command."""
        controller = self.session.input
        text = controller.text
        if not controller.is_masked and self.registry.is_command(text):
            # Cleared first so a command that masks input starts from empty
            controller.clear()
            self.dispatch(text)
            return

        was_masked = controller.is_masked
        controller.submit()
        if was_masked:
            # Hidden entry lasts for a single line
            self.session.set_echo(True)

    def _show(self, text: str) -> None:
        if self.session.display is not None:
            self.session.display.show(text, NOTICE)

    # -- commands ----------------------------------------------------------

    def _cmd_connect(self, args: str) -> str:
        socket_config = self.session.config.socket
        parts = args.split()
        if parts:
            socket_config.host = parts[0]
        if len(parts) > 1:
            socket_config.port = int(parts[1])
        logger.info(f"Connect requested to {socket_config.host}:{socket_config.port}")
        self.session.connect()
        return ""

    def _cmd_disconnect(self, args: str) -> str:
        self.session.disconnect()
        return ""

    def _cmd_password(self, args: str) -> str:
        self.session.set_echo(False)
        return "Input hidden for the next line."

    def _cmd_history(self, args: str) -> str:
        entries = self.session.input.history.entries
        if not entries:
            return "No history yet."
        return "\n".join(f"{i:3d}  {line}" for i, line in enumerate(entries, 1))

    def _cmd_help(self, args: str) -> str:
        return "\n".join(f"/{name:<12} {description}" for name, description in self.registry.get_commands())

    def _cmd_quit(self, args: str) -> str:
        self.on_quit()
        return "Goodbye."
