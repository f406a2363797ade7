"""
Command registry for local slash commands.

Allows registering handlers for input lines starting with '/' that are
handled by the client itself instead of being sent to the game.
"""

from typing import Callable, Dict, List, Optional, Tuple
from dataclasses import dataclass


@dataclass
class CommandInfo:
    """Information about a registered command."""
    name: str
    handler: Callable[[str], str]
    description: str


class CommandRegistry:
    """Registry for local slash commands.

    Commands are registered with a name (without the leading slash),
    a handler function, and a description. When an input line starts
    with '/', the registry attempts to match and execute the command
    locally instead of sending it to the game.

    Example:
        registry = CommandRegistry()
        registry.register("quit", handle_quit, "Close the connection and exit")

        result = registry.try_handle("/quit")
        if result is not None:
            # Handled locally, result is the text to show (may be empty)
            pass
        else:
            # Not a known command, send to the game as typed
            pass
    """

    def __init__(self):
        self._commands: Dict[str, CommandInfo] = {}

    def register(
        self,
        name: str,
        handler: Callable[[str], str],
        description: str = ""
    ) -> None:
        """Register a command handler.

        Args:
            name: Command name without leading slash (e.g., "quit")
            handler: Function called when command is invoked.
                    Receives the text after the command name.
                    Returns a response string, empty for none.
            description: Human-readable description for help text
        """
        self._commands[name.lower()] = CommandInfo(
            name=name.lower(),
            handler=handler,
            description=description
        )

    def try_handle(self, text: str) -> Optional[str]:
        """Attempt to handle a command.

        Args:
            text: The full input line (e.g., "/connect example.org 4000")

        Returns:
            Handler result if the command was found and executed, None otherwise.
        """
        parsed = self._parse(text)
        if parsed is None:
            return None

        command_name, args = parsed
        cmd = self._commands.get(command_name)
        if cmd is None:
            return None

        return cmd.handler(args)

    def get_commands(self) -> List[Tuple[str, str]]:
        """Get list of all registered commands with descriptions."""
        return [
            (cmd.name, cmd.description)
            for cmd in self._commands.values()
        ]

    def is_command(self, text: str) -> bool:
        """Check if text is a known command."""
        parsed = self._parse(text)
        return parsed is not None and parsed[0] in self._commands

    def complete(self, fragment: str) -> List[str]:
        """Command names starting with a '/'-prefixed fragment."""
        if not fragment.startswith("/"):
            return []
        prefix = fragment[1:].lower()
        return [f"/{name}" for name in sorted(self._commands) if name.startswith(prefix)]

    @staticmethod
    def _parse(text: str) -> Optional[Tuple[str, str]]:
        if not text.startswith("/"):
            return None

        parts = text[1:].split(maxsplit=1)
        if not parts:
            return None

        return parts[0].lower(), parts[1] if len(parts) > 1 else ""
