"""
Local command system for the MUD client.

Commands starting with '/' are intercepted before being sent to the game.
"""

from .command_registry import CommandRegistry
from .local_commands import LocalCommands

__all__ = ["CommandRegistry", "LocalCommands"]
