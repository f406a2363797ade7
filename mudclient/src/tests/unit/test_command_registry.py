"""
Unit tests for the local slash command registry.
"""

import pytest
from unittest.mock import MagicMock

from mudclient.src.commands import CommandRegistry


@pytest.fixture
def registry():
    registry = CommandRegistry()
    registry.register("connect", MagicMock(return_value=""), "Connect")
    registry.register("Quit", MagicMock(return_value="Goodbye."), "Exit")
    return registry


class TestCommandRegistry:

    def test_handles_known_command_with_args(self, registry):
        assert registry.try_handle("/connect mud.example.org 4000") == ""
        handler = registry._commands["connect"].handler
        handler.assert_called_once_with("mud.example.org 4000")

    def test_names_are_case_insensitive(self, registry):
        assert registry.try_handle("/QUIT") == "Goodbye."

    def test_unknown_command_not_handled(self, registry):
        assert registry.try_handle("/dance") is None

    def test_plain_text_not_handled(self, registry):
        assert registry.try_handle("say /quit") is None
        assert registry.try_handle("/") is None

    def test_is_command(self, registry):
        assert registry.is_command("/connect") is True
        assert registry.is_command("/nope") is False
        assert registry.is_command("connect") is False

    def test_get_commands(self, registry):
        assert registry.get_commands() == [("connect", "Connect"), ("quit", "Exit")]

    def test_complete(self, registry):
        assert registry.complete("/c") == ["/connect"]
        assert registry.complete("/") == ["/connect", "/quit"]
        assert registry.complete("c") == []
