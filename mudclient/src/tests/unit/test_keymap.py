"""
Unit tests for keyboard translation.

Uses real pygame event objects; no display is initialised.
"""

import pygame
import pytest

from mudclient.src.config import KeyBindings
from mudclient.src.core.event_bus import EventType
from mudclient.src.input.input_controller import InputController
from mudclient.src.input.keymap import InputAction, KeyTranslator


def key_event(key, unicode="", mod=0):
    return pygame.event.Event(pygame.KEYDOWN, key=key, unicode=unicode, mod=mod)


@pytest.fixture
def controller(event_bus):
    return InputController(event_bus, completion_provider=lambda fragment: ["north"])


@pytest.fixture
def translator(controller, event_bus):
    return KeyTranslator(controller, event_bus)


def type_text(translator, text):
    for char in text:
        translator.handle_event(key_event(ord(char), unicode=char))


class TestKeyTranslator:

    def test_printable_keys_insert_text(self, translator, controller):
        type_text(translator, "look")
        assert controller.text == "look"

    def test_return_submits(self, translator, controller, recorder):
        type_text(translator, "look")

        assert translator.handle_event(key_event(pygame.K_RETURN, "\r")) is True

        assert controller.text == ""
        assert recorder.of(EventType.INPUT_SUBMITTED)[0].data["text"] == "look"

    def test_shift_return_breaks_line(self, translator, controller):
        type_text(translator, "a")
        translator.handle_event(key_event(pygame.K_RETURN, "\r", pygame.KMOD_LSHIFT))
        type_text(translator, "b")
        assert controller.text == "a\nb"

    def test_arrow_keys_recall(self, translator, controller):
        type_text(translator, "look")
        translator.handle_event(key_event(pygame.K_RETURN))

        translator.handle_event(key_event(pygame.K_UP))
        assert controller.text == "look"

        translator.handle_event(key_event(pygame.K_DOWN))
        assert controller.text == ""

    def test_tab_completes(self, translator, controller):
        type_text(translator, "no")
        translator.handle_event(key_event(pygame.K_TAB, "\t"))
        assert controller.text == "north"

    def test_page_keys_request_scroll(self, translator, recorder):
        translator.handle_event(key_event(pygame.K_PAGEUP))
        translator.handle_event(key_event(pygame.K_PAGEDOWN))

        directions = [event.data["direction"] for event in recorder.of(EventType.SCROLL_REQUESTED)]
        assert directions == ["up", "down"]

    def test_non_keydown_ignored(self, translator):
        event = pygame.event.Event(pygame.KEYUP, key=pygame.K_RETURN, mod=0)
        assert translator.handle_event(event) is False

    def test_unbound_non_printable_ignored(self, translator, controller):
        assert translator.handle_event(key_event(pygame.K_F1)) is False
        assert controller.text == ""

    def test_custom_bindings(self, controller, event_bus):
        translator = KeyTranslator(controller, event_bus, KeyBindings(complete=["escape"]))

        assert translator.action_for(pygame.K_ESCAPE) is InputAction.COMPLETE
        assert translator.action_for(pygame.K_TAB) is None

    def test_unknown_key_name_skipped(self, controller, event_bus):
        translator = KeyTranslator(controller, event_bus, KeyBindings(submit=["bogus", "return"]))
        assert translator.action_for(pygame.K_RETURN) is InputAction.SUBMIT

    def test_submit_handler_replaces_submit(self, controller, event_bus, recorder):
        handled = []
        translator = KeyTranslator(controller, event_bus, submit_handler=lambda: handled.append(controller.text))
        type_text(translator, "/help")

        translator.handle_event(key_event(pygame.K_RETURN, "\r"))

        assert handled == ["/help"]
        assert recorder.of(EventType.INPUT_SUBMITTED) == []
