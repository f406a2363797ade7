"""
Keyboard handling for the line editor.

Maps pygame keyboard events to input controller operations using the key
bindings from the configuration.
"""

import pygame
from typing import Callable, Dict, Optional
from enum import Enum, auto

from ..config import KeyBindings
from ..core.event_bus import EventBus, EventType
from ..logging_config import get_logger
from .input_controller import InputController

logger = get_logger(__name__)


class InputAction(Enum):
    """Editor actions that keys can be bound to."""
    SUBMIT = auto()
    NEWLINE = auto()
    RECALL_PREVIOUS = auto()
    RECALL_NEXT = auto()
    COMPLETE = auto()
    BACKSPACE = auto()
    DELETE = auto()
    CURSOR_LEFT = auto()
    CURSOR_RIGHT = auto()
    CURSOR_HOME = auto()
    CURSOR_END = auto()
    SCROLL_UP = auto()
    SCROLL_DOWN = auto()


KEY_NAMES: Dict[str, int] = {
    "return": pygame.K_RETURN,
    "kp_enter": pygame.K_KP_ENTER,
    "tab": pygame.K_TAB,
    "backspace": pygame.K_BACKSPACE,
    "delete": pygame.K_DELETE,
    "up": pygame.K_UP,
    "down": pygame.K_DOWN,
    "left": pygame.K_LEFT,
    "right": pygame.K_RIGHT,
    "home": pygame.K_HOME,
    "end": pygame.K_END,
    "pageup": pygame.K_PAGEUP,
    "pagedown": pygame.K_PAGEDOWN,
    "escape": pygame.K_ESCAPE,
}


class KeyTranslator:
    """Feeds pygame key events into an input controller."""

    def __init__(
        self,
        controller: InputController,
        event_bus: EventBus,
        bindings: Optional[KeyBindings] = None,
        submit_handler: Optional[Callable[[], None]] = None,
    ):
        self.controller = controller
        self.event_bus = event_bus
        self.bindings = bindings or KeyBindings()
        # Front ends that run local commands take over submission
        self.submit_handler = submit_handler or controller.submit
        self._setup_key_mapping()

    def _setup_key_mapping(self) -> None:
        """Setup key to action mapping from config."""
        self.key_map: Dict[int, InputAction] = {}

        binding_fields = {
            InputAction.SUBMIT: self.bindings.submit,
            InputAction.RECALL_PREVIOUS: self.bindings.recall_previous,
            InputAction.RECALL_NEXT: self.bindings.recall_next,
            InputAction.COMPLETE: self.bindings.complete,
            InputAction.BACKSPACE: self.bindings.backspace,
            InputAction.DELETE: self.bindings.delete,
            InputAction.CURSOR_LEFT: self.bindings.cursor_left,
            InputAction.CURSOR_RIGHT: self.bindings.cursor_right,
            InputAction.CURSOR_HOME: self.bindings.cursor_home,
            InputAction.CURSOR_END: self.bindings.cursor_end,
            InputAction.SCROLL_UP: self.bindings.scroll_up,
            InputAction.SCROLL_DOWN: self.bindings.scroll_down,
        }

        for action, key_names in binding_fields.items():
            for key_name in key_names:
                key = self._key_name_to_code(key_name)
                if key:
                    self.key_map[key] = action
                else:
                    logger.warning(f"Unknown key name {key_name!r} bound to {action.name}")

    def _key_name_to_code(self, key_name: str) -> int:
        """Convert key name to pygame key code."""
        return KEY_NAMES.get(key_name.lower(), 0)

    def action_for(self, key: int, mod: int = 0) -> Optional[InputAction]:
        action = self.key_map.get(key)
        if action is InputAction.SUBMIT and mod & pygame.KMOD_SHIFT:
            return InputAction.NEWLINE
        return action

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Process one pygame event.

        Returns:
            True if the event was consumed by the line editor.
        """
        if event.type != pygame.KEYDOWN:
            return False

        action = self.action_for(event.key, getattr(event, "mod", 0))
        if action is not None:
            self.perform(action)
            return True

        text = getattr(event, "unicode", "")
        if text and text.isprintable():
            self.controller.insert_text(text)
            return True

        return False

    def perform(self, action: InputAction) -> None:
        """Run the controller operation bound to an action."""
        controller = self.controller
        if action is InputAction.SUBMIT:
            self.submit_handler()
        elif action is InputAction.NEWLINE:
            controller.insert_newline()
        elif action is InputAction.RECALL_PREVIOUS:
            controller.recall_previous()
        elif action is InputAction.RECALL_NEXT:
            controller.recall_next()
        elif action is InputAction.COMPLETE:
            controller.complete()
        elif action is InputAction.BACKSPACE:
            controller.delete_backward()
        elif action is InputAction.DELETE:
            controller.delete_forward()
        elif action is InputAction.CURSOR_LEFT:
            controller.move_cursor(-1)
        elif action is InputAction.CURSOR_RIGHT:
            controller.move_cursor(1)
        elif action is InputAction.CURSOR_HOME:
            controller.cursor_home()
        elif action is InputAction.CURSOR_END:
            controller.cursor_end()
        elif action is InputAction.SCROLL_UP:
            self.event_bus.emit(EventType.SCROLL_REQUESTED, {"direction": "up"}, "input")
        elif action is InputAction.SCROLL_DOWN:
            self.event_bus.emit(EventType.SCROLL_REQUESTED, {"direction": "down"}, "input")
