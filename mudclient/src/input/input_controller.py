"""
Interactive input controller.

Turns keystrokes into submitted lines. Owns the line buffer, the echo mode,
the recall history and the tab-completion cycle. Masked text never leaves
this class except inside the submit event, so a password typed here cannot
reach a display collaborator even if the front end forgets to hide it.
"""

from typing import Optional

from ..config import InterfaceConfig
from ..core.event_bus import EventBus, EventType
from ..logging_config import get_logger
from ..ui.display import USER_INPUT, DisplaySink
from .completion import CompletionProvider, CompletionRequest
from .history import HistoryList
from .line_buffer import EchoMode, LineBuffer

logger = get_logger(__name__)


class InputController:
    """State machine from keystrokes to submitted lines."""

    def __init__(
        self,
        event_bus: EventBus,
        display: Optional[DisplaySink] = None,
        completion_provider: Optional[CompletionProvider] = None,
        history_size: int = 15,
        echo_mode: EchoMode = EchoMode.PLAIN,
    ):
        self._event_bus = event_bus
        self._display = display
        self.completion_provider = completion_provider
        self._initial_echo_mode = EchoMode(echo_mode)

        self.buffer = LineBuffer(echo_mode=self._initial_echo_mode)
        self.history = HistoryList(history_size)
        self._completion: Optional[CompletionRequest] = None
        # Plain-mode text set aside while masked entry is in progress
        self._plain_stash = ""
        self.has_focus = False

    @classmethod
    def from_config(
        cls,
        event_bus: EventBus,
        config: InterfaceConfig,
        display: Optional[DisplaySink] = None,
        completion_provider: Optional[CompletionProvider] = None,
    ) -> "InputController":
        return cls(
            event_bus,
            display=display,
            completion_provider=completion_provider,
            history_size=config.history_size,
            echo_mode=EchoMode(config.initial_echo_mode),
        )

    @property
    def text(self) -> str:
        return self.buffer.text

    @property
    def echo_mode(self) -> EchoMode:
        return self.buffer.echo_mode

    @property
    def is_masked(self) -> bool:
        return self.buffer.is_masked

    @property
    def completion(self) -> Optional[CompletionRequest]:
        """The active completion cycle, if any."""
        return self._completion

    # -- editing -----------------------------------------------------------

    def insert_text(self, chars: str) -> None:
        """Insert typed characters at the cursor."""
        if not chars:
            return
        self._completion = None
        self.buffer.insert(chars)
        self._publish_change()

    def insert_newline(self) -> None:
        """Break the line to build a multi-line block. Ignored while masked."""
        self._completion = None
        if self.is_masked:
            return
        self.buffer.insert("\n")
        self._publish_change()

    def delete_backward(self) -> None:
        self._completion = None
        if self.buffer.delete_backward():
            self._publish_change()

    def delete_forward(self) -> None:
        self._completion = None
        if self.buffer.delete_forward():
            self._publish_change()

    def move_cursor(self, delta: int) -> None:
        self._completion = None
        self.buffer.move_cursor(delta)
        self._publish_change()

    def cursor_home(self) -> None:
        self._completion = None
        self.buffer.cursor_home()
        self._publish_change()

    def cursor_end(self) -> None:
        self._completion = None
        self.buffer.cursor_end()
        self._publish_change()

    # -- submit ------------------------------------------------------------

    def submit(self) -> str:
        """
        Submit the buffer.

        Empty lines are still submitted, since a blank line can mean
        something to the remote game, but they never enter the history.

        Returns:
            The submitted text.
        """
        text = self.buffer.text
        mode = self.buffer.echo_mode
        self._completion = None

        if mode is EchoMode.PLAIN:
            self.history.push(text)
            if self._display is not None:
                self._display.show(text, USER_INPUT)
            logger.debug(f"Submitted line ({len(text)} chars)")
        else:
            self.history.reset()
            logger.debug("Submitted masked line")

        self.buffer.clear()
        self._event_bus.emit(
            EventType.INPUT_SUBMITTED,
            {"text": text, "echo_mode": mode},
            "input"
        )
        self._publish_change()
        return text

    # -- recall ------------------------------------------------------------

    def recall_previous(self) -> bool:
        """Replace the buffer with the previous history entry."""
        self._completion = None
        if self.is_masked:
            return False

        recalled = self.history.previous(self.buffer.text)
        if recalled is None:
            return False

        self.buffer.replace(recalled)
        self._publish_change()
        return True

    def recall_next(self) -> bool:
        """Replace the buffer with the next history entry, or the saved text."""
        self._completion = None
        if self.is_masked:
            return False

        recalled = self.history.next()
        if recalled is None:
            return False

        self.buffer.replace(recalled)
        self._publish_change()
        return True

    # -- completion --------------------------------------------------------

    def complete(self) -> bool:
        """
        Complete the word at the cursor, or cycle to the next candidate.

        Returns:
            True if the buffer changed.
        """
        if self.is_masked or self.completion_provider is None:
            self._completion = None
            return False

        request = self._completion
        if request is None:
            start, fragment = self.buffer.fragment_at_cursor()
            if not fragment:
                return False

            candidates = list(self.completion_provider(fragment))
            if not candidates:
                return False

            request = CompletionRequest(fragment=fragment, start=start, candidates=candidates)
            self.buffer.replace_range(start, self.buffer.cursor, request.current)
            self._completion = request
        else:
            previous_end = request.end
            request.advance()
            self.buffer.replace_range(request.start, previous_end, request.current)

        self._event_bus.emit(
            EventType.COMPLETION_CYCLED,
            {
                "fragment": request.fragment,
                "candidate": request.current,
                "index": request.index,
                "count": len(request.candidates),
            },
            "input"
        )
        self._publish_change()
        return True

    # -- modes -------------------------------------------------------------

    def set_echo_mode(self, mode: EchoMode) -> None:
        """
        Switch between plain and masked entry.

        Entering masked mode sets the plain text aside and starts masked entry
        empty; leaving it puts the plain text back exactly as it was.
        """
        mode = EchoMode(mode)
        if mode is self.buffer.echo_mode:
            return

        self._completion = None
        self.history.reset()

        if mode is EchoMode.MASKED:
            self._plain_stash = self.buffer.text
            self.buffer.clear()
        else:
            self.buffer.replace(self._plain_stash)
            self._plain_stash = ""

        self.buffer.echo_mode = mode
        logger.debug(f"Echo mode is now {mode.value}")
        self._event_bus.emit(EventType.ECHO_MODE_CHANGED, {"echo_mode": mode}, "input")
        self._publish_change()

    def focus(self) -> None:
        self._set_focus(True)

    def blur(self) -> None:
        self._set_focus(False)

    def _set_focus(self, focused: bool) -> None:
        if focused == self.has_focus:
            return
        self.has_focus = focused
        self._event_bus.emit(EventType.INPUT_FOCUS_CHANGED, {"focused": focused}, "input")

    def clear(self) -> None:
        """Empty the buffer without submitting it."""
        self._completion = None
        self.history.reset()
        self.buffer.clear()
        self._publish_change()

    def reset(self) -> None:
        """Drop all input state and return to the initial echo mode."""
        self._completion = None
        self._plain_stash = ""
        self.history.clear()
        self.buffer.clear()
        if self.buffer.echo_mode is not self._initial_echo_mode:
            self.buffer.echo_mode = self._initial_echo_mode
            self._event_bus.emit(EventType.ECHO_MODE_CHANGED, {"echo_mode": self._initial_echo_mode}, "input")
        self._publish_change()

    def _publish_change(self) -> None:
        if self.is_masked:
            data = {"masked": True, "length": len(self.buffer.text), "line_count": 1}
        else:
            data = {
                "masked": False,
                "text": self.buffer.text,
                "cursor": self.buffer.cursor,
                "line_count": self.buffer.line_count,
            }
        self._event_bus.emit(EventType.INPUT_CHANGED, data, "input")
