"""
Line buffer for the input controller.

Holds the text being edited, the edit position and the echo mode. Echo mode
is a plain flag; how masked text is drawn is up to the presentation layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


class EchoMode(str, Enum):
    PLAIN = "plain"
    MASKED = "masked"


@dataclass
class LineBuffer:
    """In-progress text with a cursor."""
    text: str = ""
    cursor: int = 0
    echo_mode: EchoMode = EchoMode.PLAIN

    @property
    def line_count(self) -> int:
        return self.text.count("\n") + 1

    @property
    def is_masked(self) -> bool:
        return self.echo_mode is EchoMode.MASKED

    def insert(self, chars: str) -> None:
        self.text = self.text[:self.cursor] + chars + self.text[self.cursor:]
        self.cursor += len(chars)

    def delete_backward(self) -> bool:
        if self.cursor == 0:
            return False
        self.text = self.text[:self.cursor - 1] + self.text[self.cursor:]
        self.cursor -= 1
        return True

    def delete_forward(self) -> bool:
        if self.cursor >= len(self.text):
            return False
        self.text = self.text[:self.cursor] + self.text[self.cursor + 1:]
        return True

    def move_cursor(self, delta: int) -> None:
        self.cursor = max(0, min(len(self.text), self.cursor + delta))

    def cursor_home(self) -> None:
        self.cursor = 0

    def cursor_end(self) -> None:
        self.cursor = len(self.text)

    def replace(self, text: str) -> None:
        """Swap in new text wholesale, cursor at the end."""
        self.text = text
        self.cursor = len(text)

    def replace_range(self, start: int, end: int, chars: str) -> None:
        """Replace text[start:end] and leave the cursor after the new chars."""
        self.text = self.text[:start] + chars + self.text[end:]
        self.cursor = start + len(chars)

    def clear(self) -> None:
        self.text = ""
        self.cursor = 0

    def fragment_at_cursor(self) -> Tuple[int, str]:
        """
        Return the word that ends at the cursor.

        Returns:
            (start index, fragment); the fragment is empty when the cursor
            follows whitespace or sits at the start of the buffer.
        """
        start = self.cursor
        while start > 0 and not self.text[start - 1].isspace():
            start -= 1
        return start, self.text[start:self.cursor]
