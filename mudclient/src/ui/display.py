"""
Display sink boundary.

The core never draws anything itself; it hands plain text and a semantic tag
to whatever sink the front end provides.
"""

import sys
from typing import Protocol, TextIO, Optional

USER_INPUT = "user-input"
OUTPUT = "output"
NOTICE = "notice"


class DisplaySink(Protocol):
    def show(self, text: str, tag: str) -> None: ...


class ConsoleDisplay:
    """Writes game text to a terminal stream."""

    PREFIXES = {
        USER_INPUT: "> ",
        NOTICE: "*** ",
    }

    def __init__(self, stream: Optional[TextIO] = None):
        self.stream = stream

    def show(self, text: str, tag: str) -> None:
        stream = self.stream if self.stream is not None else sys.stdout
        prefix = self.PREFIXES.get(tag, "")
        if prefix:
            stream.write(f"{prefix}{text}\n")
        else:
            # Game output carries its own line breaks
            stream.write(text)
        stream.flush()
