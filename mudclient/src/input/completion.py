"""Tab-completion cycle state."""

from dataclasses import dataclass, field
from typing import Callable, List, Sequence

CompletionProvider = Callable[[str], Sequence[str]]


@dataclass
class CompletionRequest:
    """
    One completion cycle over a fragment.

    ``start`` is where the original fragment began in the buffer; every
    substitution replaces the text from there, so cycling never depends on
    the previously substituted candidate being re-parsed.
    """
    fragment: str
    start: int
    candidates: List[str] = field(default_factory=list)
    index: int = 0

    @property
    def current(self) -> str:
        return self.candidates[self.index]

    @property
    def end(self) -> int:
        """End of the text currently substituted into the buffer."""
        return self.start + len(self.current)

    def advance(self) -> str:
        """Move to the next candidate, wrapping after the last."""
        self.index = (self.index + 1) % len(self.candidates)
        return self.current
