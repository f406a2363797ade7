"""
Recall history of submitted lines.

Navigated like an undo stack. While the cursor is away from the present, a
temporary slot keeps whatever was being typed before recall started, and
stepping forward past the newest entry hands it back.
"""

from collections import deque
from typing import List, Optional


class HistoryList:
    """Bounded list of submitted lines; oldest entries are evicted first."""

    def __init__(self, max_size: int = 15):
        if max_size < 1:
            raise ValueError("History size must be at least 1")
        self._entries = deque(maxlen=max_size)
        self._index: Optional[int] = None
        self._temp: Optional[str] = None

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def max_size(self) -> int:
        return self._entries.maxlen

    @property
    def entries(self) -> List[str]:
        """Entries from oldest to newest."""
        return list(self._entries)

    @property
    def at_present(self) -> bool:
        return self._index is None

    @property
    def temp(self) -> Optional[str]:
        return self._temp

    def push(self, line: str) -> bool:
        """
        Record a submitted line.

        Empty lines and repeats of the most recent entry are not recorded.
        Pushing always returns the cursor to the present.

        Returns:
            True if the line was added.
        """
        self.reset()
        if not line:
            return False
        if self._entries and self._entries[-1] == line:
            return False
        self._entries.append(line)
        return True

    def previous(self, current: str) -> Optional[str]:
        """
        Step back one entry.

        Args:
            current: The buffer contents, snapshotted when leaving the present.

        Returns:
            The recalled entry, or None when already at the oldest entry.
        """
        if not self._entries:
            return None

        if self._index is None:
            self._temp = current
            self._index = len(self._entries) - 1
        elif self._index == 0:
            return None
        else:
            self._index -= 1

        return self._entries[self._index]

    def next(self) -> Optional[str]:
        """
        Step forward one entry.

        Returns:
            The recalled entry, the saved in-progress text when stepping past
            the newest entry, or None when already at the present.
        """
        if self._index is None:
            return None

        if self._index >= len(self._entries) - 1:
            restored = self._temp or ""
            self.reset()
            return restored

        self._index += 1
        return self._entries[self._index]

    def reset(self) -> None:
        """Return the cursor to the present and drop the temporary slot."""
        self._index = None
        self._temp = None

    def clear(self) -> None:
        self._entries.clear()
        self.reset()
