"""
Unit tests for the recall history.

Covers:
- Bounded size with oldest-first eviction
- Duplicate suppression for consecutive lines only
- Undo-stack navigation with the temporary slot
"""

import pytest

from mudclient.src.input.history import HistoryList


def make_history(*lines, max_size=15):
    history = HistoryList(max_size)
    for line in lines:
        history.push(line)
    return history


class TestPush:
    """Tests for recording submitted lines."""

    def test_non_adjacent_repeats_are_kept(self):
        history = make_history("look", "north", "look")
        assert history.entries == ["look", "north", "look"]

    def test_consecutive_repeats_collapse(self):
        history = make_history("look", "look")
        assert history.entries == ["look"]

    def test_empty_line_not_recorded(self):
        history = HistoryList()
        assert history.push("") is False
        assert len(history) == 0

    def test_oldest_entry_evicted(self):
        history = make_history("a", "b", "c", "d", max_size=3)
        assert history.entries == ["b", "c", "d"]
        assert history.max_size == 3

    def test_push_returns_to_present(self):
        history = make_history("a", "b")
        history.previous("typing")
        assert not history.at_present

        history.push("c")

        assert history.at_present
        assert history.temp is None

    def test_size_must_be_positive(self):
        with pytest.raises(ValueError):
            HistoryList(0)


class TestNavigation:
    """Tests for stepping through the history."""

    def test_recall_sequence_restores_in_progress_text(self):
        history = make_history("a", "b", "c")

        assert history.previous("d") == "c"
        assert history.previous("c") == "b"
        assert history.next() == "c"
        assert history.next() == "d"
        assert history.at_present
        assert history.next() is None

    def test_temp_slot_only_while_away_from_present(self):
        history = make_history("a")
        assert history.temp is None

        history.previous("draft")
        assert history.temp == "draft"

        history.next()
        assert history.temp is None

    def test_previous_clamps_at_oldest(self):
        history = make_history("a", "b")
        history.previous("")
        assert history.previous("") == "a"
        assert history.previous("") is None
        # Still positioned on the oldest entry
        assert history.next() == "b"

    def test_previous_on_empty_history(self):
        history = HistoryList()
        assert history.previous("draft") is None
        assert history.at_present

    def test_stepping_past_newest_without_draft(self):
        history = make_history("a")
        history.previous("")
        assert history.next() == ""

    def test_clear(self):
        history = make_history("a", "b")
        history.previous("x")

        history.clear()

        assert len(history) == 0
        assert history.at_present
