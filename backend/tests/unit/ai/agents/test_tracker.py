"""Tests for talking-point coverage tracking."""

import pytest

from rehearsal.ai.agents.context import TalkingPoint
from rehearsal.ai.agents.tracker import (
    address_threshold,
    choose_next,
    is_addressed,
    last_user_utterance,
    remaining_points,
)

TEN_KEYWORD_POINT = "alpha bravo charlie delta echo foxtrot golf hotel india juliet"


class TestAddressThreshold:
    """Test address_threshold()."""

    @pytest.mark.parametrize(
        ("count", "expected"),
        [(0, 1), (1, 1), (4, 1), (9, 1), (10, 2), (15, 2), (40, 2)],
    )
    def test_threshold(self, count, expected):
        """One keyword suffices below ten keywords, two from ten upward."""
        assert address_threshold(count) == expected


class TestIsAddressed:
    """Test is_addressed()."""

    def test_single_shared_keyword_addresses_short_point(self):
        """'budget' alone covers a three-keyword point."""
        history = ["You: let's talk about the budget"]
        assert is_addressed(TalkingPoint(text="discuss the budget overview"), history) is True

    def test_unrelated_history_does_not_address(self):
        """No shared keyword means not addressed."""
        history = ["You: let's talk about finances"]
        assert is_addressed("discuss the budget overview", history) is False

    def test_long_point_needs_two_keywords(self):
        """A ten-keyword point needs two overlapping keywords."""
        assert is_addressed(TEN_KEYWORD_POINT, ["You: alpha"]) is False
        assert is_addressed(TEN_KEYWORD_POINT, ["You: alpha and bravo"]) is True

    def test_agent_lines_count_too(self):
        """Coverage is measured over the whole transcript, not just user lines."""
        assert is_addressed("quarterly budget", ["Alex: what about the budget?"]) is True

    def test_empty_history(self):
        """Nothing is addressed before anyone speaks."""
        assert is_addressed("budget", []) is False
        assert is_addressed("budget", None) is False

    def test_point_without_keywords(self):
        """A point made only of stop words can never be addressed."""
        assert is_addressed("the and of", ["You: the and of"]) is False

    def test_keywords_split_across_entries_do_not_merge(self):
        """Entries are joined with a separator, so words do not fuse."""
        assert is_addressed("teamwork", ["You: team", "work"]) is False


class TestRemainingPoints:
    """Test remaining_points() and choose_next()."""

    def test_orders_by_importance_stably(self):
        """Higher importance first; ties keep their input order."""
        points = [
            TalkingPoint(text="first medium", importance=3, id="a"),
            TalkingPoint(text="top priority", importance=5, id="b"),
            TalkingPoint(text="second medium", importance=3, id="c"),
        ]
        assert [p.id for p in remaining_points(points, [])] == ["b", "a", "c"]

    def test_skips_addressed_and_blank_points(self):
        """Covered and empty points are not candidates."""
        points = [
            TalkingPoint(text="budget overview", importance=5, id="budget"),
            TalkingPoint(text="   ", importance=5, id="blank"),
            TalkingPoint(text="hiring plans", importance=2, id="hiring"),
        ]
        history = ["You: the budget is fine"]
        assert [p.id for p in remaining_points(points, history)] == ["hiring"]

    def test_out_of_range_importance_is_clamped(self):
        """Importance 9 ranks the same as 5, so input order decides."""
        points = [
            TalkingPoint(text="first", importance=5, id="five"),
            TalkingPoint(text="second", importance=9, id="nine"),
        ]
        assert choose_next(points, []).id == "five"

    def test_choose_next_none_when_all_covered(self):
        """None once every point is addressed or when there are no points."""
        points = [TalkingPoint(text="budget overview")]
        assert choose_next(points, ["You: budget"]) is None
        assert choose_next([], ["You: hi"]) is None
        assert choose_next(None, None) is None


class TestLastUserUtterance:
    """Test last_user_utterance()."""

    def test_prefers_latest_user_line(self):
        """The most recent 'You:' line wins, with its label stripped."""
        history = ["You: first", "Alex: hi", "You:  second  ", "Sarah: ok"]
        assert last_user_utterance(history) == "second"

    def test_falls_back_to_last_non_empty_line(self):
        """Without user lines, the last non-blank entry is used as-is."""
        assert last_user_utterance(["Alex: hi", "   "]) == "Alex: hi"

    def test_empty(self):
        """None for an empty transcript."""
        assert last_user_utterance([]) is None
        assert last_user_utterance(["  "]) is None
