"""Tests for response pacing and scoring."""

import random

import pytest

from rehearsal.domains.practice.pacing import response_delay, score
from rehearsal.exceptions import InvalidDifficultyError
from tests.doubles import ScriptedRandom


class TestResponseDelay:
    """Test response_delay()."""

    @pytest.mark.parametrize(
        ("difficulty", "low", "high"),
        [("easy", 8000, 10000), ("medium", 5000, 7000), ("hard", 3000, 5000)],
    )
    def test_delay_range(self, difficulty, low, high):
        """Delays fall in [base, base + 2000)."""
        rng = random.Random(11)
        for _ in range(200):
            delay = response_delay(difficulty, rng)
            assert low <= delay < high

    def test_jitter_is_scaled_draw(self):
        """The jitter is the random draw times 2000 ms."""
        assert response_delay("medium", ScriptedRandom(randoms=(0.25,))) == 5500

    def test_invalid_difficulty(self):
        """Unknown difficulties are rejected."""
        with pytest.raises(InvalidDifficultyError):
            response_delay("extreme")


class TestScore:
    """Test score()."""

    def test_medium_example(self):
        """5 messages in 60 seconds on medium scores 173."""
        assert score(5, 60, "medium") == 173

    @pytest.mark.parametrize(
        ("messages", "elapsed", "difficulty", "expected"),
        [(0, 0, "easy", 100), (10, 0, "hard", 300)],
    )
    def test_instant_sessions(self, messages, elapsed, difficulty, expected):
        """A zero-length session earns the full time bonus."""
        assert score(messages, elapsed, difficulty) == expected

    def test_half_rounds_up(self):
        """98.5 rounds to 99."""
        assert score(0, 15, "easy") == 99

    def test_time_bonus_floors_at_zero(self):
        """Past 1000 seconds only messages count."""
        assert score(2, 1200, "hard") == 30
        assert score(0, 5000, "easy") == 0

    def test_hard_multiplier(self):
        """Hard sessions are scaled by 1.5."""
        assert score(3, 0, "hard") == 195

    def test_negative_message_count_is_zero(self):
        """A negative count contributes nothing."""
        assert score(-4, 1000, "medium") == 0
