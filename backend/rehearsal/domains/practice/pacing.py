"""Reaction-time pacing and end-of-session scoring."""

from __future__ import annotations

import math
import random
from types import MappingProxyType

from rehearsal.domains.scenarios.catalog import Difficulty, parse_difficulty

# Harder tiers answer faster
BASE_DELAY_MS: MappingProxyType[Difficulty, int] = MappingProxyType(
    {
        Difficulty.EASY: 8000,
        Difficulty.MEDIUM: 5000,
        Difficulty.HARD: 3000,
    }
)
DELAY_JITTER_MS = 2000

DIFFICULTY_MULTIPLIER: MappingProxyType[Difficulty, float] = MappingProxyType(
    {
        Difficulty.EASY: 1.0,
        Difficulty.MEDIUM: 1.2,
        Difficulty.HARD: 1.5,
    }
)

POINTS_PER_MESSAGE = 10
TIME_BONUS_MAX = 100
SECONDS_PER_BONUS_POINT = 10


def response_delay(difficulty: Difficulty | str, rng: random.Random | None = None) -> float:
    """Milliseconds before the next agent line: tier base plus jitter in [0, 2000)."""
    difficulty = parse_difficulty(difficulty)
    jitter = (rng or random).random() * DELAY_JITTER_MS
    return BASE_DELAY_MS[difficulty] + jitter


def score(user_message_count: int, elapsed_seconds: float, difficulty: Difficulty | str) -> int:
    """Session score: 10 per user message plus a time bonus, scaled by difficulty.

    The time bonus starts at 100 and loses a point every 10 seconds, reaching
    zero at 1000 seconds. Halves round up.
    """
    difficulty = parse_difficulty(difficulty)
    base = max(0, user_message_count) * POINTS_PER_MESSAGE
    time_bonus = max(0.0, TIME_BONUS_MAX - elapsed_seconds / SECONDS_PER_BONUS_POINT)
    raw = (base + time_bonus) * DIFFICULTY_MULTIPLIER[difficulty]
    return int(math.floor(raw + 0.5))
