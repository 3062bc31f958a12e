"""Decides which talking points the conversation has already covered.

A point counts as addressed when enough of its keywords appear anywhere in
the transcript. The threshold is ``min(2, max(1, floor(0.2 * n)))`` for a
point with ``n`` keywords, so a single shared keyword is enough for points
with fewer than ten keywords.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from rehearsal.ai.agents.context import USER_LABEL, TalkingPoint, as_history
from rehearsal.ai.agents.lexical import tokenize

_USER_PREFIX = f"{USER_LABEL}:"


def address_threshold(token_count: int) -> int:
    """Number of overlapping keywords needed for a point with ``token_count`` keywords."""
    return min(2, max(1, math.floor(token_count * 0.2)))


def is_addressed(point: TalkingPoint | str, history: Sequence[str] | None) -> bool:
    text = point.text if isinstance(point, TalkingPoint) else point
    entries = as_history(history)
    if not entries:
        return False

    point_tokens = tokenize(text)
    if not point_tokens:
        return False

    history_tokens = tokenize(" \n ".join(entries))
    overlap = len(point_tokens & history_tokens)
    return overlap >= address_threshold(len(point_tokens))


def remaining_points(
    points: Sequence[TalkingPoint] | None,
    history: Sequence[str] | None,
) -> list[TalkingPoint]:
    """Unaddressed points with non-empty text, highest importance first.

    The sort is stable, so equal-importance points keep their input order.
    """
    candidates = [
        p
        for p in (points or [])
        if isinstance(p, TalkingPoint) and p.text and p.text.strip()
    ]
    unaddressed = [p for p in candidates if not is_addressed(p, history)]
    return sorted(unaddressed, key=lambda p: p.weight, reverse=True)


def choose_next(
    points: Sequence[TalkingPoint] | None,
    history: Sequence[str] | None,
) -> TalkingPoint | None:
    """Return the highest-importance unaddressed point, or None."""
    remaining = remaining_points(points, history)
    return remaining[0] if remaining else None


def last_user_utterance(history: Sequence[str] | None) -> str | None:
    """Most recent user line (label stripped), else the most recent non-empty line."""
    entries = as_history(history)
    if not entries:
        return None

    for entry in reversed(entries):
        if entry.startswith(_USER_PREFIX):
            return entry[len(_USER_PREFIX):].strip()

    for entry in reversed(entries):
        if entry.strip():
            return entry.strip()
    return None
