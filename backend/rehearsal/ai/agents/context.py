"""Read-only inputs of the response composer.

History is consumed as flattened ``"Speaker: text"`` strings; the user's turns
carry the ``You`` label.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

USER_LABEL = "You"

MIN_IMPORTANCE = 1
MAX_IMPORTANCE = 5
DEFAULT_IMPORTANCE = 3


def clamp_importance(value: object) -> int:
    """Clamp an importance weight into [1, 5], rounding half-up.

    Non-numeric values fall back to the neutral weight 3.
    """
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return DEFAULT_IMPORTANCE
    if math.isnan(number):
        return DEFAULT_IMPORTANCE
    if math.isinf(number):
        return MAX_IMPORTANCE if number > 0 else MIN_IMPORTANCE
    return int(max(MIN_IMPORTANCE, min(MAX_IMPORTANCE, math.floor(number + 0.5))))


@dataclass(frozen=True)
class TalkingPoint:
    """A prioritized discussion topic. Importance 5 means must-cover."""

    text: str
    importance: int = DEFAULT_IMPORTANCE
    id: str | None = None

    @property
    def weight(self) -> int:
        return clamp_importance(self.importance)


@dataclass(frozen=True)
class AgentPromptContext:
    """Per-session bundle passed unchanged into every composer call."""

    scenario_base_prompt: str = ""
    user_extras: str = ""
    talking_points: tuple[TalkingPoint, ...] = field(default_factory=tuple)
    presentational: bool = False

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        object.__setattr__(self, "talking_points", tuple(self.talking_points))


@dataclass(frozen=True)
class Turn:
    """One entry of the conversation transcript."""

    speaker: str
    text: str
    is_user: bool = False

    def render(self) -> str:
        label = USER_LABEL if self.is_user else self.speaker
        return f"{label}: {self.text}"


def format_history(turns: Iterable[Turn]) -> list[str]:
    """Flatten turns into the ``"Speaker: text"`` strings the engine reads."""
    return [turn.render() for turn in turns]


def user_line(text: str) -> str:
    return f"{USER_LABEL}: {text}"


def as_history(history: Sequence[str] | None) -> list[str]:
    return [entry for entry in (history or []) if isinstance(entry, str)]
