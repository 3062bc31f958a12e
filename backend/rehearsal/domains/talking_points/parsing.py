"""Parsing and normalisation of model output for talking points and flows.

Models wrap JSON in code fences, add prose around it, or ignore the format
entirely. Parsing tries strict JSON first, then the outermost bracketed
region, then (for points) a bullet-list reading of the raw lines.
"""

from __future__ import annotations

import json
import math
import re
import uuid
from collections.abc import Callable
from typing import Any

from rehearsal.ai.agents.context import DEFAULT_IMPORTANCE, clamp_importance
from rehearsal.schemas.talking_points import FlowSection, PresentationFlow, TalkingPointItem

MAX_POINT_CHARS = 200
PLACEHOLDER_POINT = "(Add a key point)"

MAX_TITLE_CHARS = 120
MAX_GOALS = 6
MAX_GOAL_CHARS = 140
DEFAULT_GOALS = ("State the objective", "Set audience expectations")
BLANK_SECTION_GOALS = ("Add a brief goal", "Add another brief goal")

SECTIONS_MIN_RANGE = (1, 8)
SECTIONS_MAX_CEILING = 10

_CODE_FENCE_RE = re.compile(r"^```[a-zA-Z0-9]*\n(.*?)\n```$", re.MULTILINE | re.DOTALL)
# "- Open with the objective (5)", "2) Budget [4]", "* Close strong"
_BULLET_RE = re.compile(r"^[-*\d.)\s]*([^()\-•]+?)(?:\s*[(\[]?(\d)\)?\]?)?\s*$")

IdFactory = Callable[[], str]


def _new_id() -> str:
    return str(uuid.uuid4())


def strip_code_fences(text: str) -> str:
    """Unwrap the first fenced block, if any."""
    return _CODE_FENCE_RE.sub(r"\1", text, count=1)


def _loads(text: str) -> Any:
    try:
        return json.loads(text)
    except ValueError:
        return None


# =============================================================================
# Talking points
# =============================================================================


def parse_points(text: str | None) -> list[dict[str, Any]] | None:
    """Read raw ``{"text", "importance"}`` items out of model output.

    Returns None when nothing usable was found.
    """
    if not text:
        return None
    cleaned = strip_code_fences(text.strip())

    obj = _loads(cleaned)
    if isinstance(obj, list):
        return obj
    if isinstance(obj, dict) and isinstance(obj.get("points"), list):
        return obj["points"]

    start = cleaned.find("[")
    end = cleaned.rfind("]")
    if start != -1 and end > start:
        obj = _loads(cleaned[start : end + 1])
        if isinstance(obj, list):
            return obj

    points = []
    for line in (raw.strip() for raw in cleaned.splitlines()):
        if not line:
            continue
        match = _BULLET_RE.match(line)
        if match is None:
            continue
        point_text = match.group(1).strip()
        importance = int(match.group(2)) if match.group(2) else DEFAULT_IMPORTANCE
        if point_text:
            points.append({"text": point_text, "importance": clamp_importance(importance)})
    return points or None


def _point_importance(value: Any) -> int:
    # Missing, zero and non-numeric weights all mean "neutral"
    try:
        number = float(value)
    except (TypeError, ValueError):
        return DEFAULT_IMPORTANCE
    if math.isnan(number) or number == 0:
        return DEFAULT_IMPORTANCE
    return clamp_importance(number)


def normalize_points(
    raw: list[Any],
    count_min: int,
    count_max: int,
    id_factory: IdFactory = _new_id,
) -> list[TalkingPointItem]:
    """Clean raw items and force the list length into ``[count_min, count_max]``.

    Items without text are dropped, text is trimmed to 200 characters and
    importance clamped to 1-5. Extra items are cut from the end; missing ones
    are filled with a ``"(Add a key point)"`` placeholder of importance 3.
    """
    points = [
        TalkingPointItem(
            id=id_factory(),
            text=item["text"].strip()[:MAX_POINT_CHARS],
            importance=_point_importance(item.get("importance")),
        )
        for item in raw
        if isinstance(item, dict) and isinstance(item.get("text"), str) and item["text"].strip()
    ]

    points = points[: max(0, count_max)]
    while len(points) < count_min:
        points.append(
            TalkingPointItem(id=id_factory(), text=PLACEHOLDER_POINT, importance=DEFAULT_IMPORTANCE)
        )
    return points


# =============================================================================
# Presentation flow
# =============================================================================


def clamp_section_range(sections_min: float, sections_max: float) -> tuple[int, int]:
    """Clamp the requested body-section range: min into [1, 8], max into [min, 10]."""
    low, high = SECTIONS_MIN_RANGE
    minimum = max(low, min(high, math.floor(sections_min)))
    maximum = min(SECTIONS_MAX_CEILING, max(minimum, math.floor(sections_max)))
    return minimum, maximum


def parse_flow(text: str | None) -> dict[str, Any] | None:
    """Read a raw flow object, unwrapping a top-level ``"flow"`` key."""
    if not text:
        return None
    cleaned = strip_code_fences(text.strip())

    candidates = [cleaned]
    start = cleaned.find("{")
    end = cleaned.rfind("}")
    if start != -1 and end > start:
        candidates.append(cleaned[start : end + 1])

    for candidate in candidates:
        obj = _loads(candidate)
        if isinstance(obj, dict):
            flow = obj.get("flow")
            return flow if isinstance(flow, dict) and flow else obj
    return None


def blank_section(title: str, id_factory: IdFactory = _new_id) -> FlowSection:
    return FlowSection(id=id_factory(), title=title, goals=list(BLANK_SECTION_GOALS))


def normalize_section(raw: Any, fallback_title: str, id_factory: IdFactory = _new_id) -> FlowSection:
    raw = raw if isinstance(raw, dict) else {}
    title = str(raw.get("title") or fallback_title).strip()[:MAX_TITLE_CHARS] or fallback_title

    raw_goals = raw.get("goals")
    goals = [str(goal).strip() for goal in raw_goals] if isinstance(raw_goals, list) else []
    goals = [goal[:MAX_GOAL_CHARS] for goal in goals if goal][:MAX_GOALS]

    return FlowSection(id=id_factory(), title=title, goals=goals or list(DEFAULT_GOALS))


def normalize_flow(
    raw: dict[str, Any],
    sections_min: int,
    sections_max: int,
    id_factory: IdFactory = _new_id,
) -> PresentationFlow:
    """Fill missing units, clamp sizes and fit the body into the requested range."""
    raw_sections = raw.get("sections")
    if isinstance(raw_sections, list) and raw_sections:
        sections = [
            normalize_section(section, f"Section {index + 1}", id_factory)
            for index, section in enumerate(raw_sections)
        ]
    else:
        sections = [blank_section("Section 1", id_factory), blank_section("Section 2", id_factory)]

    sections = sections[:sections_max]
    while len(sections) < sections_min:
        sections.append(blank_section(f"Section {len(sections) + 1}", id_factory))

    return PresentationFlow(
        intro=normalize_section(raw.get("intro"), "Introduction", id_factory),
        sections=sections,
        conclusion=normalize_section(raw.get("conclusion"), "Conclusion", id_factory),
        qa=normalize_section(raw.get("qa"), "Q&A", id_factory),
    )
