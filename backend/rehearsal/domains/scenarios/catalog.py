"""Static scenario definitions and the persona pool agents are drawn from.

The catalog is loaded once at import and never mutated. Lookups by id return
``None`` for unknown scenarios; ``require_scenario`` is the raising variant
used at the API and session boundaries.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

from rehearsal.exceptions import (
    InvalidDifficultyError,
    InvalidScenarioTypeError,
    ScenarioNotFoundError,
)

logger = logging.getLogger("scenarios")


class ScenarioType(str, Enum):
    PARTY = "party"
    CLASSROOM = "classroom"
    JOB_INTERVIEW = "job-interview"
    DE_ESCALATION = "de-escalation"
    PRESENTATION = "presentation"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


class Vibe(str, Enum):
    CASUAL = "casual"
    ACADEMIC = "academic"
    PROFESSIONAL = "professional"
    TENSE = "tense"
    FORMAL = "formal"


def parse_scenario_type(value: ScenarioType | str) -> ScenarioType:
    """Coerce a scenario type value, raising for anything outside the enumeration."""
    try:
        return ScenarioType(value)
    except ValueError as exc:
        raise InvalidScenarioTypeError(value, [t.value for t in ScenarioType]) from exc


def parse_difficulty(value: Difficulty | str) -> Difficulty:
    """Coerce a difficulty value, raising for anything but easy/medium/hard."""
    try:
        return Difficulty(value)
    except ValueError as exc:
        raise InvalidDifficultyError(value, [d.value for d in Difficulty]) from exc


@dataclass(frozen=True)
class Scenario:
    """A named practice context with its role-setting base prompt."""

    id: str
    title: str
    description: str
    type: ScenarioType
    participant_count: int
    duration_seconds: int  # 0 disables the session timer
    icon: str
    difficulty: Difficulty
    base_prompt: str
    vibe: Vibe
    presentational: bool


@dataclass(frozen=True)
class Persona:
    """A simulated conversational partner in the static pool."""

    id: str
    name: str
    personality: str
    avatar: str
    voice_id: str | None = None
    emotion_prefix: str | None = None
    role: str | None = None

    def to_agent(self, agent_id: str) -> Agent:
        return Agent(
            id=agent_id,
            persona_id=self.id,
            name=self.name,
            personality=self.personality,
            avatar=self.avatar,
            voice_id=self.voice_id,
            emotion_prefix=self.emotion_prefix,
            role=self.role,
        )


@dataclass(frozen=True)
class Agent:
    """A persona drawn into a session, carrying a session-scoped id."""

    id: str
    persona_id: str
    name: str
    personality: str
    avatar: str
    voice_id: str | None = None
    emotion_prefix: str | None = None
    role: str | None = None


_SCENARIOS = (
    Scenario(
        id="party",
        title="At a Party",
        description="Practice mingling and making small talk at a social gathering",
        type=ScenarioType.PARTY,
        participant_count=4,
        duration_seconds=300,
        icon="🎉",
        difficulty=Difficulty.EASY,
        base_prompt=(
            "You are at a casual social gathering. Your goal is to initiate and sustain "
            "friendly, light conversation. Ask open-ended questions, find common interests, "
            "and keep the tone positive and inclusive."
        ),
        vibe=Vibe.CASUAL,
        presentational=False,
    ),
    Scenario(
        id="classroom",
        title="Called Out in Class",
        description="Handle being called on unexpectedly during a lecture",
        type=ScenarioType.CLASSROOM,
        participant_count=2,
        duration_seconds=180,
        icon="📚",
        difficulty=Difficulty.MEDIUM,
        base_prompt=(
            "You are a student called upon in class. Explain your thinking clearly, "
            "acknowledge uncertainty when needed, and engage constructively with the "
            "instructor and peers. Be concise and respectful."
        ),
        vibe=Vibe.ACADEMIC,
        presentational=False,
    ),
    Scenario(
        id="job-interview",
        title="Job Interview",
        description="Navigate a one-on-one job interview scenario",
        type=ScenarioType.JOB_INTERVIEW,
        participant_count=2,
        duration_seconds=600,
        icon="💼",
        difficulty=Difficulty.HARD,
        base_prompt=(
            "You are the candidate in a professional job interview. Provide structured, "
            "concise answers (consider STAR: Situation, Task, Action, Result). Demonstrate "
            "motivation, relevant skills, and cultural fit. Expect behavioral questions and "
            "ask clarifying questions when appropriate."
        ),
        vibe=Vibe.PROFESSIONAL,
        presentational=False,
    ),
    Scenario(
        id="de-escalation",
        title="De-escalation",
        description="Practice calming down a tense situation",
        type=ScenarioType.DE_ESCALATION,
        participant_count=3,
        duration_seconds=240,
        icon="🤝",
        difficulty=Difficulty.HARD,
        base_prompt=(
            "You are de-escalating a tense situation. Stay calm, listen actively, "
            "acknowledge emotions, and guide the conversation toward shared goals and a "
            "constructive next step. Avoid blame; use neutral language."
        ),
        vibe=Vibe.TENSE,
        presentational=False,
    ),
    Scenario(
        id="presentation",
        title="Class Presentation",
        description="Deliver a presentation to your classmates",
        type=ScenarioType.PRESENTATION,
        participant_count=5,
        duration_seconds=420,
        icon="🎤",
        difficulty=Difficulty.MEDIUM,
        base_prompt=(
            "You are delivering a clear, engaging class presentation. Structure with an "
            "intro, 2-4 key sections with transitions, and a brief conclusion. Keep "
            "explanations accessible and invite questions."
        ),
        vibe=Vibe.ACADEMIC,
        presentational=True,
    ),
)

SCENARIOS: MappingProxyType[str, Scenario] = MappingProxyType({s.id: s for s in _SCENARIOS})

PERSONA_POOL: tuple[Persona, ...] = (
    Persona(
        id="alex",
        name="Alex",
        personality="friendly and outgoing",
        avatar="👨",
        voice_id="b5f4515fd395410b9ed3aef6fa51d9a0",
        emotion_prefix="(happy) (excited)",
    ),
    Persona(
        id="sarah",
        name="Sarah",
        personality="professional and direct",
        avatar="👩",
        voice_id="933563129e564b19a115bedd57b7406a",
        emotion_prefix="(confident) (calm)",
    ),
    Persona(
        id="mike",
        name="Mike",
        personality="curious and inquisitive",
        avatar="👨‍💼",
        voice_id="f3e8c5bbead746e29d47d38a146247ff",
        emotion_prefix="(curious)",
    ),
    Persona(
        id="emma",
        name="Emma",
        personality="supportive and encouraging",
        avatar="👩‍💼",
        voice_id="fbae2ecb433e41a29495707efbc594b5",
        emotion_prefix="(empathetic) (satisfied)",
    ),
    Persona(
        id="david",
        name="David",
        personality="analytical and thoughtful",
        avatar="👨‍🏫",
        voice_id="c39a76f685cf4f8fb41cd5d3d66b497d",
        emotion_prefix="(calm) (uncertain)",
    ),
    Persona(
        id="lisa",
        name="Lisa",
        personality="energetic and enthusiastic",
        avatar="👩‍🎓",
        voice_id="d85e5484b8794626975d69b6ab27ac0c",
        emotion_prefix="(excited) (delighted)",
    ),
    Persona(
        id="james",
        name="James",
        personality="calm and collected",
        avatar="👨‍🎓",
        voice_id="0b74ead073f2474a904f69033535b98e",
        emotion_prefix="(relaxed) (calm)",
    ),
    Persona(
        id="rachel",
        name="Rachel",
        personality="challenging and critical",
        avatar="👩‍🏫",
        voice_id="8cccba59fb744f6d941dad96b3cc6cad",
        emotion_prefix="(doubtful) (sarcastic)",
    ),
)


def list_scenarios() -> list[Scenario]:
    return list(SCENARIOS.values())


def get_scenario(scenario_id: str) -> Scenario | None:
    """Return the scenario with this id, or None when it is not in the catalog."""
    return SCENARIOS.get(scenario_id)


def require_scenario(scenario_id: str) -> Scenario:
    """Return the scenario with this id or raise ScenarioNotFoundError."""
    scenario = get_scenario(scenario_id)
    if scenario is None:
        logger.warning(
            "Scenario lookup miss",
            extra={"service": "scenarios", "scenario_id": scenario_id, "status": "not_found"},
        )
        raise ScenarioNotFoundError(scenario_id)
    return scenario


def select_agents(
    scenario: Scenario,
    rng: random.Random | None = None,
    *,
    pool: tuple[Persona, ...] = PERSONA_POOL,
    id_prefix: str = "agent",
) -> list[Agent]:
    """Draw ``scenario.participant_count`` distinct personas for one session.

    The whole pool is shuffled with a uniform permutation and the first N are
    kept, so draws are without replacement. Each drawn persona gets the id
    ``f"{id_prefix}-{index}"`` by position.
    """
    rng = rng or random.Random()
    shuffled = list(pool)
    rng.shuffle(shuffled)
    drawn = shuffled[: max(0, scenario.participant_count)]
    return [persona.to_agent(f"{id_prefix}-{index}") for index, persona in enumerate(drawn)]
