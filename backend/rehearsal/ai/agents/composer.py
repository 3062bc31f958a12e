"""Rule-based response composer for simulated conversation partners.

Given the scenario type, the speaking agent, the difficulty and the
transcript so far, the composer picks the next line in three tiers, first
success wins:

1. a question about the highest-importance talking point not yet covered,
2. a follow-up echoing salient keywords from the user's last line and the
   session's free-text context,
3. a scenario template, always phrased as a question.

Every line may then get a conversational lead-up (more often on easier
tiers), and the agent's emotion prefix is prepended for speech synthesis.

The composer holds no conversation state. All randomness goes through the
injected ``random.Random`` so tests can seed it.
"""

from __future__ import annotations

import logging
import random
from collections.abc import Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Literal

from rehearsal.ai.agents.context import AgentPromptContext, TalkingPoint, as_history
from rehearsal.ai.agents.lexical import keywords
from rehearsal.ai.agents.tracker import choose_next, last_user_utterance
from rehearsal.domains.scenarios.catalog import (
    Agent,
    Difficulty,
    ScenarioType,
    parse_difficulty,
    parse_scenario_type,
)

logger = logging.getLogger("composer")

Strategy = Literal["talking_point", "contextual_follow_up", "template"]

FALLBACK_QUESTION = "Could you elaborate?"
GREETING = "Hello! Welcome to the session. Feel free to introduce yourself!"

POINT_ECHO_LIMIT = 3
CONTEXT_ECHO_LIMIT = 4
TEMPLATE_FOLLOW_UP_AFTER_TURNS = 2

LEAD_UP_PHRASES: MappingProxyType[ScenarioType, tuple[str, ...]] = MappingProxyType(
    {
        ScenarioType.PARTY: (
            "So, I was wondering...",
            "Oh, by the way...",
            "I just wanted to ask...",
            "Hey, quick question...",
            "You know what...",
            "Actually...",
            "I'm curious...",
        ),
        ScenarioType.CLASSROOM: (
            "I have a question...",
            "Let me think...",
            "Actually, I believe...",
            "From what I understand...",
            "If I may add...",
            "I was thinking...",
            "In my opinion...",
        ),
        ScenarioType.JOB_INTERVIEW: (
            "That's a great question...",
            "Let me explain...",
            "I'd like to know...",
            "To clarify...",
            "Building on that...",
            "I'm curious about...",
        ),
        ScenarioType.DE_ESCALATION: (
            "I understand, but...",
            "Let me see if I get this...",
            "I hear what you're saying...",
            "Can we talk about...",
            "I feel like...",
            "Help me understand...",
        ),
        ScenarioType.PRESENTATION: (
            "I was wondering...",
            "Can you clarify...",
            "This is interesting, but...",
            "I'd like to know more about...",
            "Going back to your point...",
            "Just to confirm...",
        ),
    }
)

RESPONSE_TEMPLATES: MappingProxyType[ScenarioType, tuple[str, ...]] = MappingProxyType(
    {
        ScenarioType.PARTY: (
            "Hey! Great to meet you! What brings you here tonight?",
            "I love this music! Have you tried the appetizers yet?",
            "So, what do you do for fun?",
            "This is such a nice venue, right?",
            "Do you know many people here?",
        ),
        ScenarioType.CLASSROOM: (
            "Can you elaborate on that point?",
            "What's your reasoning behind that answer?",
            "Interesting perspective. Can you explain further?",
            "I'm not sure I follow. Could you clarify?",
            "That's a good start. What else can you add?",
        ),
        ScenarioType.JOB_INTERVIEW: (
            "Tell me about yourself and your background.",
            "What interests you about this position?",
            "Can you describe a challenging situation you've faced?",
            "Where do you see yourself in five years?",
            "What are your greatest strengths?",
            "Why should we hire you?",
        ),
        ScenarioType.DE_ESCALATION: (
            "I'm really frustrated with this situation!",
            "This isn't what I expected at all.",
            "Can you help me understand what's going on?",
            "I need this resolved immediately.",
            "I appreciate you taking the time to talk.",
        ),
        ScenarioType.PRESENTATION: (
            "Could you explain that slide in more detail?",
            "What data supports that conclusion?",
            "How does this compare to other approaches?",
            "Can you give us a real-world example?",
            "What are the potential limitations?",
        ),
    }
)

FOLLOW_UP_QUESTIONS: MappingProxyType[ScenarioType, tuple[str, ...]] = MappingProxyType(
    {
        ScenarioType.PARTY: (
            "That's interesting! How did you get into that?",
            "Oh really? Tell me more!",
            "I've always wanted to try that. Any tips?",
        ),
        ScenarioType.CLASSROOM: (
            "Can you provide an example?",
            "What evidence supports that?",
            "How does that relate to what we discussed earlier?",
        ),
        ScenarioType.JOB_INTERVIEW: (
            "Can you give me a specific example?",
            "How did you handle that situation?",
            "What did you learn from that experience?",
        ),
        ScenarioType.DE_ESCALATION: (
            "I understand, but can we find a solution?",
            "What would make this better for you?",
            "Let's work through this together.",
        ),
        ScenarioType.PRESENTATION: (
            "Could you clarify that point?",
            "What's your source for that information?",
            "How confident are you in these results?",
        ),
    }
)

# {echo} is the optional "You mentioned ..." clause, {point} the quoted topic.
PRESENTATIONAL_POINT_QUESTIONS: tuple[str, ...] = (
    '{echo}Where in your presentation will you cover "{point}"?',
    '{echo}How will you explain "{point}" to your audience?',
    '{echo}Could you outline how you plan to address "{point}"?',
)

CONVERSATIONAL_POINT_QUESTIONS: tuple[str, ...] = (
    '{echo}Could you talk a bit about "{point}"?',
    '{echo}What are your thoughts on "{point}"?',
    '{echo}How are you thinking about "{point}" right now?',
    '{echo}Can you clarify your approach to "{point}"?',
)

LEAD_UP_CHANCE: MappingProxyType[Difficulty, float] = MappingProxyType(
    {
        Difficulty.EASY: 0.4,
        Difficulty.MEDIUM: 0.3,
        Difficulty.HARD: 0.2,
    }
)


@dataclass(frozen=True)
class ComposedResponse:
    """A composed line plus which tier produced it."""

    text: str
    strategy: Strategy
    talking_point: TalkingPoint | None = None


def echo_clause(tokens: Sequence[str]) -> str:
    """``"You mentioned a, b, c. "`` or the empty string when there is nothing to echo."""
    return f"You mentioned {', '.join(tokens)}. " if tokens else ""


def strip_point_text(text: str) -> str:
    """Trim a talking point and drop its trailing ``?``/``!``/``.`` run."""
    return text.strip().rstrip("?!.")


def as_question(text: str) -> str:
    candidate = text.strip() or FALLBACK_QUESTION
    return candidate if candidate.endswith("?") else f"{candidate}?"


class ResponseComposer:
    """Produces the next line for a simulated partner.

    Args:
        rng: Random source for phrasing, lead-ups and template draws. Pass a
            seeded ``random.Random`` for reproducible output.
    """

    def __init__(self, rng: random.Random | None = None) -> None:
        self._rng = rng or random.Random()

    @property
    def rng(self) -> random.Random:
        return self._rng

    def compose(
        self,
        scenario_type: ScenarioType | str,
        agent: Agent,
        difficulty: Difficulty | str,
        history: Sequence[str] | None,
        context: AgentPromptContext | None = None,
    ) -> str:
        return self.compose_with_trace(scenario_type, agent, difficulty, history, context).text

    def compose_with_trace(
        self,
        scenario_type: ScenarioType | str,
        agent: Agent,
        difficulty: Difficulty | str,
        history: Sequence[str] | None,
        context: AgentPromptContext | None = None,
    ) -> ComposedResponse:
        scenario_type = parse_scenario_type(scenario_type)
        difficulty = parse_difficulty(difficulty)
        entries = as_history(history)
        context = context or AgentPromptContext()
        last_utterance = last_user_utterance(entries)

        point = choose_next(context.talking_points, entries)
        if point is not None:
            text = self._question_for_point(point, context.presentational, last_utterance)
            strategy: Strategy = "talking_point"
        else:
            text = self._contextual_follow_up(scenario_type, last_utterance, context)
            strategy = "contextual_follow_up"
            if text is None:
                text = self._template_question(scenario_type, len(entries))
                strategy = "template"

        text = self._maybe_add_lead_up(scenario_type, difficulty, text)
        if agent.emotion_prefix:
            text = f"{agent.emotion_prefix} {text}"

        logger.debug(
            "Agent response composed",
            extra={
                "service": "composer",
                "agent_id": agent.id,
                "difficulty": difficulty.value,
                "strategy": strategy,
                "metadata": {
                    "scenario_type": scenario_type.value,
                    "history_length": len(entries),
                    "talking_point_id": point.id if point is not None else None,
                },
            },
        )
        return ComposedResponse(text=text, strategy=strategy, talking_point=point)

    def greeting(self, agent: Agent) -> str:
        """Opening line spoken by the first agent of a session."""
        if agent.emotion_prefix:
            return f"{agent.emotion_prefix} {GREETING}"
        return GREETING

    def _question_for_point(
        self,
        point: TalkingPoint,
        presentational: bool,
        last_utterance: str | None,
    ) -> str:
        echo = echo_clause(keywords(last_utterance)[:POINT_ECHO_LIMIT])
        variants = PRESENTATIONAL_POINT_QUESTIONS if presentational else CONVERSATIONAL_POINT_QUESTIONS
        return self._rng.choice(variants).format(echo=echo, point=strip_point_text(point.text))

    def _contextual_follow_up(
        self,
        scenario_type: ScenarioType,
        last_utterance: str | None,
        context: AgentPromptContext,
    ) -> str | None:
        extras = f"{context.user_extras or ''} {context.scenario_base_prompt or ''}".strip()
        salient = keywords(f"{last_utterance or ''} {extras}")[:CONTEXT_ECHO_LIMIT]
        if not salient:
            return None
        follow_ups = FOLLOW_UP_QUESTIONS.get(scenario_type, ())
        question = self._rng.choice(follow_ups) if follow_ups else FALLBACK_QUESTION
        return f"{echo_clause(salient)}{question}"

    def _template_question(self, scenario_type: ScenarioType, turn_count: int) -> str:
        pool = list(RESPONSE_TEMPLATES.get(scenario_type, ()))
        if turn_count > TEMPLATE_FOLLOW_UP_AFTER_TURNS:
            pool.extend(FOLLOW_UP_QUESTIONS.get(scenario_type, ()))
        candidate = self._rng.choice(pool) if pool else FALLBACK_QUESTION
        return as_question(candidate)

    def _maybe_add_lead_up(
        self,
        scenario_type: ScenarioType,
        difficulty: Difficulty,
        text: str,
    ) -> str:
        if self._rng.random() >= LEAD_UP_CHANCE[difficulty]:
            return text
        phrases = LEAD_UP_PHRASES.get(scenario_type, ())
        if not phrases:
            return text
        return f"{self._rng.choice(phrases)} {text}"


_default_composer = ResponseComposer()


def compose_response(
    scenario_type: ScenarioType | str,
    agent: Agent,
    difficulty: Difficulty | str,
    history: Sequence[str] | None,
    context: AgentPromptContext | None = None,
) -> str:
    """Compose with the process-wide composer and its unseeded random source."""
    return _default_composer.compose(scenario_type, agent, difficulty, history, context)
