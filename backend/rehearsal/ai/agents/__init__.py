"""Rule-based agent response engine.

The engine stands in for live model inference: it tracks which talking
points the conversation has covered and composes the next question a
simulated partner asks.
"""

from rehearsal.ai.agents.composer import (
    FALLBACK_QUESTION,
    ComposedResponse,
    ResponseComposer,
    compose_response,
)
from rehearsal.ai.agents.context import (
    USER_LABEL,
    AgentPromptContext,
    TalkingPoint,
    Turn,
    clamp_importance,
    format_history,
)
from rehearsal.ai.agents.lexical import STOP_WORDS, keywords, tokenize
from rehearsal.ai.agents.tracker import (
    address_threshold,
    choose_next,
    is_addressed,
    last_user_utterance,
    remaining_points,
)

__all__ = [
    "FALLBACK_QUESTION",
    "STOP_WORDS",
    "USER_LABEL",
    "AgentPromptContext",
    "ComposedResponse",
    "ResponseComposer",
    "TalkingPoint",
    "Turn",
    "address_threshold",
    "choose_next",
    "clamp_importance",
    "compose_response",
    "format_history",
    "is_addressed",
    "keywords",
    "last_user_utterance",
    "remaining_points",
    "tokenize",
]
