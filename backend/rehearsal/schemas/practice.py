"""Schemas for the practice engine endpoints."""

from __future__ import annotations

from pydantic import BaseModel, Field

from rehearsal.ai.agents.context import TalkingPoint, clamp_importance
from rehearsal.domains.scenarios.catalog import Agent, Difficulty
from rehearsal.schemas.scenario import AgentResponse


class TalkingPointInput(BaseModel):
    text: str
    importance: float = 3
    id: str | None = None

    def to_talking_point(self) -> TalkingPoint:
        return TalkingPoint(text=self.text, importance=clamp_importance(self.importance), id=self.id)


class AgentInput(BaseModel):
    """The speaking agent. Only ``name`` and ``emotion_prefix`` affect the text."""

    id: str = "agent-0"
    persona_id: str | None = None
    name: str
    personality: str = ""
    avatar: str = ""
    voice_id: str | None = None
    emotion_prefix: str | None = None
    role: str | None = None

    def to_agent(self) -> Agent:
        return Agent(
            id=self.id,
            persona_id=self.persona_id or self.id,
            name=self.name,
            personality=self.personality,
            avatar=self.avatar,
            voice_id=self.voice_id,
            emotion_prefix=self.emotion_prefix,
            role=self.role,
        )


class RespondRequest(BaseModel):
    """Everything the composer needs for one agent line."""

    scenario_id: str
    agent: AgentInput
    difficulty: Difficulty | None = None
    history: list[str] = Field(default_factory=list)
    user_extras: str = ""
    talking_points: list[TalkingPointInput] = Field(default_factory=list)
    seed: int | None = Field(default=None, description="Seed for reproducible phrasing")


class RespondResponse(BaseModel):
    text: str
    strategy: str
    talking_point_id: str | None = None
    talking_point_text: str | None = None
    agent: AgentResponse


class ScoreRequest(BaseModel):
    user_message_count: int = Field(..., ge=0)
    elapsed_seconds: float = Field(..., ge=0)
    difficulty: Difficulty


class ScoreResponse(BaseModel):
    score: int
    difficulty: Difficulty


class DelayResponse(BaseModel):
    difficulty: Difficulty
    delay_ms: float


class SessionRecordCreate(BaseModel):
    """A finished client-side session; the score is computed on save."""

    scenario_id: str
    user_message_count: int = Field(..., ge=0)
    duration_seconds: int = Field(..., ge=0)
    difficulty: Difficulty


class SessionRecordResponse(BaseModel):
    scenario_id: str
    date: str
    score: int
    duration: int
    difficulty: Difficulty
