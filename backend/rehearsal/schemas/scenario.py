"""Schemas for the scenario catalog and agent draws."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from rehearsal.domains.scenarios.catalog import Agent, Difficulty, Scenario, ScenarioType, Vibe


class ScenarioResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    description: str
    type: ScenarioType
    participant_count: int
    duration_seconds: int
    icon: str
    difficulty: Difficulty
    base_prompt: str
    vibe: Vibe
    presentational: bool

    @classmethod
    def from_scenario(cls, scenario: Scenario) -> ScenarioResponse:
        return cls.model_validate(scenario)


class AgentResponse(BaseModel):
    """A persona drawn into a session."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    persona_id: str
    name: str
    personality: str
    avatar: str
    voice_id: str | None = None
    emotion_prefix: str | None = None
    role: str | None = None

    @classmethod
    def from_agent(cls, agent: Agent) -> AgentResponse:
        return cls.model_validate(agent)


class AgentDrawRequest(BaseModel):
    seed: int | None = Field(default=None, description="Seed for a reproducible draw")
    id_prefix: str = Field(default="agent", min_length=1, max_length=64)


class AgentDrawResponse(BaseModel):
    scenario_id: str
    agents: list[AgentResponse]
