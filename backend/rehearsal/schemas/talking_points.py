"""Schemas for generated talking points and presentation flows."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class TalkingPointItem(BaseModel):
    """A generated talking point ready for a session."""

    id: str
    text: str = Field(..., max_length=200)
    importance: int = Field(3, ge=1, le=5)


class GenerationContextFields(BaseModel):
    """Either a ready-made context or the parts to build one from."""

    context: str | None = Field(
        default=None,
        description="Free text describing the talk, the audience and the goal",
    )
    scenario_id: str | None = Field(
        default=None,
        description="Used with extra_details/document_text when context is omitted",
    )
    extra_details: str | None = None
    document_text: str | None = None


class TalkingPointsRequest(GenerationContextFields):
    """Payload for talking-point generation."""

    presentational: bool = False
    count_min: int | None = Field(default=None, ge=1)
    count_max: int | None = Field(default=None, ge=1)


class TalkingPointsResult(BaseModel):
    points: list[TalkingPointItem] = Field(default_factory=list)
    meta: dict[str, Any] = Field(default_factory=dict)


class FlowSection(BaseModel):
    """One unit of a presentation flow."""

    id: str
    title: str = Field(..., max_length=120)
    goals: list[str] = Field(default_factory=list, max_length=6)


class PresentationFlow(BaseModel):
    intro: FlowSection
    sections: list[FlowSection] = Field(default_factory=list)
    conclusion: FlowSection
    qa: FlowSection


class FlowRequest(GenerationContextFields):
    """Payload for presentation flow generation."""

    presentational: bool = True
    sections_min: int | None = None
    sections_max: int | None = None


class FlowResult(BaseModel):
    flow: PresentationFlow
    meta: dict[str, Any] = Field(default_factory=dict)
