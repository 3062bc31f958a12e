"""Schemas for speech synthesis."""

from pydantic import BaseModel, Field


class SpeechSynthesisRequest(BaseModel):
    """Text to voice, emotion tags included."""

    text: str = Field(..., min_length=1, max_length=2000)
    voice_id: str | None = Field(default=None, description="Reference voice; provider default when omitted")
    format: str = Field(default="mp3", pattern="^(mp3|wav|opus)$")
