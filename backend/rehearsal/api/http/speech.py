"""HTTP endpoint for speech synthesis."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from fastapi.responses import Response

from rehearsal.api.http.dependencies import get_speech_service
from rehearsal.domains.voice.service import SpeechRequest, SpeechService
from rehearsal.exceptions import ConfigurationError, MissingFieldError
from rehearsal.schemas.speech import SpeechSynthesisRequest

router = APIRouter(prefix="/api/v1", tags=["speech"])


@router.post("/tts")
async def synthesize_speech(
    request: SpeechSynthesisRequest,
    service: SpeechService = Depends(get_speech_service),
) -> Response:
    """Return synthesized audio bytes for one line."""
    if not service.enabled:
        raise ConfigurationError("Speech synthesis is disabled")
    if not request.text.strip():
        raise MissingFieldError("text")

    result = await service.synthesize(
        SpeechRequest(text=request.text, voice_id=request.voice_id, format=request.format)
    )
    return Response(
        content=result.audio_data,
        media_type=result.media_type,
        headers={"Cache-Control": "no-cache"},
    )
