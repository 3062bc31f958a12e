"""Common HTTP dependencies (providers and domain services)."""

from __future__ import annotations

from collections.abc import Callable
from functools import lru_cache, partial

from fastapi import Depends

from rehearsal.ai.providers.base import LLMProvider, TTSProvider
from rehearsal.ai.providers.factory import get_llm_provider, get_tts_provider
from rehearsal.config import Settings, get_settings
from rehearsal.domains.documents.service import DocumentExtractionService
from rehearsal.domains.practice.records import InMemorySessionRecordStore
from rehearsal.domains.practice.session import PracticeSession
from rehearsal.domains.talking_points.service import TalkingPointService
from rehearsal.domains.voice.service import SpeechService


def get_llm() -> LLMProvider:
    return get_llm_provider()


def get_tts() -> TTSProvider:
    return get_tts_provider()


def get_talking_point_service(
    settings: Settings = Depends(get_settings),
    llm: LLMProvider = Depends(get_llm),
) -> TalkingPointService:
    return TalkingPointService(
        llm,
        settings.llm_model_id,
        count_min=settings.talking_points_count_min,
        count_max=settings.talking_points_count_max,
        sections_min=settings.flow_sections_min,
        sections_max=settings.flow_sections_max,
    )


def get_document_service(
    settings: Settings = Depends(get_settings),
    llm: LLMProvider = Depends(get_llm),
) -> DocumentExtractionService:
    return DocumentExtractionService(
        llm,
        settings.llm_model_id,
        max_upload_bytes=settings.max_upload_bytes,
    )


def get_speech_service(
    settings: Settings = Depends(get_settings),
    tts: TTSProvider = Depends(get_tts),
) -> SpeechService:
    return SpeechService(
        tts,
        enabled=settings.tts_enabled,
        default_voice_id=settings.tts_default_voice_id,
    )


@lru_cache
def get_record_store() -> InMemorySessionRecordStore:
    """Process-wide store of completed session records."""
    return InMemorySessionRecordStore()


SessionFactory = Callable[..., PracticeSession]


def get_session_factory(
    settings: Settings = Depends(get_settings),
    speech: SpeechService = Depends(get_speech_service),
    store: InMemorySessionRecordStore = Depends(get_record_store),
) -> SessionFactory:
    """Build practice sessions wired to the configured speech service and record store."""
    return partial(
        PracticeSession,
        speech=speech,
        store=store,
        greeting_delay_seconds=settings.greeting_delay_seconds,
        talking_points_limit=settings.session_talking_points_limit,
    )
