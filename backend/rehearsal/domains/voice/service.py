"""Speech synthesis for agent lines."""

import logging
import time
from dataclasses import dataclass

from rehearsal.ai.providers.base import TTSProvider, TTSResult
from rehearsal.domains.voice.speech_queue import SpeechQueue, Utterance
from rehearsal.exceptions import AppError, SpeechSynthesisError

logger = logging.getLogger("voice")


@dataclass(frozen=True)
class SpeechRequest:
    """One line to synthesize."""

    text: str
    voice_id: str | None = None
    format: str = "mp3"
    agent_id: str | None = None


class SpeechService:
    """Synthesizes agent lines and optionally queues them for playback."""

    def __init__(
        self,
        provider: TTSProvider,
        *,
        enabled: bool = True,
        default_voice_id: str | None = None,
        queue: SpeechQueue | None = None,
    ):
        self.provider = provider
        self.enabled = enabled
        self.default_voice_id = default_voice_id
        self.queue = queue

    async def synthesize(self, request: SpeechRequest) -> TTSResult | None:
        """Synthesize one line.

        Returns None when synthesis is disabled or the text is blank.

        Raises:
            SpeechSynthesisError: If the provider fails
        """
        if not self.enabled or not request.text.strip():
            return None

        voice_id = request.voice_id or self.default_voice_id
        start_time = time.time()
        try:
            result = await self.provider.synthesize(
                request.text,
                voice=voice_id,
                format=request.format,
            )
        except SpeechSynthesisError as exc:
            logger.error(
                "Speech synthesis failed",
                extra={
                    "service": "voice",
                    "provider": self.provider.name,
                    "voice_id": voice_id,
                    "agent_id": request.agent_id,
                    "error": str(exc),
                },
            )
            raise
        except AppError:
            raise
        except Exception as exc:
            logger.error(
                "Speech synthesis failed",
                extra={
                    "service": "voice",
                    "provider": self.provider.name,
                    "voice_id": voice_id,
                    "agent_id": request.agent_id,
                    "error": str(exc),
                },
            )
            raise SpeechSynthesisError(self.provider.name, str(exc)) from exc

        logger.info(
            "Speech synthesized",
            extra={
                "service": "voice",
                "provider": self.provider.name,
                "voice_id": voice_id,
                "agent_id": request.agent_id,
                "latency_ms": int((time.time() - start_time) * 1000),
            },
        )
        return result

    async def speak(self, request: SpeechRequest) -> bool:
        """Synthesize a line and hand it to the playback queue.

        A failed synthesis is logged and reported as False; the conversation
        carries on without audio for that line.
        """
        try:
            result = await self.synthesize(request)
        except SpeechSynthesisError as exc:
            logger.warning(
                "Skipping audio for agent line",
                extra={"service": "voice", "agent_id": request.agent_id, "error": str(exc)},
            )
            return False

        if result is None:
            return False

        if self.queue is not None:
            self.queue.enqueue(
                Utterance(
                    text=request.text,
                    audio=result.audio_data,
                    media_type=result.media_type,
                    voice_id=request.voice_id or self.default_voice_id,
                    agent_id=request.agent_id,
                )
            )
        return True

    def stop_all(self) -> None:
        """Silence playback and drop queued lines."""
        if self.queue is not None:
            self.queue.stop_all()
