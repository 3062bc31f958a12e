"""Fish Audio speech synthesis provider."""

import logging
import time

import httpx

from rehearsal.ai.providers.base import TTSProvider, TTSResult
from rehearsal.ai.providers.registry import register_tts_provider
from rehearsal.exceptions import SpeechSynthesisError

logger = logging.getLogger("tts")

FORMAT_MEDIA_TYPES = {
    "mp3": "audio/mpeg",
    "wav": "audio/wav",
    "opus": "audio/ogg",
}


@register_tts_provider
class FishAudioTTSProvider(TTSProvider):
    """Fish Audio TTS provider using the REST API with a bearer token.

    Leading emotion tags such as ``(excited) (friendly)`` are part of the
    text; Fish Audio renders them as delivery cues rather than words.
    """

    DEFAULT_VOICE = "bf322df2096a46f18c579d0baa36f41d"
    DEFAULT_ENDPOINT = "https://api.fish.audio/v1/tts"

    def __init__(
        self,
        api_key: str,
        endpoint: str | None = None,
        model: str = "s1",
        default_voice: str | None = None,
        timeout: float = 90.0,
    ):
        """Initialize the Fish Audio provider.

        Args:
            api_key: Fish Audio API key
            endpoint: Synthesis endpoint URL
            model: Synthesis model, sent in the ``model`` header
            default_voice: Reference voice used when a request carries none
            timeout: Request timeout in seconds
        """
        self.api_key = api_key
        self.endpoint = endpoint or self.DEFAULT_ENDPOINT
        self.model = model
        self.default_voice = default_voice or self.DEFAULT_VOICE
        self.timeout = timeout

        self._client: httpx.AsyncClient | None = None

        logger.info(
            "Fish Audio TTS provider initialized",
            extra={
                "service": "tts",
                "provider": "fish_audio",
                "model_id": model,
                "voice_id": self.default_voice,
            },
        )

    @property
    def name(self) -> str:
        """Provider name for logging."""
        return "fish_audio"

    async def synthesize(
        self,
        text: str,
        voice: str | None = None,
        format: str = "mp3",
        **kwargs,
    ) -> TTSResult:
        """Synthesize text with the given reference voice.

        Args:
            text: Text to synthesize, emotion tags included
            voice: Fish Audio reference voice ID
            format: Output format ('mp3', 'wav', 'opus')

        Returns:
            TTSResult with the raw audio bytes
        """
        start_time = time.time()
        voice_id = (voice or "").strip() or self.default_voice

        payload = {
            "text": text,
            "format": format,
            "reference_id": voice_id,
        }
        headers = {
            "Authorization": f"Bearer {self.api_key}",
            "Content-Type": "application/json",
            "model": self.model,
        }

        logger.debug(
            "Fish Audio synthesis request",
            extra={
                "service": "tts",
                "provider": "fish_audio",
                "voice_id": voice_id,
                "metadata": {"format": format, "text_length": len(text)},
            },
        )

        try:
            if self._client is None:
                self._client = httpx.AsyncClient(timeout=self.timeout)
            response = await self._client.post(self.endpoint, json=payload, headers=headers)
            response.raise_for_status()

        except httpx.TimeoutException as e:
            logger.error(
                "Fish Audio request timeout",
                extra={
                    "service": "tts",
                    "provider": "fish_audio",
                    "error": str(e),
                },
            )
            raise SpeechSynthesisError(self.name, "Speech synthesis timed out") from e

        except httpx.HTTPStatusError as e:
            logger.error(
                "Fish Audio HTTP error",
                extra={
                    "service": "tts",
                    "provider": "fish_audio",
                    "status": e.response.status_code,
                    "error": e.response.text,
                },
            )
            raise SpeechSynthesisError(
                self.name,
                f"Speech synthesis failed with status {e.response.status_code}",
                details={"status_code": e.response.status_code, "body": e.response.text},
                retryable=e.response.status_code >= 500,
            ) from e

        except httpx.HTTPError as e:
            logger.error(
                "Fish Audio transport error",
                extra={
                    "service": "tts",
                    "provider": "fish_audio",
                    "error": str(e),
                },
            )
            raise SpeechSynthesisError(self.name, f"Speech synthesis failed: {e}") from e

        audio_data = response.content

        logger.info(
            "Fish Audio synthesis complete",
            extra={
                "service": "tts",
                "provider": "fish_audio",
                "voice_id": voice_id,
                "latency_ms": int((time.time() - start_time) * 1000),
                "metadata": {"audio_bytes": len(audio_data), "text_length": len(text)},
            },
        )

        return TTSResult(
            audio_data=audio_data,
            format=format,
            media_type=FORMAT_MEDIA_TYPES.get(format, "application/octet-stream"),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
