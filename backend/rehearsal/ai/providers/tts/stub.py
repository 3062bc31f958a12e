"""Stub speech synthesis provider."""

from rehearsal.ai.providers.base import TTSProvider, TTSResult
from rehearsal.ai.providers.registry import register_tts_provider

# A single silent MPEG-1 Layer III frame header followed by padding.
SILENT_MP3 = b"\xff\xfb\x90\x64" + b"\x00" * 413


@register_tts_provider
class StubTTSProvider(TTSProvider):
    """Stub TTS provider returning silent audio."""

    DEFAULT_VOICE = "stub-voice"

    def __init__(self) -> None:
        self.calls: list[tuple[str, str | None]] = []

    @property
    def name(self) -> str:
        return "stub"

    async def synthesize(
        self,
        text: str,
        voice: str | None = None,
        format: str = "mp3",
        **_kwargs,
    ) -> TTSResult:
        self.calls.append((text, voice))
        return TTSResult(
            audio_data=SILENT_MP3,
            format=format,
            media_type="audio/mpeg",
            duration_ms=26,
        )
