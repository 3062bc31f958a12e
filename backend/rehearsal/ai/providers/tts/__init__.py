"""Speech synthesis providers."""

from rehearsal.ai.providers.tts.fish_audio import FishAudioTTSProvider
from rehearsal.ai.providers.tts.stub import StubTTSProvider

__all__ = ["FishAudioTTSProvider", "StubTTSProvider"]
