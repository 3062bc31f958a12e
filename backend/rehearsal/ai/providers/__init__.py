"""External service providers (generative model, speech synthesis)."""

from rehearsal.ai.providers.base import (
    LLMMessage,
    LLMProvider,
    LLMResponse,
    TTSProvider,
    TTSResult,
)

__all__ = [
    "LLMMessage",
    "LLMProvider",
    "LLMResponse",
    "TTSProvider",
    "TTSResult",
]
