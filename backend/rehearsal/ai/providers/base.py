"""Abstract base classes for external service providers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass
class LLMMessage:
    """A message in an LLM conversation."""

    role: str  # 'system', 'user', 'assistant'
    content: str


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    tokens_in: int
    tokens_out: int
    finish_reason: str | None = None


@dataclass
class TTSResult:
    """Result from text-to-speech synthesis."""

    audio_data: bytes
    format: str  # 'mp3', 'wav', 'opus'
    media_type: str = "audio/mpeg"
    duration_ms: int | None = None


class LLMProvider(ABC):
    """Abstract base class for generative providers (e.g., Gemini)."""

    DEFAULT_MODEL: str | None = None

    @classmethod
    def resolve_model(cls, model: str | None) -> str | None:
        """Resolve a model ID for this provider, falling back to DEFAULT_MODEL."""
        m = (model or "").strip() if model is not None else ""
        return m or cls.DEFAULT_MODEL

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    @abstractmethod
    async def generate(
        self,
        messages: list[LLMMessage],
        model: str | None = None,
        temperature: float = 0.7,
        max_tokens: int = 2048,
        **kwargs,
    ) -> LLMResponse:
        """Generate a complete response.

        Args:
            messages: Conversation history
            model: Model ID (provider-specific)
            temperature: Sampling temperature (0-1)
            max_tokens: Maximum tokens to generate
            **kwargs: Provider-specific options

        Returns:
            LLMResponse with full content and metadata
        """
        pass

    async def extract_document_text(
        self,
        data: bytes,
        mime_type: str,
        prompt: str,
        model: str | None = None,
    ) -> LLMResponse:
        """Read a binary document (PDF, slides, image) and return its text.

        Providers without multimodal input leave this unimplemented.
        """
        raise NotImplementedError(f"{self.name} does not support document input")


class TTSProvider(ABC):
    """Abstract base class for TTS providers (e.g., Fish Audio)."""

    DEFAULT_VOICE: str | None = None

    @classmethod
    def resolve_voice(cls, voice: str | None) -> str | None:
        """Resolve a voice ID for this provider, falling back to DEFAULT_VOICE."""
        v = (voice or "").strip() if voice is not None else ""
        return v or cls.DEFAULT_VOICE

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name for logging."""
        pass

    @abstractmethod
    async def synthesize(
        self,
        text: str,
        voice: str | None = None,
        format: str = "mp3",
        **kwargs,
    ) -> TTSResult:
        """Synthesize text to speech.

        The text is sent verbatim, including any leading emotion tags such as
        ``(happy) (excited)``; the synthesis service interprets them.

        Args:
            text: Text to synthesize
            voice: Voice ID (provider-specific)
            format: Output audio format
            **kwargs: Provider-specific options

        Returns:
            TTSResult with audio data and metadata
        """
        pass
