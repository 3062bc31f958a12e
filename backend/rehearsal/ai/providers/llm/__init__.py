"""Generative model providers."""

from rehearsal.ai.providers.llm.gemini import GeminiProvider
from rehearsal.ai.providers.llm.stub import StubLLMProvider

__all__ = ["GeminiProvider", "StubLLMProvider"]
