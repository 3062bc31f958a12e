"""Factory functions for creating provider instances.

Providers self-register at import time, so this module only maps settings
to a registered name and hands over credentials.
"""

import logging
from functools import lru_cache

import rehearsal.ai.providers.llm  # noqa: F401  (registers LLM providers)
import rehearsal.ai.providers.tts  # noqa: F401  (registers TTS providers)
from rehearsal.ai.providers.base import LLMProvider, TTSProvider
from rehearsal.ai.providers.llm.stub import StubLLMProvider
from rehearsal.ai.providers.registry import (
    ProviderNotFoundError,
    _llm_registry,
    _tts_registry,
)
from rehearsal.ai.providers.tts.stub import StubTTSProvider
from rehearsal.config import get_settings

logger = logging.getLogger("providers")

_API_KEY_ENV_VARS = {
    "gemini": "GEMINI_API_KEY",
    "fish_audio": "TTS_API_KEY",
}


def _get_provider_class(
    registry: dict[str, type],
    provider_name: str,
    provider_type: str,
) -> type:
    """Look up a provider class from the registry.

    Raises:
        ProviderNotFoundError: If provider is not registered
    """
    if provider_name not in registry:
        registered = ", ".join(sorted(registry.keys())) or "(none)"
        raise ProviderNotFoundError(
            f"Unknown {provider_type} provider: '{provider_name}'. "
            f"Registered providers: {registered}"
        )
    return registry[provider_name]


def _get_api_key_for_provider(provider: str) -> str | None:
    settings = get_settings()
    key = {
        "gemini": settings.gemini_api_key,
        "fish_audio": settings.tts_api_key,
    }.get(provider, "")
    key = (key or "").strip()
    return key or None


def _warn_stub(provider_type: str, requested: str, reason: str, **extra) -> None:
    logger.warning(
        f"Using stub {provider_type} provider ({reason})",
        extra={
            "service": "providers",
            "provider": "stub",
            "status": reason,
            "metadata": {"requested_provider": requested, **extra},
        },
    )


@lru_cache
def get_llm_provider(provider: str | None = None) -> LLMProvider:
    """Get the generative provider instance.

    Falls back to the stub when the requested provider has no API key or
    fails to initialize.

    Args:
        provider: Provider name ('gemini', 'stub'). If None, uses settings.llm_provider.

    Raises:
        ProviderNotFoundError: If provider is not registered
    """
    settings = get_settings()
    provider = (provider or settings.llm_provider or "").lower().strip() or "gemini"
    provider_class = _get_provider_class(_llm_registry, provider, "LLM")

    if provider == "stub":
        _warn_stub("LLM", provider, "explicit_request")
        return provider_class()

    api_key = _get_api_key_for_provider(provider)
    if api_key is None:
        _warn_stub(
            "LLM", provider, "missing_api_key",
            expected_env_var=_API_KEY_ENV_VARS.get(provider),
        )
        return StubLLMProvider()

    try:
        instance = provider_class(
            api_key=api_key,
            model=settings.llm_model_id,
            timeout=float(settings.provider_timeout_llm_seconds),
        )
    except Exception as e:
        _warn_stub("LLM", provider, "initialization_error", error=str(e))
        return StubLLMProvider()

    logger.info(
        "LLM provider initialized",
        extra={
            "service": "providers",
            "provider": provider,
            "model_id": settings.llm_model_id,
        },
    )
    return instance


@lru_cache
def get_tts_provider(provider: str | None = None) -> TTSProvider:
    """Get the speech synthesis provider instance.

    Args:
        provider: Provider name ('fish_audio', 'stub'). If None, uses settings.tts_provider.

    Raises:
        ProviderNotFoundError: If provider is not registered
    """
    settings = get_settings()
    provider = (provider or settings.tts_provider or "").lower().strip() or "fish_audio"
    provider_class = _get_provider_class(_tts_registry, provider, "TTS")

    if provider == "stub":
        _warn_stub("TTS", provider, "explicit_request")
        return provider_class()

    api_key = _get_api_key_for_provider(provider)
    if api_key is None:
        _warn_stub(
            "TTS", provider, "missing_api_key",
            expected_env_var=_API_KEY_ENV_VARS.get(provider),
        )
        return StubTTSProvider()

    try:
        instance = provider_class(
            api_key=api_key,
            endpoint=settings.tts_endpoint,
            model=settings.tts_model,
            default_voice=settings.tts_default_voice_id,
            timeout=float(settings.provider_timeout_tts_seconds),
        )
    except Exception as e:
        _warn_stub("TTS", provider, "initialization_error", error=str(e))
        return StubTTSProvider()

    logger.info(
        "TTS provider initialized",
        extra={
            "service": "providers",
            "provider": provider,
            "model_id": settings.tts_model,
        },
    )
    return instance
