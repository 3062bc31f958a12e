"""Provider registry for self-registration of AI service providers.

Providers register themselves at import time, so the factory never needs to
know about concrete classes:

    @register_llm_provider
    class GeminiProvider(LLMProvider):
        ...
"""

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from rehearsal.ai.providers.base import LLMProvider, TTSProvider

LLM = TypeVar("LLM", bound="LLMProvider")
TTS = TypeVar("TTS", bound="TTSProvider")

_llm_registry: dict[str, type["LLMProvider"]] = {}
_tts_registry: dict[str, type["TTSProvider"]] = {}


class ProviderRegistryError(Exception):
    """Base error for provider registry issues."""
    pass


class ProviderNotFoundError(ProviderRegistryError):
    """Raised when a requested provider is not registered."""
    pass


class DuplicateProviderError(ProviderRegistryError):
    """Raised when trying to register a provider with a name that's already taken."""
    pass


def _provider_name(provider_class: type) -> str:
    name = getattr(provider_class, "name", None)
    if name is None:
        raise ProviderRegistryError(
            f"Provider {provider_class.__name__} is missing required 'name' property"
        )
    # Properties on the class are descriptors; call the getter with the class
    if isinstance(name, property):
        if name.fget is None:
            raise ProviderRegistryError(
                f"Provider {provider_class.__name__} has a 'name' property without a getter"
            )
        name = name.fget(provider_class)
    elif callable(name):
        name = name()
    if not isinstance(name, str):
        raise ProviderRegistryError(
            f"Provider {provider_class.__name__} has an invalid 'name' property type: {type(name)}"
        )
    return name


def _register(registry: dict[str, type], kind: str, provider_class: type) -> None:
    name = _provider_name(provider_class)
    if name in registry:
        raise DuplicateProviderError(f"{kind} provider '{name}' is already registered")
    registry[name] = provider_class


def register_llm_provider(provider_class: type[LLM]) -> type[LLM]:
    """Register an LLM provider class under its ``name``."""
    _register(_llm_registry, "LLM", provider_class)
    return provider_class


def register_tts_provider(provider_class: type[TTS]) -> type[TTS]:
    """Register a TTS provider class under its ``name``."""
    _register(_tts_registry, "TTS", provider_class)
    return provider_class


def get_registered_llm_providers() -> list[str]:
    return sorted(_llm_registry.keys())


def get_registered_tts_providers() -> list[str]:
    return sorted(_tts_registry.keys())


def is_llm_provider_registered(name: str) -> bool:
    return name in _llm_registry


def is_tts_provider_registered(name: str) -> bool:
    return name in _tts_registry
