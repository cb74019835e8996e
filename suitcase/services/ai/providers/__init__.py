"""
Provider Adapters Module

Live adapters share one capability interface (``CapabilityProvider``) and are
built by name through ``get_provider_adapter``. Adding a provider means:
1. An adapter class inheriting from BaseProviderAdapter
2. An entry in PROVIDER_REGISTRY and in PROVIDER_CONFIGS
3. Its credential and options in AISettings (suitcase/config.py)

StaticFallbackProvider is not registered: it is always the last step.
"""
from typing import Dict, Type

from .base_provider import BaseProviderAdapter, CapabilityProvider
from .gemini_provider import GeminiProviderAdapter
from .groq_provider import GroqProviderAdapter
from .huggingface_provider import HuggingFaceProviderAdapter
from .static_provider import StaticFallbackProvider


PROVIDER_REGISTRY: Dict[str, Type[BaseProviderAdapter]] = {
    "groq": GroqProviderAdapter,
    "gemini": GeminiProviderAdapter,
    "huggingface": HuggingFaceProviderAdapter,
}


def get_provider_adapter(provider: str, model: str, **kwargs) -> BaseProviderAdapter:
    """
    Build a provider adapter by name.

    Args:
        provider: Provider name (case-insensitive)
        model: Model name/identifier
        **kwargs: Adapter options, usually ``AISettings.provider_kwargs(provider)``

    Raises:
        ValueError: If provider is not registered

    Examples:
        >>> adapter = get_provider_adapter("groq", **settings.provider_kwargs("groq"))
        >>> books = await adapter.search_books("dune")
    """
    provider = provider.lower()
    if provider not in PROVIDER_REGISTRY:
        available = list(PROVIDER_REGISTRY.keys())
        raise ValueError(
            f"Unknown provider: {provider}. "
            f"Available providers: {available}"
        )

    adapter_class = PROVIDER_REGISTRY[provider]
    return adapter_class(model=model, **kwargs)


__all__ = [
    "CapabilityProvider",
    "BaseProviderAdapter",
    "GroqProviderAdapter",
    "GeminiProviderAdapter",
    "HuggingFaceProviderAdapter",
    "StaticFallbackProvider",
    "get_provider_adapter",
]
