"""
Provider Structured Output Configuration Module

Each provider gets its field requirements a different way:
- gemini: native structured output via with_structured_output (the schema itself)
- groq: JSON mode via response_format, field requirements written as prose
- huggingface: prompt only, field requirements and a JSON-only instruction as prose

``BaseProviderAdapter.build_messages`` reads ``needs_schema_prompt`` to decide
whether the schema prose goes into the system message. Every reply still goes
through the normalizer.
"""
from dataclasses import dataclass
from typing import Literal, Dict


@dataclass(frozen=True)
class ProviderStructuredOutputConfig:
    """
    Configuration for a provider's structured output method.

    Attributes:
        provider: Provider name (groq, gemini, huggingface)
        preferred_method: How output requirements reach the model
    """
    provider: str
    preferred_method: Literal["native", "json_mode", "prompt_only"]

    @property
    def needs_schema_prompt(self) -> bool:
        """Whether field requirements must be embedded in the prompt."""
        return self.preferred_method != "native"


# Provider configurations
PROVIDER_CONFIGS: Dict[str, ProviderStructuredOutputConfig] = {
    "gemini": ProviderStructuredOutputConfig(provider="gemini", preferred_method="native"),
    "groq": ProviderStructuredOutputConfig(provider="groq", preferred_method="json_mode"),
    "huggingface": ProviderStructuredOutputConfig(
        provider="huggingface", preferred_method="prompt_only"
    ),
}


def get_provider_config(provider: str) -> ProviderStructuredOutputConfig:
    """
    Get configuration for a specific provider.

    Args:
        provider: Provider name (case-insensitive)

    Returns:
        ProviderStructuredOutputConfig: Provider configuration

    Raises:
        ValueError: If provider is not supported

    Examples:
        >>> get_provider_config("groq").needs_schema_prompt
        True
        >>> get_provider_config("gemini").preferred_method
        'native'
    """
    provider = provider.lower()
    if provider not in PROVIDER_CONFIGS:
        supported = list(PROVIDER_CONFIGS.keys())
        raise ValueError(
            f"Unknown provider: {provider}. "
            f"Supported providers: {supported}"
        )
    return PROVIDER_CONFIGS[provider]
