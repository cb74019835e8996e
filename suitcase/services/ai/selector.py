"""
Provider Selector

Chooses the provider once, at process start, from credential presence:

    groq > gemini > static

Hugging Face is never selected as the primary binding; it only backs the
static fallback provider's text operations.
"""
from typing import Optional

from loguru import logger

from suitcase.config import AISettings
from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.ai.providers import (
    CapabilityProvider,
    StaticFallbackProvider,
    get_provider_adapter,
)


PROVIDER_PRIORITY = ("groq", "gemini")
STATIC_PROVIDER = "static"


def select_provider_name(settings: AISettings) -> str:
    """
    Pick the first credentialed provider in priority order.

    Returns:
        "groq", "gemini" or "static"
    """
    for name in PROVIDER_PRIORITY:
        if settings.has_credential(name):
            return name
    return STATIC_PROVIDER


def build_static_provider(settings: AISettings) -> StaticFallbackProvider:
    """Static provider, with the tertiary adapter when HF_TOKEN is set."""
    tertiary = None
    if settings.has_credential("huggingface"):
        tertiary = get_provider_adapter("huggingface", **settings.provider_kwargs("huggingface"))
    return StaticFallbackProvider(tertiary=tertiary)


def build_reading_assistant(settings: Optional[AISettings] = None) -> ReadingAssistant:
    """
    Build the process-wide reading assistant.

    Args:
        settings: Settings snapshot; read from the environment when omitted

    Returns:
        ReadingAssistant bound to the selected provider
    """
    settings = settings or AISettings.from_env()
    fallback = build_static_provider(settings)

    name = select_provider_name(settings)
    if name == STATIC_PROVIDER:
        logger.warning("未配置任何在线 AI 凭证，使用离线静态数据")
        provider: CapabilityProvider = fallback
    else:
        provider = get_provider_adapter(name, **settings.provider_kwargs(name))
        logger.info(f"AI provider selected: {name} (model={provider.model})")

    return ReadingAssistant(provider, fallback=fallback, timeout=settings.query_timeout)
