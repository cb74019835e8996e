"""
Pytest Configuration Fixtures

Isolates tests from real provider credentials and builds settings snapshots
for each credential configuration.
"""
import pytest

from suitcase.config import AISettings


PROVIDER_ENV_KEYS = ("GROQ_API_KEY", "GEMINI_API_KEY", "HF_TOKEN")


@pytest.fixture(autouse=True)
def clear_provider_keys(monkeypatch):
    """No test ever sees a real API key from the developer's shell."""
    for key in PROVIDER_ENV_KEYS:
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def offline_settings() -> AISettings:
    """No credentials at all: pure static fallback mode."""
    return AISettings(query_timeout=2)


@pytest.fixture
def groq_settings() -> AISettings:
    return AISettings(groq_api_key="test_groq_key", query_timeout=2)


@pytest.fixture
def gemini_settings() -> AISettings:
    return AISettings(gemini_api_key="test_gemini_key", query_timeout=2)


@pytest.fixture
def all_keys_settings() -> AISettings:
    return AISettings(
        groq_api_key="test_groq_key",
        gemini_api_key="test_gemini_key",
        hf_token="test_hf_token",
        query_timeout=2,
    )
