"""
Suitcase Reader Configuration Module

This module implements a hierarchical configuration system:
1. API Keys are retrieved from environment variables (NOT from config files)
2. Other settings are loaded from config.yaml file

Environment Variables (all optional):
    - GROQ_API_KEY: Groq API key (fast inference, preferred provider)
    - GEMINI_API_KEY: Google Gemini API key
    - HF_TOKEN: Hugging Face token for the last-resort inference endpoint
    - SUITCASE_CONFIG: Alternative path to config.yaml

With no key set at all the service runs in static fallback mode.

Usage:
    export GROQ_API_KEY="your_key_here"
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import yaml


# ==================== Path Configuration ====================
# Get the project root directory
BASE_DIR = Path(__file__).resolve().parent.parent
CONFIG_PATH = Path(os.environ.get("SUITCASE_CONFIG", BASE_DIR / "config.yaml"))


# ==================== Load YAML Configuration ====================
def _load_yaml_config():
    """Load configuration from config.yaml, or an empty mapping if it is absent."""
    if not CONFIG_PATH.exists():
        return {}

    with open(CONFIG_PATH, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


# Load config at module import time
_config = _load_yaml_config()


def get_config(key: str, default=None):
    """
    Get configuration value by dot-notation key.

    Args:
        key: Dot-separated key path (e.g., 'ai.groq.model')
        default: Default value if key not found

    Returns:
        Configuration value or default
    """
    keys = key.split(".")
    value = _config

    for k in keys:
        if isinstance(value, dict):
            value = value.get(k)
        else:
            return default

    return value if value is not None else default


# ==================== API Keys from Environment Variables ====================
def _get_env_key(key: str) -> Optional[str]:
    """
    Get API key from environment variable.

    Returns:
        API key value or None (empty strings count as unset)
    """
    return os.environ.get(key) or None


# ==================== Public Configuration Constants ====================

# Application Settings
APP_NAME = get_config("app.name", "Suitcase Reader")
APP_VERSION = get_config("app.version", "1.0.0")
DEBUG = get_config("app.debug", False)

# ==================== AI Service Configuration ====================

# Gemini (Primary)
GEMINI_MODEL = get_config("ai.gemini.model", "gemini-2.5-flash")
GEMINI_TEMPERATURE = get_config("ai.gemini.temperature", 0.7)

# Groq (Secondary, preferred when its key is present)
GROQ_BASE_URL = get_config("ai.groq.base_url", "https://api.groq.com/openai/v1")
GROQ_MODEL = get_config("ai.groq.model", "llama-3.3-70b-versatile")
GROQ_TEMPERATURE = get_config("ai.groq.temperature", 0.7)
GROQ_MAX_TOKENS = get_config("ai.groq.max_tokens", 2048)

# Hugging Face Inference (Tertiary, used by the static fallback)
HF_API_URL = get_config(
    "ai.huggingface.api_url",
    "https://api-inference.huggingface.co/models/mistralai/Mistral-7B-Instruct-v0.3",
)
HF_MAX_NEW_TOKENS = get_config("ai.huggingface.max_new_tokens", 2500)
HF_TEMPERATURE = get_config("ai.huggingface.temperature", 0.8)

# Common AI Settings
AI_QUERY_TIMEOUT = get_config("ai.query_timeout", 60)

# ==================== Open Library Configuration ====================
OPENLIBRARY_BASE_URL = get_config("openlibrary.base_url", "https://openlibrary.org")
OPENLIBRARY_COVERS_URL = get_config("openlibrary.covers_url", "https://covers.openlibrary.org")
OPENLIBRARY_TIMEOUT = get_config("openlibrary.timeout", 10)
OPENLIBRARY_SEARCH_LIMIT = get_config("openlibrary.search_limit", 20)

# ==================== Logging Configuration ====================
LOG_LEVEL = get_config("logging.level", "INFO")
_log_file = get_config("logging.file", "")
LOG_FILE = str(BASE_DIR / _log_file) if _log_file else ""
LOG_ROTATION = get_config("logging.rotation", "10 MB")
LOG_RETENTION = get_config("logging.retention", "7 days")

# ==================== API Server Configuration ====================
API_HOST = get_config("api.host", "127.0.0.1")
API_PORT = get_config("api.port", 8000)
CORS_ORIGINS = get_config("api.cors_origins", ["http://localhost:5173"])


# ==================== AI Settings Snapshot ====================
@dataclass(frozen=True)
class AISettings:
    """
    Immutable snapshot of everything the AI layer needs.

    Built once at process start (credentials are read from the environment
    exactly once) and passed to whatever constructs the reading assistant.

    Attributes:
        groq_api_key: Groq key, None when absent
        gemini_api_key: Gemini key, None when absent
        hf_token: Hugging Face token, None when absent
        query_timeout: Upper bound in seconds for one live provider attempt
    """
    groq_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None
    hf_token: Optional[str] = None
    groq_base_url: str = GROQ_BASE_URL
    groq_model: str = GROQ_MODEL
    groq_temperature: float = GROQ_TEMPERATURE
    groq_max_tokens: int = GROQ_MAX_TOKENS
    gemini_model: str = GEMINI_MODEL
    gemini_temperature: float = GEMINI_TEMPERATURE
    hf_api_url: str = HF_API_URL
    hf_max_new_tokens: int = HF_MAX_NEW_TOKENS
    hf_temperature: float = HF_TEMPERATURE
    query_timeout: float = AI_QUERY_TIMEOUT

    def __post_init__(self):
        if self.query_timeout is None or self.query_timeout <= 0:
            raise ValueError(
                f"ai.query_timeout must be a positive number of seconds, got {self.query_timeout!r}"
            )

    @classmethod
    def from_env(cls) -> "AISettings":
        """Read provider credentials from the environment."""
        return cls(
            groq_api_key=_get_env_key("GROQ_API_KEY"),
            gemini_api_key=_get_env_key("GEMINI_API_KEY"),
            hf_token=_get_env_key("HF_TOKEN"),
        )

    def has_credential(self, provider: str) -> bool:
        """
        Whether a provider's secret is present.

        Absence is the only signal that a provider is unavailable; there is
        no liveness or quota probing.
        """
        keys = {
            "groq": self.groq_api_key,
            "gemini": self.gemini_api_key,
            "huggingface": self.hf_token,
        }
        return bool(keys.get(provider.lower()))

    def provider_kwargs(self, provider: str) -> dict:
        """
        Get adapter constructor arguments for a provider.

        Returns:
            dict: Contains 'model', 'api_key' and provider-specific options

        Raises:
            ValueError: If provider is not supported
        """
        provider = provider.lower()

        if provider == "groq":
            return {
                "model": self.groq_model,
                "api_key": self.groq_api_key,
                "base_url": self.groq_base_url,
                "temperature": self.groq_temperature,
                "max_tokens": self.groq_max_tokens,
            }
        elif provider == "gemini":
            return {
                "model": self.gemini_model,
                "api_key": self.gemini_api_key,
                "temperature": self.gemini_temperature,
            }
        elif provider == "huggingface":
            return {
                "model": self.hf_api_url.rstrip("/").split("/models/")[-1],
                "api_key": self.hf_token,
                "api_url": self.hf_api_url,
                "max_new_tokens": self.hf_max_new_tokens,
                "temperature": self.hf_temperature,
                "timeout": self.query_timeout,
            }
        else:
            raise ValueError(
                f"Unsupported AI provider: {provider}. "
                f"Supported providers: groq, gemini, huggingface"
            )


# ==================== Utility Functions ====================
def print_config_summary(settings: Optional[AISettings] = None):
    """Print a summary of current configuration (without exposing API keys)."""
    settings = settings or AISettings.from_env()

    def _flag(value):
        return "*** Set ***" if value else "NOT SET"

    print(f"\n{'='*60}")
    print(f"Application: {APP_NAME} v{APP_VERSION}")
    print(f"Debug Mode: {DEBUG}")
    print(f"{'='*60}")

    print(f"\n[AI Services]")
    print(f"  Groq Model: {settings.groq_model}")
    print(f"  Groq API Key: {_flag(settings.groq_api_key)}")
    print(f"  Gemini Model: {settings.gemini_model}")
    print(f"  Gemini API Key: {_flag(settings.gemini_api_key)}")
    print(f"  Hugging Face Endpoint: {settings.hf_api_url}")
    print(f"  Hugging Face Token: {_flag(settings.hf_token)}")
    print(f"  Query Timeout: {settings.query_timeout}s")

    print(f"\n[Open Library]")
    print(f"  Endpoint: {OPENLIBRARY_BASE_URL}")
    print(f"  Timeout: {OPENLIBRARY_TIMEOUT}s")

    print(f"\n[API Server]")
    print(f"  Host: {API_HOST}")
    print(f"  Port: {API_PORT}")
    print(f"{'='*60}\n")


if __name__ == "__main__":
    # Test configuration loading
    print_config_summary()
