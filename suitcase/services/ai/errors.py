"""
AI Service Error Taxonomy

All of these are caught inside the reading assistant's fallback chain;
none of them ever reaches a caller of a capability method.
"""


class AIServiceError(Exception):
    """Base class for AI provider failures."""


class ConfigurationError(AIServiceError):
    """The provider's credential is absent. Raised before any network call."""


class TransportError(AIServiceError):
    """Network unreachable, timeout, or non-success HTTP status."""


class MalformedResponseError(AIServiceError):
    """The provider replied, but the payload could not be parsed or mapped."""


__all__ = [
    "AIServiceError",
    "ConfigurationError",
    "TransportError",
    "MalformedResponseError",
]
