"""
AI orchestration layer.

Provider adapters, the static fallback provider, the response normalizer and
the reading assistant that chains them.
"""
