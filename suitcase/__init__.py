"""
Suitcase Reader

AI reading assistant service: book search, recommendations, reviews and
reader tools backed by interchangeable AI providers with fallback chaining.
"""
__version__ = "1.0.0"
