"""
Book Suggestion Pydantic Schemas

This module defines two families of models:
- Payload models: the exact shape requested from a provider. Every field is
  required so that native structured output gets an explicit required list.
- Canonical models: what callers of the reading assistant receive. Optional
  fields carry literal defaults so rendering never branches on absence.
"""
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


DEFAULT_COVER_COLOR = "#E2E8F0"
UNKNOWN = "Unknown"


# ==================== Provider Payload Models ====================


class BookPayload(BaseModel):
    """Single book as requested from a provider."""

    title: str = Field(..., description="Exact title of a real, existing book")
    author: str = Field(..., description="Author's full name")
    description: str = Field(..., description="A compelling two-sentence hook")
    published_year: str = Field(..., description="Year of first publication")
    categories: List[str] = Field(..., description="Genre or subject labels")
    cover_color: str = Field(
        ..., description="A pastel hex color code matching the book's vibe"
    )
    isbn: str = Field(
        ..., description="Valid ISBN-13 (preferred) or ISBN-10 for cover lookup"
    )


class RecommendationPayload(BookPayload):
    """Book with a personalised reason, used by concierge and onboarding."""

    match_reason: str = Field(
        ..., description="One personalised sentence on why this book fits the reader"
    )


class BookListPayload(BaseModel):
    """Root model for search results."""

    books: List[BookPayload] = Field(
        ..., description="Matching books; empty when nothing matches"
    )


class RecommendationListPayload(BaseModel):
    """Root model for onboarding recommendations."""

    books: List[RecommendationPayload] = Field(..., description="Recommended books")


class ConciergePayload(BaseModel):
    """Root model for one concierge turn."""

    reply: str = Field(..., description="Conversational response to the user")
    suggestions: List[RecommendationPayload] = Field(
        ...,
        description="1-3 books when the user wants recommendations, otherwise empty",
    )


# ==================== Canonical Result Models ====================


class BookSuggestion(BaseModel):
    """
    Book record returned to callers.

    Attributes:
        id: Opaque non-empty id, kept from the payload or freshly generated
        published_year: Free text, not validated
        categories: Set-like labels, duplicates removed
        isbn: None when the provider gave none
        match_reason: Empty unless produced by a personalised operation
        source: Provider that produced the record
    """

    id: str = Field(..., min_length=1)
    title: str
    author: str = UNKNOWN
    description: str = ""
    published_year: str = UNKNOWN
    categories: List[str] = Field(default_factory=list)
    cover_color: str = DEFAULT_COVER_COLOR
    isbn: Optional[str] = None
    match_reason: str = ""
    source: str = "ai"

    @field_validator("categories")
    @classmethod
    def dedupe_categories(cls, v):
        """Drop blank and duplicate labels, keeping first occurrence."""
        seen = []
        for label in v:
            label = label.strip()
            if label and label not in seen:
                seen.append(label)
        return seen


class ConciergeReply(BaseModel):
    """Concierge result: a reply plus zero or more suggestions."""

    reply: str
    suggestions: List[BookSuggestion] = Field(default_factory=list)


__all__ = [
    "DEFAULT_COVER_COLOR",
    "BookPayload",
    "RecommendationPayload",
    "BookListPayload",
    "RecommendationListPayload",
    "ConciergePayload",
    "BookSuggestion",
    "ConciergeReply",
]
