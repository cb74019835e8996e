"""
Review Pydantic Schemas

Payload model requested from providers and the canonical review entry.
"""
from typing import List

from pydantic import BaseModel, Field


class ReviewPayload(BaseModel):
    """Single reader review as requested from a provider."""

    reviewer_name: str = Field(..., description="Reviewer display name")
    rating: float = Field(..., description="Star rating from 1 to 5")
    text: str = Field(..., description="Review body, Goodreads or Amazon style")
    date: str = Field(..., description="Human readable date, e.g. 'March 2023'")


class ReviewListPayload(BaseModel):
    """Root model for generated reviews."""

    reviews: List[ReviewPayload] = Field(..., description="Generated reviews")


class ReviewEntry(BaseModel):
    """
    Review returned to callers.

    Rating is clamped into [1, 5] by the normalizer before construction.
    """

    id: str = Field(..., min_length=1)
    reviewer_name: str = "Reader"
    rating: float = Field(4, ge=1, le=5)
    text: str = ""
    date: str = "Recently"
    avatar_color: str = "#3B82F6"


__all__ = [
    "ReviewPayload",
    "ReviewListPayload",
    "ReviewEntry",
]
