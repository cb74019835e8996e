"""
AI Service Schemas Module

This module exports all Pydantic schemas for AI services.
"""
from .book_schema import (
    DEFAULT_COVER_COLOR,
    BookPayload,
    RecommendationPayload,
    BookListPayload,
    RecommendationListPayload,
    ConciergePayload,
    BookSuggestion,
    ConciergeReply,
)
from .review_schema import ReviewPayload, ReviewListPayload, ReviewEntry
from .request_schema import (
    ChatTurn,
    SearchBooksRequest,
    ConciergeRequest,
    OnboardingRequest,
    MoodRequest,
    GenerateReviewsRequest,
    BookChatRequest,
    TranslateRequest,
    ExplainContextRequest,
    GenerateChapterRequest,
    SummaryRequest,
    RecapRequest,
    CapabilityRequest,
)

__all__ = [
    # Books
    "DEFAULT_COVER_COLOR",
    "BookPayload",
    "RecommendationPayload",
    "BookListPayload",
    "RecommendationListPayload",
    "ConciergePayload",
    "BookSuggestion",
    "ConciergeReply",
    # Reviews
    "ReviewPayload",
    "ReviewListPayload",
    "ReviewEntry",
    # Requests
    "ChatTurn",
    "SearchBooksRequest",
    "ConciergeRequest",
    "OnboardingRequest",
    "MoodRequest",
    "GenerateReviewsRequest",
    "BookChatRequest",
    "TranslateRequest",
    "ExplainContextRequest",
    "GenerateChapterRequest",
    "SummaryRequest",
    "RecapRequest",
    "CapabilityRequest",
]
