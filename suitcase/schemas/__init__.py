"""
API Schemas Package

Pydantic models for API request/response validation.
"""

# Book Discovery Schemas
from suitcase.schemas.books import (
    BookListResponse,
    RecommendationRequest,
    ReviewListResponse,
    ConciergeChatRequest,
    OpenLibraryBook,
    OpenLibraryListResponse,
    OpenLibraryDetails,
)

# Reader Schemas
from suitcase.schemas.reader import (
    BookChatBody,
    TranslateBody,
    ExplainBody,
    TextResponse,
    ChapterResponse,
    AssistRequest,
    AssistResponse,
)

__all__ = [
    "BookListResponse",
    "RecommendationRequest",
    "ReviewListResponse",
    "ConciergeChatRequest",
    "OpenLibraryBook",
    "OpenLibraryListResponse",
    "OpenLibraryDetails",
    "BookChatBody",
    "TranslateBody",
    "ExplainBody",
    "TextResponse",
    "ChapterResponse",
    "AssistRequest",
    "AssistResponse",
]
