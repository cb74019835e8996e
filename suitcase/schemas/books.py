"""
Book Discovery Schemas

Pydantic models for search, recommendation, review, concierge and Open Library
endpoints.
"""
from typing import List, Optional

from pydantic import BaseModel, Field

from suitcase.services.ai.schemas import BookSuggestion, ChatTurn, ReviewEntry


class BookListResponse(BaseModel):
    """书籍列表响应"""

    total: int
    items: List[BookSuggestion]


class RecommendationRequest(BaseModel):
    """新用户推荐请求"""

    genres: List[str] = Field(default_factory=list, max_length=20)
    reading_goal: str = Field("", max_length=500)


class ReviewListResponse(BaseModel):
    """书评列表响应"""

    title: str
    total: int
    items: List[ReviewEntry]


class ConciergeChatRequest(BaseModel):
    """图书顾问对话请求"""

    message: str = Field(..., min_length=1, max_length=4000)
    history: List[ChatTurn] = Field(default_factory=list)


# ==================== Open Library ====================


class OpenLibraryBook(BookSuggestion):
    """
    Book record backed by real Open Library metadata.

    Attributes:
        open_library_id: Work key, e.g. "/works/OL45804W"
        cover_image_url: Large cover image, None when the work has no cover
        has_full_text: Whether a readable scan exists on the Internet Archive
        internet_archive_ids: Identifiers of those scans
        readable_url: Reader URL for the first scan, None without one
    """

    source: str = "openLibrary"
    open_library_id: str
    cover_image_url: Optional[str] = None
    average_rating: Optional[float] = None
    ratings_count: Optional[int] = None
    has_full_text: bool = False
    internet_archive_ids: List[str] = Field(default_factory=list)
    readable_url: Optional[str] = None


class OpenLibraryListResponse(BaseModel):
    """Open Library 搜索结果"""

    total: int
    items: List[OpenLibraryBook]


class OpenLibraryDetails(BaseModel):
    """Open Library 作品详情"""

    open_library_id: str
    description: str
    categories: List[str] = Field(default_factory=list)
