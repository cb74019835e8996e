"""
Static Fallback Provider

Terminal step of every fallback chain. Implements every operation without
requiring the network:

- Search, onboarding, mood and reviews return fixed literal data.
- The concierge and text operations make one last-resort call to the
  tertiary Hugging Face adapter and return a fixed literal when that is
  unavailable or fails. A non-JSON concierge reply is kept as plain text.

No method of this class raises.
"""
from html import escape
from typing import List, Optional, Sequence

from loguru import logger

from suitcase.services.ai.errors import ConfigurationError
from suitcase.services.ai.schemas import BookSuggestion, ChatTurn, ConciergeReply, ReviewEntry
from suitcase.services.ai.utils.fallback import silent_fallback

from .base_provider import BaseProviderAdapter, CapabilityProvider


OFFLINE_CONCIERGE_REPLY = "I'm having trouble connecting to the cloud, but I'm here listening."
OFFLINE_BOOK_CHAT = "I can't analyze this book right now due to connection issues."
OFFLINE_TRANSLATION = "Translation service unavailable."
OFFLINE_EXPLANATION = "Context service unavailable."
OFFLINE_SUMMARY = "Summary unavailable offline."
OFFLINE_RECAP = "Recap unavailable offline."

_SEARCH_BOOKS = [
    {
        "id": "offline-1",
        "title": "Pride and Prejudice",
        "author": "Jane Austen",
        "description": "A sharp comedy of manners about first impressions and second chances.",
        "published_year": "1813",
        "categories": ["Classic", "Romance"],
        "cover_color": "#fce7f3",
        "isbn": "9780141439518",
    },
    {
        "id": "offline-2",
        "title": "Moby-Dick",
        "author": "Herman Melville",
        "description": "Captain Ahab hunts the white whale across the oceans of the world.",
        "published_year": "1851",
        "categories": ["Classic", "Adventure"],
        "cover_color": "#dbeafe",
        "isbn": "9780142437247",
    },
    {
        "id": "offline-3",
        "title": "Frankenstein",
        "author": "Mary Shelley",
        "description": "A young scientist creates life and cannot escape the consequences.",
        "published_year": "1818",
        "categories": ["Classic", "Gothic"],
        "cover_color": "#dcfce7",
        "isbn": "9780141439471",
    },
    {
        "id": "offline-4",
        "title": "The Adventures of Sherlock Holmes",
        "author": "Arthur Conan Doyle",
        "description": "Twelve cases for the world's most famous consulting detective.",
        "published_year": "1892",
        "categories": ["Classic", "Mystery"],
        "cover_color": "#fef9c3",
        "isbn": "9780140439076",
    },
]

_ONBOARDING_BOOKS = [
    {
        "id": "off-1",
        "title": "The Great Gatsby",
        "author": "F. Scott Fitzgerald",
        "description": "A classic of the Jazz Age.",
        "published_year": "1925",
        "categories": ["Classic"],
        "cover_color": "#fef3c7",
        "isbn": "9780743273565",
        "match_reason": "Timeless classic",
    },
    {
        "id": "off-2",
        "title": "1984",
        "author": "George Orwell",
        "description": "Dystopian social science fiction.",
        "published_year": "1949",
        "categories": ["Sci-Fi"],
        "cover_color": "#f3f4f6",
        "isbn": "9780451524935",
        "match_reason": "Essential reading",
    },
    {
        "id": "off-3",
        "title": "Dune",
        "author": "Frank Herbert",
        "description": "Epic science fiction.",
        "published_year": "1965",
        "categories": ["Sci-Fi"],
        "cover_color": "#fed7aa",
        "isbn": "9780441013593",
        "match_reason": "Masterpiece",
    },
    {
        "id": "off-4",
        "title": "Sapiens",
        "author": "Yuval Noah Harari",
        "description": "A brief history of humankind.",
        "published_year": "2011",
        "categories": ["History"],
        "cover_color": "#e0f2fe",
        "isbn": "9780062316097",
        "match_reason": "Thought provoking",
    },
]

_REVIEWS = [
    {
        "id": "rev-1",
        "reviewer_name": "Offline Reader",
        "rating": 5,
        "text": "This book is a masterpiece!",
        "date": "Today",
        "avatar_color": "#3b82f6",
    },
    {
        "id": "rev-2",
        "reviewer_name": "Bookworm",
        "rating": 4,
        "text": "Really enjoyed the plot twists.",
        "date": "Yesterday",
        "avatar_color": "#ef4444",
    },
]


def offline_chapter(title: str, chapter: int = 1) -> str:
    """Placeholder chapter shown when no provider can generate content."""
    return (
        f"<h3>Chapter {chapter}</h3>"
        f"<p>We are currently unable to generate the full text for {escape(title)} "
        "due to high demand on our AI services.</p>"
        "<p>Please try again later or upload a local copy of this book to continue reading.</p>"
    )


def _offline_concierge(*args, **kwargs) -> ConciergeReply:
    return ConciergeReply(reply=OFFLINE_CONCIERGE_REPLY, suggestions=[])


def _offline_chapter(self, title: str, author: str = "", chapter: int = 1) -> str:
    return offline_chapter(title, chapter)


class StaticFallbackProvider(CapabilityProvider):
    """
    Always-succeeding terminal provider.

    Args:
        tertiary: Optional Hugging Face adapter tried once by text operations
    """

    name = "static"
    is_live = False

    def __init__(self, tertiary: Optional[BaseProviderAdapter] = None):
        self.tertiary = tertiary

    def _tertiary(self) -> BaseProviderAdapter:
        if self.tertiary is None:
            raise ConfigurationError("no tertiary provider configured")
        return self.tertiary

    # ==================== Literal Data ====================

    async def search_books(self, query: str) -> List[BookSuggestion]:
        logger.debug(f"离线搜索结果: {query!r}")
        return [BookSuggestion(**book, source=self.name) for book in _SEARCH_BOOKS]

    async def get_onboarding_recommendations(
        self, genres: Sequence[str], reading_goal: str
    ) -> List[BookSuggestion]:
        return [BookSuggestion(**book, source=self.name) for book in _ONBOARDING_BOOKS]

    async def get_mood_recommendations(self, mood: str) -> List[BookSuggestion]:
        return [BookSuggestion(**book, source=self.name) for book in _ONBOARDING_BOOKS]

    async def generate_reviews(self, title: str, author: str) -> List[ReviewEntry]:
        return [ReviewEntry(**review) for review in _REVIEWS]

    # ==================== Tertiary, Then Literal ====================

    @silent_fallback(return_func=_offline_concierge)
    async def consult_concierge(
        self, message: str, history: Sequence[ChatTurn] = ()
    ) -> ConciergeReply:
        return await self._tertiary().consult_concierge_lenient(message, history)

    @silent_fallback(return_value=OFFLINE_BOOK_CHAT)
    async def chat_about_book(
        self, title: str, message: str, history: Sequence[ChatTurn] = ()
    ) -> str:
        return await self._tertiary().chat_about_book(title, message, history)

    @silent_fallback(return_value=OFFLINE_TRANSLATION)
    async def translate_text(self, text: str, target_lang: str = "English") -> str:
        return await self._tertiary().translate_text(text, target_lang)

    @silent_fallback(return_value=OFFLINE_EXPLANATION)
    async def explain_context(self, text: str, title: str) -> str:
        return await self._tertiary().explain_context(text, title)

    @silent_fallback(return_func=_offline_chapter)
    async def generate_book_content(self, title: str, author: str, chapter: int = 1) -> str:
        return await self._tertiary().generate_book_content(title, author, chapter)

    @silent_fallback(return_value=OFFLINE_SUMMARY)
    async def get_book_summary(self, title: str) -> str:
        return await self._tertiary().get_book_summary(title)

    @silent_fallback(return_value=OFFLINE_RECAP)
    async def get_book_recap(self, title: str) -> str:
        return await self._tertiary().get_book_recap(title)
