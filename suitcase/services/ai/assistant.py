"""
阅读助手服务

The reading assistant is the only object application code talks to. It holds
the provider bound at startup and the static fallback provider, and runs every
capability call through the fallback chain:

    TryLive -> TryLive2 (concierge only) -> Static -> Done

No exception raised by a provider ever reaches the caller.
"""
from typing import Any, List, Optional, Sequence

from loguru import logger

from suitcase.services.ai.errors import ConfigurationError
from suitcase.services.ai.providers import CapabilityProvider, StaticFallbackProvider
from suitcase.services.ai.schemas import (
    BookChatRequest,
    BookSuggestion,
    CapabilityRequest,
    ChatTurn,
    ConciergeReply,
    ConciergeRequest,
    ExplainContextRequest,
    GenerateChapterRequest,
    GenerateReviewsRequest,
    MoodRequest,
    OnboardingRequest,
    RecapRequest,
    ReviewEntry,
    SearchBooksRequest,
    SummaryRequest,
    TranslateRequest,
)
from suitcase.services.ai.utils.fallback import ai_fallback


async def _plain_concierge(self, message: str, history: Sequence[ChatTurn] = ()) -> ConciergeReply:
    plain = getattr(self.provider, "consult_concierge_plain", None)
    if plain is None:
        raise ConfigurationError(f"{self.provider.name} has no plain concierge")
    return await plain(message, history)


class ReadingAssistant:
    """
    阅读助手（能力调用入口）

    Args:
        provider: Provider bound for the process lifetime (live adapter or static)
        fallback: Static fallback provider, the last step of every chain
        timeout: Upper bound in seconds for each live attempt (None disables)
    """

    def __init__(
        self,
        provider: CapabilityProvider,
        fallback: Optional[StaticFallbackProvider] = None,
        timeout: Optional[float] = None,
    ):
        self.provider = provider
        self.fallback = fallback or StaticFallbackProvider()
        self.timeout = timeout
        logger.info(f"ReadingAssistant ready (provider={provider.name}, live={provider.is_live})")

    def get_active_provider(self) -> str:
        """Identifier of the provider bound at startup."""
        return self.provider.name

    def is_live(self) -> bool:
        """False only when bound to the static fallback provider."""
        return self.provider.is_live

    # ==================== Book Discovery ====================

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.search_books(*a, **kw))
    async def search_books(self, query: str) -> List[BookSuggestion]:
        return await self.provider.search_books(query)

    @ai_fallback(
        fallback_func=lambda self, *a, **kw: self.fallback.consult_concierge(*a, **kw),
        secondary_func=_plain_concierge,
    )
    async def consult_concierge(
        self, message: str, history: Sequence[ChatTurn] = ()
    ) -> ConciergeReply:
        return await self.provider.consult_concierge(message, history)

    @ai_fallback(
        fallback_func=lambda self, *a, **kw: self.fallback.get_onboarding_recommendations(*a, **kw)
    )
    async def get_onboarding_recommendations(
        self, genres: Sequence[str], reading_goal: str
    ) -> List[BookSuggestion]:
        return await self.provider.get_onboarding_recommendations(genres, reading_goal)

    @ai_fallback(
        fallback_func=lambda self, *a, **kw: self.fallback.get_mood_recommendations(*a, **kw)
    )
    async def get_mood_recommendations(self, mood: str) -> List[BookSuggestion]:
        return await self.provider.get_mood_recommendations(mood)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.generate_reviews(*a, **kw))
    async def generate_reviews(self, title: str, author: str) -> List[ReviewEntry]:
        return await self.provider.generate_reviews(title, author)

    # ==================== Reader Companion ====================

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.chat_about_book(*a, **kw))
    async def chat_about_book(
        self, title: str, message: str, history: Sequence[ChatTurn] = ()
    ) -> str:
        return await self.provider.chat_about_book(title, message, history)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.translate_text(*a, **kw))
    async def translate_text(self, text: str, target_lang: str = "English") -> str:
        return await self.provider.translate_text(text, target_lang)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.explain_context(*a, **kw))
    async def explain_context(self, text: str, title: str) -> str:
        return await self.provider.explain_context(text, title)

    @ai_fallback(
        fallback_func=lambda self, *a, **kw: self.fallback.generate_book_content(*a, **kw),
        log_message="generate_book_content",
    )
    async def generate_book_content(self, title: str, author: str, chapter: int = 1) -> str:
        return await self.provider.generate_book_content(title, author, chapter)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.get_book_summary(*a, **kw))
    async def get_book_summary(self, title: str) -> str:
        return await self.provider.get_book_summary(title)

    @ai_fallback(fallback_func=lambda self, *a, **kw: self.fallback.get_book_recap(*a, **kw))
    async def get_book_recap(self, title: str) -> str:
        return await self.provider.get_book_recap(title)

    # ==================== Tagged Dispatch ====================

    async def handle(self, request: CapabilityRequest) -> Any:
        """
        Run the operation named by a tagged request.

        Args:
            request: One CapabilityRequest variant

        Returns:
            The operation's result

        Raises:
            TypeError: If the request is not a known variant
        """
        if isinstance(request, SearchBooksRequest):
            return await self.search_books(request.query)
        if isinstance(request, ConciergeRequest):
            return await self.consult_concierge(request.message, request.history)
        if isinstance(request, OnboardingRequest):
            return await self.get_onboarding_recommendations(request.genres, request.reading_goal)
        if isinstance(request, MoodRequest):
            return await self.get_mood_recommendations(request.mood)
        if isinstance(request, GenerateReviewsRequest):
            return await self.generate_reviews(request.title, request.author)
        if isinstance(request, BookChatRequest):
            return await self.chat_about_book(request.title, request.message, request.history)
        if isinstance(request, TranslateRequest):
            return await self.translate_text(request.text, request.target_lang)
        if isinstance(request, ExplainContextRequest):
            return await self.explain_context(request.text, request.title)
        if isinstance(request, GenerateChapterRequest):
            return await self.generate_book_content(request.title, request.author, request.chapter)
        if isinstance(request, SummaryRequest):
            return await self.get_book_summary(request.title)
        if isinstance(request, RecapRequest):
            return await self.get_book_recap(request.title)
        raise TypeError(f"Unsupported capability request: {type(request).__name__}")
