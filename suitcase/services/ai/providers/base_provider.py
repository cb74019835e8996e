"""
Base Provider Adapter Module

This module defines the capability interface shared by every provider and the
abstract base class for live provider adapters.

Provider adapters encapsulate the differences between AI providers: how the
client is created, how output requirements are attached to a request, and how
the raw reply is extracted. Everything else (prompts, normalization, literal
defaults) lives here once.
"""
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Sequence, Type

from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from loguru import logger
from pydantic import BaseModel

from suitcase.services.ai import prompts
from suitcase.services.ai.errors import ConfigurationError, MalformedResponseError
from suitcase.services.ai.normalizer import (
    Unparseable,
    normalize_books,
    normalize_chapter_html,
    normalize_concierge,
    normalize_reviews,
    normalize_text,
)
from suitcase.services.ai.schemas import (
    BookListPayload,
    BookSuggestion,
    ChatTurn,
    ConciergePayload,
    ConciergeReply,
    RecommendationListPayload,
    ReviewEntry,
    ReviewListPayload,
)
from suitcase.services.ai.structured_output_config import get_provider_config


class CapabilityProvider(ABC):
    """
    The reading-assistant operations, identical for every provider.

    Implementations: the live adapters below and the static fallback provider.
    """

    name: str = ""
    is_live: bool = True

    @abstractmethod
    async def search_books(self, query: str) -> List[BookSuggestion]:
        pass

    @abstractmethod
    async def consult_concierge(
        self, message: str, history: Sequence[ChatTurn]
    ) -> ConciergeReply:
        pass

    @abstractmethod
    async def get_onboarding_recommendations(
        self, genres: Sequence[str], reading_goal: str
    ) -> List[BookSuggestion]:
        pass

    @abstractmethod
    async def get_mood_recommendations(self, mood: str) -> List[BookSuggestion]:
        pass

    @abstractmethod
    async def generate_reviews(self, title: str, author: str) -> List[ReviewEntry]:
        pass

    @abstractmethod
    async def chat_about_book(
        self, title: str, message: str, history: Sequence[ChatTurn]
    ) -> str:
        pass

    @abstractmethod
    async def translate_text(self, text: str, target_lang: str = "English") -> str:
        pass

    @abstractmethod
    async def explain_context(self, text: str, title: str) -> str:
        pass

    @abstractmethod
    async def generate_book_content(self, title: str, author: str, chapter: int = 1) -> str:
        pass

    @abstractmethod
    async def get_book_summary(self, title: str) -> str:
        pass

    @abstractmethod
    async def get_book_recap(self, title: str) -> str:
        pass


def message_text(message: Any) -> str:
    """Extract plain text from a chat model reply (string or content parts)."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type", "text") == "text":
                parts.append(str(part.get("text", "")))
        return "".join(parts)
    return "" if content is None else str(content)


class BaseProviderAdapter(CapabilityProvider):
    """
    Abstract base class for live provider adapters.

    Each provider adapter implements the specific logic for:
    - Initializing the provider's client
    - Sending the output requirements its structured output method needs
    - Sending one request and returning the raw reply

    Design Pattern: Adapter Pattern
    - Allows different providers to be used interchangeably
    - Encapsulates provider-specific logic
    - Shares prompts and the normalizer across providers

    Error contract: every operation either returns a fully normalized result
    or raises ``ConfigurationError`` (no credential, checked before any
    network call), ``TransportError`` or ``MalformedResponseError``.
    """

    def __init__(self, model: str, **kwargs):
        """
        Initialize the provider adapter.

        Args:
            model: Model name/identifier
            **kwargs: Provider-specific parameters (api_key, base_url,
                temperature, client, ...)
        """
        self.model = model
        self.api_key = kwargs.get("api_key")
        self.config = get_provider_config(self.name)
        self._initialize_client(**kwargs)

    @abstractmethod
    def _initialize_client(self, **kwargs):
        """
        Initialize the provider's client.

        Args:
            **kwargs: Provider-specific parameters (api_key, base_url, etc.)
        """
        pass

    @abstractmethod
    async def _generate_json(
        self, messages: List[BaseMessage], schema: Type[BaseModel], max_tokens: Optional[int]
    ) -> Any:
        """
        Send a request that expects a structured reply.

        Returns:
            Raw text or an already-decoded payload, handed to the normalizer

        Raises:
            TransportError: If the request fails
        """
        pass

    @abstractmethod
    async def _generate_text(
        self, messages: List[BaseMessage], max_tokens: Optional[int]
    ) -> str:
        """
        Send a request that expects free text.

        Raises:
            TransportError: If the request fails
        """
        pass

    # ==================== Request Plumbing ====================

    def has_credential(self) -> bool:
        return bool(self.api_key)

    def _require_credential(self):
        if not self.has_credential():
            raise ConfigurationError(f"{self.name}: API key not configured")

    def build_messages(
        self, prompt: prompts.Prompt, schema: Optional[Type[BaseModel]] = None
    ) -> List[BaseMessage]:
        """
        Build chat messages for a prompt.

        Providers without native structured output get the schema written
        into the system message.
        """
        system = prompt.system
        if schema is not None and self.config.needs_schema_prompt:
            system = f"{system}\n\n{prompts.schema_instructions(schema)}"

        messages: List[BaseMessage] = [SystemMessage(content=system)]
        for turn in prompt.history:
            if turn["role"] == "model":
                messages.append(AIMessage(content=turn["text"]))
            else:
                messages.append(HumanMessage(content=turn["text"]))
        messages.append(HumanMessage(content=prompt.user))
        return messages

    async def _request_json(self, prompt: prompts.Prompt, schema: Type[BaseModel]) -> Any:
        self._require_credential()
        return await self._generate_json(self.build_messages(prompt, schema), schema, prompt.max_tokens)

    async def _request_text(self, prompt: prompts.Prompt) -> str:
        self._require_credential()
        return await self._generate_text(self.build_messages(prompt), prompt.max_tokens)

    def _expect(self, result: Any, operation: str) -> Any:
        if isinstance(result, Unparseable):
            logger.warning(f"{self.name}.{operation}: 响应无法解析 ({result.reason})")
            raise MalformedResponseError(f"{self.name}.{operation}: {result.reason}")
        return result

    # ==================== Capability Operations ====================

    async def search_books(self, query: str) -> List[BookSuggestion]:
        raw = await self._request_json(prompts.search_books(query), BookListPayload)
        return self._expect(normalize_books(raw, self.name), "search_books")

    async def consult_concierge(
        self, message: str, history: Sequence[ChatTurn] = ()
    ) -> ConciergeReply:
        raw = await self._request_json(prompts.concierge(message, history), ConciergePayload)
        return self._expect(normalize_concierge(raw, self.name), "consult_concierge")

    async def consult_concierge_plain(
        self, message: str, history: Sequence[ChatTurn] = ()
    ) -> ConciergeReply:
        """Plain-text concierge turn on the same provider, without suggestions."""
        raw = await self._request_text(prompts.concierge_plain(message, history))
        reply = self._expect(normalize_text(raw), "consult_concierge_plain")
        return ConciergeReply(reply=reply, suggestions=[])

    async def consult_concierge_lenient(
        self, message: str, history: Sequence[ChatTurn] = ()
    ) -> ConciergeReply:
        """
        Concierge turn that keeps a non-JSON reply as plain text.

        One request. Used by the static provider for its tertiary attempt.
        """
        raw = await self._request_json(prompts.concierge(message, history), ConciergePayload)
        reply = normalize_concierge(raw, self.name)
        if isinstance(reply, Unparseable):
            text = self._expect(normalize_text(raw), "consult_concierge_lenient")
            return ConciergeReply(reply=text, suggestions=[])
        return reply

    async def get_onboarding_recommendations(
        self, genres: Sequence[str], reading_goal: str
    ) -> List[BookSuggestion]:
        raw = await self._request_json(
            prompts.onboarding(genres, reading_goal), RecommendationListPayload
        )
        return self._expect(normalize_books(raw, self.name), "get_onboarding_recommendations")

    async def get_mood_recommendations(self, mood: str) -> List[BookSuggestion]:
        raw = await self._request_json(prompts.mood(mood), RecommendationListPayload)
        return self._expect(normalize_books(raw, self.name), "get_mood_recommendations")

    async def generate_reviews(self, title: str, author: str) -> List[ReviewEntry]:
        raw = await self._request_json(prompts.reviews(title, author), ReviewListPayload)
        return self._expect(normalize_reviews(raw, self.name), "generate_reviews")

    async def chat_about_book(
        self, title: str, message: str, history: Sequence[ChatTurn] = ()
    ) -> str:
        raw = await self._request_text(prompts.book_chat(title, message, history))
        return self._expect(normalize_text(raw), "chat_about_book")

    async def translate_text(self, text: str, target_lang: str = "English") -> str:
        raw = await self._request_text(prompts.translate(text, target_lang))
        return self._expect(normalize_text(raw), "translate_text")

    async def explain_context(self, text: str, title: str) -> str:
        raw = await self._request_text(prompts.explain(text, title))
        return self._expect(normalize_text(raw), "explain_context")

    async def generate_book_content(self, title: str, author: str, chapter: int = 1) -> str:
        raw = await self._request_text(prompts.chapter(title, author, chapter))
        return self._expect(normalize_chapter_html(raw), "generate_book_content")

    async def get_book_summary(self, title: str) -> str:
        raw = await self._request_text(prompts.summary(title))
        return self._expect(normalize_text(raw), "get_book_summary")

    async def get_book_recap(self, title: str) -> str:
        raw = await self._request_text(prompts.recap(title))
        return self._expect(normalize_text(raw), "get_book_recap")
