"""
Gemini Provider Adapter 单元测试
"""
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import AIMessage

from suitcase.services.ai.errors import ConfigurationError, MalformedResponseError, TransportError
from suitcase.services.ai.providers import GeminiProviderAdapter
from suitcase.services.ai.schemas import (
    BookListPayload,
    BookPayload,
    ConciergePayload,
    RecommendationPayload,
)


def structured_client(result=None, error=None):
    """Mock client whose with_structured_output(...).ainvoke returns result."""
    client = MagicMock()
    structured = MagicMock()
    structured.ainvoke = AsyncMock(return_value=result, side_effect=error)
    client.with_structured_output.return_value = structured
    return client


def dune() -> BookPayload:
    return BookPayload(
        title="Dune",
        author="Frank Herbert",
        description="Spice and sand.",
        published_year="1965",
        categories=["Sci-Fi"],
        cover_color="#fed7aa",
        isbn="9780441013593",
    )


class TestGeminiAdapter:
    """测试 Gemini 原生结构化输出适配器"""

    def test_method_type_is_native(self):
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=MagicMock())

        assert adapter.config.preferred_method == "native"

    @pytest.mark.asyncio
    async def test_search_uses_native_schema(self):
        client = structured_client(BookListPayload(books=[dune()]))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        books = await adapter.search_books("spice")

        client.with_structured_output.assert_called_once_with(BookListPayload)
        assert books[0].title == "Dune"
        assert books[0].source == "gemini"

    @pytest.mark.asyncio
    async def test_native_request_has_no_schema_prose(self):
        client = structured_client(BookListPayload(books=[]))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        await adapter.search_books("spice")

        messages = client.with_structured_output.return_value.ainvoke.await_args.args[0]
        assert "Respond with JSON only." not in messages[0].content

    @pytest.mark.asyncio
    async def test_concierge_payload(self):
        suggestion = RecommendationPayload(**dune().model_dump(), match_reason="You like deserts.")
        client = structured_client(ConciergePayload(reply="Here you go", suggestions=[suggestion]))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        reply = await adapter.consult_concierge("desert books", [])

        assert reply.reply == "Here you go"
        assert reply.suggestions[0].match_reason == "You like deserts."

    @pytest.mark.asyncio
    async def test_parser_error_is_malformed(self):
        client = structured_client(error=OutputParserException("bad output"))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        with pytest.raises(MalformedResponseError):
            await adapter.generate_reviews("Dune", "Frank Herbert")

    @pytest.mark.asyncio
    async def test_api_error_is_transport_error(self):
        client = structured_client(error=RuntimeError("503 unavailable"))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        with pytest.raises(TransportError):
            await adapter.search_books("spice")

    @pytest.mark.asyncio
    async def test_text_reply_with_content_parts(self):
        client = MagicMock()
        client.ainvoke = AsyncMock(return_value=AIMessage(content=[{"type": "text", "text": "A desert "}, "epic."]))
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key="k", client=client)

        assert await adapter.get_book_summary("Dune") == "A desert epic."

    @pytest.mark.asyncio
    async def test_missing_key_raises_configuration_error(self):
        adapter = GeminiProviderAdapter(model="gemini-2.5-flash", api_key=None)

        assert adapter.client is None
        with pytest.raises(ConfigurationError):
            await adapter.get_book_recap("Dune")
