"""
Groq Provider Adapter 单元测试

使用 langchain 的 FakeListChatModel / AsyncMock 替代真实网络调用。
"""
import json
from unittest.mock import AsyncMock, MagicMock

import pytest
from langchain_core.language_models.fake_chat_models import FakeListChatModel
from langchain_core.messages import AIMessage, HumanMessage, SystemMessage

from suitcase.services.ai.errors import ConfigurationError, MalformedResponseError, TransportError
from suitcase.services.ai.providers import GroqProviderAdapter
from suitcase.services.ai.schemas import ChatTurn


def make_adapter(*responses, **kwargs):
    client = FakeListChatModel(responses=list(responses))
    return GroqProviderAdapter(model="llama-3.3-70b-versatile", api_key="test_groq_key", client=client, **kwargs)


class TestGroqAdapterSetup:
    """测试适配器初始化"""

    def test_method_type_is_json_mode(self):
        assert make_adapter("{}").config.preferred_method == "json_mode"

    def test_real_client_is_created_with_key(self):
        adapter = GroqProviderAdapter(
            model="llama-3.3-70b-versatile",
            api_key="test_groq_key",
            base_url="https://api.groq.com/openai/v1",
        )

        assert adapter.client is not None
        assert adapter.name == "groq"

    def test_no_client_without_key(self):
        adapter = GroqProviderAdapter(model="llama-3.3-70b-versatile", api_key=None)

        assert adapter.client is None
        assert not adapter.has_credential()


class TestGroqAdapterOperations:
    """测试各能力调用"""

    @pytest.mark.asyncio
    async def test_search_books_parses_json_mode_reply(self):
        """Given: JSON mode 根对象 When: 搜索 Then: 返回规范书籍列表"""
        reply = json.dumps({"books": [{"title": "Moby-Dick", "author": "Herman Melville", "isbn": "9780142437247"}]})
        adapter = make_adapter(reply)

        books = await adapter.search_books("whales")

        assert [b.title for b in books] == ["Moby-Dick"]
        assert books[0].source == "groq"
        assert books[0].isbn == "9780142437247"

    @pytest.mark.asyncio
    async def test_search_books_empty_result_is_success(self):
        """Given: 无匹配 When: 搜索 Then: 返回空列表而不是抛异常"""
        adapter = make_adapter('{"books": []}')

        assert await adapter.search_books("xqzzv qqq") == []

    @pytest.mark.asyncio
    async def test_unparseable_reply_raises_malformed(self):
        adapter = make_adapter("I could not find anything, sorry!")

        with pytest.raises(MalformedResponseError):
            await adapter.search_books("whales")

    @pytest.mark.asyncio
    async def test_translate_returns_text(self):
        adapter = make_adapter("Hello")

        assert await adapter.translate_text("Bonjour", "English") == "Hello"

    @pytest.mark.asyncio
    async def test_blank_text_raises_malformed(self):
        adapter = make_adapter("   ")

        with pytest.raises(MalformedResponseError):
            await adapter.get_book_summary("Dune")

    @pytest.mark.asyncio
    async def test_reviews_are_clamped(self):
        adapter = make_adapter('{"reviews": [{"reviewerName": "Ann", "rating": 11, "text": "Wow"}]}')

        reviews = await adapter.generate_reviews("Dune", "Frank Herbert")

        assert reviews[0].rating == 5
        assert reviews[0].reviewer_name == "Ann"

    @pytest.mark.asyncio
    async def test_chapter_is_sanitized(self):
        adapter = make_adapter("```html\n<h2>Chapter 1</h2><p>Text<script>x()</script></p>\n```")

        html = await adapter.generate_book_content("Dune", "Frank Herbert", 1)

        assert html == "<h3>Chapter 1</h3><p>Text</p>"

    @pytest.mark.asyncio
    async def test_concierge_plain_has_no_suggestions(self):
        adapter = make_adapter("Try something by Austen.")

        reply = await adapter.consult_concierge_plain("Something witty?", [])

        assert reply.reply == "Try something by Austen."
        assert reply.suggestions == []


class TestGroqAdapterRequests:
    """测试请求构造"""

    @pytest.mark.asyncio
    async def test_json_request_uses_response_format_and_schema_prose(self):
        client = MagicMock()
        client.ainvoke = AsyncMock(return_value=AIMessage(content='{"books": []}'))
        adapter = GroqProviderAdapter(model="m", api_key="k", client=client)

        await adapter.search_books("dune")

        messages = client.ainvoke.await_args.args[0]
        kwargs = client.ainvoke.await_args.kwargs
        assert kwargs["response_format"] == {"type": "json_object"}
        assert isinstance(messages[0], SystemMessage)
        assert "Respond with JSON only." in messages[0].content
        assert '"dune"' in messages[-1].content

    @pytest.mark.asyncio
    async def test_mood_request_asks_for_match_reasons(self):
        """Given: 心情推荐 When: 调用 Then: JSON mode + match_reason 字段说明 + 心情文本"""
        reply = json.dumps({"books": [{"title": "Persuasion", "match_reason": "Quiet longing"}]})
        client = MagicMock()
        client.ainvoke = AsyncMock(return_value=AIMessage(content=reply))
        adapter = GroqProviderAdapter(model="m", api_key="k", client=client)

        books = await adapter.get_mood_recommendations("wistful")

        messages = client.ainvoke.await_args.args[0]
        assert client.ainvoke.await_args.kwargs["response_format"] == {"type": "json_object"}
        assert "match_reason" in messages[0].content
        assert '"wistful"' in messages[-1].content
        assert books[0].match_reason == "Quiet longing"

    @pytest.mark.asyncio
    async def test_history_becomes_chat_messages(self):
        client = MagicMock()
        client.ainvoke = AsyncMock(return_value=AIMessage(content="Paul is the heir."))
        adapter = GroqProviderAdapter(model="m", api_key="k", client=client)
        history = [ChatTurn(role="user", text="Hi"), ChatTurn(role="model", text="Hello!")]

        await adapter.chat_about_book("Dune", "Who is Paul?", history)

        messages = client.ainvoke.await_args.args[0]
        assert [type(m) for m in messages] == [SystemMessage, HumanMessage, AIMessage, HumanMessage]
        assert client.ainvoke.await_args.kwargs["max_tokens"] == 512

    @pytest.mark.asyncio
    async def test_missing_key_raises_before_network(self):
        """Given: 无凭证 When: 调用 Then: 抛出 ConfigurationError，不发请求"""
        client = MagicMock()
        client.ainvoke = AsyncMock()
        adapter = GroqProviderAdapter(model="m", api_key=None, client=client)

        with pytest.raises(ConfigurationError):
            await adapter.search_books("dune")
        client.ainvoke.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_client_error_becomes_transport_error(self):
        client = MagicMock()
        client.ainvoke = AsyncMock(side_effect=RuntimeError("connection reset"))
        adapter = GroqProviderAdapter(model="m", api_key="k", client=client)

        with pytest.raises(TransportError, match="connection reset"):
            await adapter.explain_context("Call me Ishmael.", "Moby-Dick")
