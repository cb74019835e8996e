"""
API Tests Fixtures

Shared fixtures for API unit tests. The lifespan hook is not run: the reading
assistant and the Open Library client are injected through dependency overrides.
"""
from typing import Generator

import httpx
import pytest
from fastapi.testclient import TestClient
from langchain_core.language_models.fake_chat_models import FakeListChatModel

from suitcase.config import AISettings
from suitcase.dependencies import get_assistant, get_openlibrary
from suitcase.main import app
from suitcase.services.ai.assistant import ReadingAssistant
from suitcase.services.ai.providers import GroqProviderAdapter, StaticFallbackProvider
from suitcase.services.ai.selector import build_reading_assistant
from suitcase.services.openlibrary_service import OpenLibraryService


@pytest.fixture
def offline_assistant() -> ReadingAssistant:
    """Assistant with no credentials (static fallback only)."""
    return build_reading_assistant(AISettings(query_timeout=2))


@pytest.fixture
def client_for():
    """
    Build a test client around a given assistant.

    Usage:
        def test_health(client_for, offline_assistant):
            client = client_for(offline_assistant)
            assert client.get("/health").status_code == 200
    """
    def _make(assistant: ReadingAssistant) -> TestClient:
        app.dependency_overrides[get_assistant] = lambda: assistant
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()


@pytest.fixture
def client(client_for, offline_assistant) -> Generator[TestClient, None, None]:
    """Offline test client."""
    yield client_for(offline_assistant)


@pytest.fixture
def live_client(client_for):
    """
    Test client whose Groq adapter replies with the given canned responses.

    Usage:
        client = live_client("Hello")
    """
    def _make(*responses) -> TestClient:
        adapter = GroqProviderAdapter(
            model="llama-3.3-70b-versatile",
            api_key="test_groq_key",
            client=FakeListChatModel(responses=list(responses)),
        )
        return client_for(ReadingAssistant(adapter, StaticFallbackProvider(), timeout=2))

    return _make


@pytest.fixture
def openlibrary_client(client):
    """
    Offline test client whose Open Library requests go to a mock handler.

    Usage:
        client = openlibrary_client(lambda request: httpx.Response(200, json={"docs": []}))
    """
    def _make(handler) -> TestClient:
        service = OpenLibraryService(timeout=2, transport=httpx.MockTransport(handler))
        app.dependency_overrides[get_openlibrary] = lambda: service
        return client

    return _make
