"""
Gemini Provider Adapter

This module implements the adapter for Google Gemini API.
Gemini supports native structured output via with_structured_output().
"""
from typing import Any, List, Optional, Type

from langchain_core.exceptions import OutputParserException
from langchain_core.messages import BaseMessage
from langchain_google_genai import ChatGoogleGenerativeAI
from pydantic import BaseModel, ValidationError

from suitcase.services.ai.errors import MalformedResponseError, TransportError

from .base_provider import BaseProviderAdapter, message_text


class GeminiProviderAdapter(BaseProviderAdapter):
    """
    Gemini provider adapter.

    Method: Native Structured Output
    - Uses with_structured_output() method
    - No schema prose in the prompt
    - The returned model instance still goes through the normalizer

    Reference: https://python.langchain.com/docs/integrations/platforms/google_ai
    """

    name = "gemini"

    def _initialize_client(self, **kwargs):
        """Initialize Gemini client (skipped when no key is configured)."""
        self.client = kwargs.get("client")
        if self.client is None and self.api_key:
            self.client = ChatGoogleGenerativeAI(
                model=self.model,
                api_key=self.api_key,
                temperature=kwargs.get("temperature", 0.7),
            )

    async def _generate_json(
        self, messages: List[BaseMessage], schema: Type[BaseModel], max_tokens: Optional[int]
    ) -> Any:
        try:
            structured_llm = self.client.with_structured_output(schema)
            return await structured_llm.ainvoke(messages)
        except (OutputParserException, ValidationError) as e:
            raise MalformedResponseError(f"Gemini structured output invalid: {e}") from e
        except Exception as e:
            raise TransportError(f"Gemini API call failed: {e}") from e

    async def _generate_text(
        self, messages: List[BaseMessage], max_tokens: Optional[int]
    ) -> str:
        try:
            response = await self.client.ainvoke(messages)
        except Exception as e:
            raise TransportError(f"Gemini API call failed: {e}") from e
        return message_text(response)
