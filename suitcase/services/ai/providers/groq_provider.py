"""
Groq Provider Adapter

This module implements the adapter for the Groq API (OpenAI-compatible).
Groq supports JSON mode via response_format parameter but not native structured output.
"""
from typing import Any, List, Optional, Type

from langchain_core.messages import BaseMessage
from langchain_openai import ChatOpenAI
from pydantic import BaseModel

from suitcase.services.ai.errors import TransportError

from .base_provider import BaseProviderAdapter, message_text


class GroqProviderAdapter(BaseProviderAdapter):
    """
    Groq provider adapter.

    Method: JSON Mode
    - Uses response_format={"type": "json_object"}
    - Field requirements are written into the system message
    - Does NOT support native with_structured_output()

    Reference: https://console.groq.com/docs/openai
    """

    name = "groq"

    def _initialize_client(self, **kwargs):
        """Initialize Groq OpenAI-compatible client (skipped when no key is configured)."""
        self.max_tokens = kwargs.get("max_tokens", 2048)
        self.client = kwargs.get("client")
        if self.client is None and self.api_key:
            self.client = ChatOpenAI(
                model=self.model,
                base_url=kwargs.get("base_url"),
                api_key=self.api_key,
                temperature=kwargs.get("temperature", 0.7),
                max_tokens=self.max_tokens,
            )

    async def _generate_json(
        self, messages: List[BaseMessage], schema: Type[BaseModel], max_tokens: Optional[int]
    ) -> Any:
        try:
            # Use response_format to force JSON output
            response = await self.client.ainvoke(
                messages,
                response_format={"type": "json_object"},
                max_tokens=max_tokens or self.max_tokens,
            )
        except Exception as e:
            raise TransportError(f"Groq API call failed: {e}") from e
        return message_text(response)

    async def _generate_text(
        self, messages: List[BaseMessage], max_tokens: Optional[int]
    ) -> str:
        try:
            response = await self.client.ainvoke(
                messages, max_tokens=max_tokens or self.max_tokens
            )
        except Exception as e:
            raise TransportError(f"Groq API call failed: {e}") from e
        return message_text(response)
