"""
Hugging Face Provider Adapter

Tertiary provider backed by the Hugging Face Inference API. It has neither
native structured output nor JSON mode: the schema is written into the prompt
and the reply is recovered by the normalizer.
"""
from typing import Any, List, Optional, Type

import httpx
from langchain_core.messages import AIMessage, BaseMessage, HumanMessage, SystemMessage
from loguru import logger
from pydantic import BaseModel

from suitcase.services.ai.errors import MalformedResponseError, TransportError

from .base_provider import BaseProviderAdapter, message_text


def format_instruction_prompt(messages: List[BaseMessage]) -> str:
    """
    Render chat messages in the Mistral instruction format.

    The system message is folded into the first user turn.

    Examples:
        >>> format_instruction_prompt([SystemMessage("Be brief."), HumanMessage("Hi")])
        '<s>[INST] Be brief.\\n\\nHi [/INST]'
    """
    system = ""
    pending = ""
    parts = []
    for message in messages:
        text = message_text(message)
        if isinstance(message, SystemMessage):
            system = text
        elif isinstance(message, AIMessage):
            parts.append(f"[INST] {pending} [/INST] {text}</s>")
            pending = ""
        elif isinstance(message, HumanMessage):
            if system:
                text = f"{system}\n\n{text}"
                system = ""
            pending = f"{pending}\n\n{text}" if pending else text
    parts.append(f"[INST] {pending} [/INST]")
    return "<s>" + "".join(parts)


class HuggingFaceProviderAdapter(BaseProviderAdapter):
    """
    Hugging Face provider adapter.

    Method: Prompt Only
    - POSTs {"inputs", "parameters"} with a Bearer token
    - Reads the first item's generated_text
    - Any non-2xx status is a TransportError

    Reference: https://huggingface.co/docs/api-inference
    """

    name = "huggingface"

    def _initialize_client(self, **kwargs):
        self.api_url = kwargs.get("api_url") or f"https://api-inference.huggingface.co/models/{self.model}"
        self.max_new_tokens = kwargs.get("max_new_tokens", 2500)
        self.temperature = kwargs.get("temperature", 0.8)
        self.timeout = kwargs.get("timeout", 60)
        # Injected transport for tests (httpx.MockTransport)
        self.transport = kwargs.get("transport")

    async def _generate_json(
        self, messages: List[BaseMessage], schema: Type[BaseModel], max_tokens: Optional[int]
    ) -> Any:
        return await self._generate(messages, max_tokens)

    async def _generate_text(
        self, messages: List[BaseMessage], max_tokens: Optional[int]
    ) -> str:
        return await self._generate(messages, max_tokens)

    async def _generate(self, messages: List[BaseMessage], max_tokens: Optional[int]) -> str:
        payload = {
            "inputs": format_instruction_prompt(messages),
            "parameters": {
                "max_new_tokens": min(max_tokens or self.max_new_tokens, self.max_new_tokens),
                "temperature": self.temperature,
                "return_full_text": False,
            },
        }
        headers = {"Authorization": f"Bearer {self.api_key}"}

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.post(self.api_url, json=payload, headers=headers)
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise TransportError(
                f"Hugging Face returned HTTP {e.response.status_code}"
            ) from e
        except httpx.HTTPError as e:
            raise TransportError(f"Hugging Face request failed: {e}") from e

        try:
            data = response.json()
            text = data[0]["generated_text"]
        except (ValueError, LookupError, TypeError) as e:
            logger.debug(f"Hugging Face 响应格式异常: {response.text[:200]}")
            raise MalformedResponseError(f"Unexpected Hugging Face response: {e}") from e
        return text if isinstance(text, str) else str(text)
