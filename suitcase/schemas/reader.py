"""
Reader Schemas

Pydantic models for the reading companion endpoints.
"""
from typing import Any

from pydantic import BaseModel, Field, RootModel

from suitcase.services.ai.schemas import CapabilityRequest, ChatTurn


class BookChatBody(BaseModel):
    """伴读对话请求"""

    title: str = Field(..., min_length=1)
    message: str = Field(..., min_length=1, max_length=4000)
    history: list[ChatTurn] = Field(default_factory=list)


class TranslateBody(BaseModel):
    """翻译请求"""

    text: str = Field(..., min_length=1, max_length=8000)
    target_lang: str = "English"


class ExplainBody(BaseModel):
    """划线解释请求"""

    text: str = Field(..., min_length=1, max_length=8000)
    title: str = Field(..., min_length=1)


class TextResponse(BaseModel):
    """纯文本响应"""

    text: str


class ChapterResponse(BaseModel):
    """章节内容响应（仅含 <h3>/<p> 的 HTML）"""

    title: str
    chapter: int
    html: str


class AssistResponse(BaseModel):
    """通用能力调用响应"""

    kind: str
    result: Any


class AssistRequest(RootModel[CapabilityRequest]):
    """通用能力调用请求（kind 字段区分能力）"""
