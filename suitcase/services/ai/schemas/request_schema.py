"""
Capability Request Schemas

Tagged union over the capability operations. Each variant is frozen so
its fields cannot change for the duration of a call.
"""
from typing import Annotated, Literal, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field


class ChatTurn(BaseModel):
    """One message of a conversation history."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "model"]
    text: str


class _Request(BaseModel):
    model_config = ConfigDict(frozen=True)


class SearchBooksRequest(_Request):
    kind: Literal["search_books"] = "search_books"
    query: str


class ConciergeRequest(_Request):
    kind: Literal["concierge"] = "concierge"
    message: str
    history: Tuple[ChatTurn, ...] = ()


class OnboardingRequest(_Request):
    kind: Literal["onboarding"] = "onboarding"
    genres: Tuple[str, ...] = ()
    reading_goal: str = ""


class MoodRequest(_Request):
    kind: Literal["mood"] = "mood"
    mood: str


class GenerateReviewsRequest(_Request):
    kind: Literal["reviews"] = "reviews"
    title: str
    author: str


class BookChatRequest(_Request):
    kind: Literal["book_chat"] = "book_chat"
    title: str
    message: str
    history: Tuple[ChatTurn, ...] = ()


class TranslateRequest(_Request):
    kind: Literal["translate"] = "translate"
    text: str
    target_lang: str = "English"


class ExplainContextRequest(_Request):
    kind: Literal["explain"] = "explain"
    text: str
    title: str


class GenerateChapterRequest(_Request):
    kind: Literal["chapter"] = "chapter"
    title: str
    author: str
    chapter: int = Field(1, ge=1)


class SummaryRequest(_Request):
    kind: Literal["summary"] = "summary"
    title: str


class RecapRequest(_Request):
    kind: Literal["recap"] = "recap"
    title: str


CapabilityRequest = Annotated[
    Union[
        SearchBooksRequest,
        ConciergeRequest,
        OnboardingRequest,
        MoodRequest,
        GenerateReviewsRequest,
        BookChatRequest,
        TranslateRequest,
        ExplainContextRequest,
        GenerateChapterRequest,
        SummaryRequest,
        RecapRequest,
    ],
    Field(discriminator="kind"),
]


__all__ = [
    "ChatTurn",
    "SearchBooksRequest",
    "ConciergeRequest",
    "OnboardingRequest",
    "MoodRequest",
    "GenerateReviewsRequest",
    "BookChatRequest",
    "TranslateRequest",
    "ExplainContextRequest",
    "GenerateChapterRequest",
    "SummaryRequest",
    "RecapRequest",
    "CapabilityRequest",
]
