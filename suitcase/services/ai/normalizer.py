"""
Response Normalizer

Converts a provider's raw reply into the canonical result for one operation.

Raw replies come in three flavours: a JSON string, JSON wrapped in a markdown
fence or in prose, or an already-decoded payload (native structured output).
Every function here is pure and synchronous and never raises: when nothing
usable can be recovered it returns an ``Unparseable`` value, which adapters
turn into ``MalformedResponseError``.
"""
import json
import math
import uuid
from dataclasses import dataclass
from typing import Any, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, ValidationError

from suitcase.services.ai.schemas import (
    BookSuggestion,
    ConciergeReply,
    ReviewEntry,
)
from suitcase.services.ai.utils.html_sanitizer import sanitize_chapter_html
from suitcase.services.ai.utils.partial_parser import (
    extract_fields_from_dict,
    extract_first_json_span,
    strip_code_fence,
)


AVATAR_COLORS = ["#EF4444", "#F59E0B", "#10B981", "#3B82F6", "#8B5CF6", "#EC4899"]
DEFAULT_RATING = 4.0
DEFAULT_CONCIERGE_REPLY = "I'm pondering that thought..."

# Keys a provider may use for the list inside a JSON-mode root object
_LIST_KEYS = ("books", "suggestions", "recommendations", "results", "items", "reviews")

BOOK_FIELD_MAPPINGS = {
    "id": ["id"],
    "title": ["title", "name"],
    "author": ["author", "authors"],
    "description": ["description", "summary"],
    "published_year": ["published_year", "publishedYear", "year"],
    "categories": ["categories", "genres", "category"],
    "cover_color": ["cover_color", "coverColor", "color"],
    "isbn": ["isbn", "isbn13", "ISBN"],
    "match_reason": ["match_reason", "matchReason", "reason"],
    "source": ["source"],
}

REVIEW_FIELD_MAPPINGS = {
    "id": ["id"],
    "reviewer_name": ["reviewer_name", "reviewerName", "name", "reviewer"],
    "rating": ["rating", "stars"],
    "text": ["text", "review", "body"],
    "date": ["date"],
    "avatar_color": ["avatar_color", "avatarColor"],
}


@dataclass(frozen=True)
class Unparseable:
    """Signal that a raw reply could not be turned into the expected shape."""

    reason: str
    raw: str = ""


# ==================== Raw Parsing ====================


def parse_model_output(raw: Any) -> Any:
    """
    Decode JSON from a raw reply.

    Attempts, in order:
        1. Whole-text JSON parse
        2. Strip one markdown code fence and parse again
        3. Decode the first balanced {...} or [...] span

    Args:
        raw: Model text, or an already-decoded payload (dict, list, pydantic model)

    Returns:
        The decoded value, or ``Unparseable`` if all attempts fail
    """
    if isinstance(raw, BaseModel):
        return raw.model_dump()
    if isinstance(raw, (dict, list)):
        return raw
    if not isinstance(raw, str) or not raw.strip():
        return Unparseable("empty response", "" if raw is None else str(raw))

    text = raw.strip()
    try:
        return json.loads(text)
    except json.JSONDecodeError:
        pass

    unfenced = strip_code_fence(text)
    if unfenced != text:
        try:
            return json.loads(unfenced)
        except json.JSONDecodeError:
            pass

    try:
        return extract_first_json_span(text)
    except ValueError:
        logger.debug(f"无法解析模型输出: {text[:200]}")
        return Unparseable("no JSON found in response", text[:500])


def _new_id(source: str) -> str:
    return f"{source}-{uuid.uuid4().hex[:12]}"


def _as_text(value: Any, default: str) -> str:
    """Text form of a field; ``default`` only when the field is absent or null."""
    if value is None:
        return default
    if isinstance(value, (list, tuple)):
        return ", ".join(str(v) for v in value if v is not None)
    return str(value)


def _as_labels(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [part.strip() for part in value.split(",") if part.strip()]
    if isinstance(value, (list, tuple, set)):
        return [str(v) for v in value if v is not None]
    return [str(value)]


def _clamp_rating(value: Any) -> float:
    try:
        rating = float(value)
    except (TypeError, ValueError):
        return DEFAULT_RATING
    if math.isnan(rating):
        return DEFAULT_RATING
    return min(5.0, max(1.0, rating))


def _unwrap_items(data: Any) -> Optional[list]:
    """Find the item list in a bare array or a JSON-mode root object."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in _LIST_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
        if "title" in data:
            return [data]
    return None


# ==================== Canonical Mapping ====================


def to_book_suggestion(item: dict, source: str) -> BookSuggestion:
    """Map one decoded book object, filling literal defaults."""
    fields = extract_fields_from_dict(item, BOOK_FIELD_MAPPINGS)
    isbn = fields.get("isbn")
    return BookSuggestion(
        id=_as_text(fields.get("id"), "") or _new_id(source),
        title=_as_text(fields.get("title"), "Unknown"),
        author=_as_text(fields.get("author"), "Unknown"),
        description=_as_text(fields.get("description"), ""),
        published_year=_as_text(fields.get("published_year"), "Unknown"),
        categories=_as_labels(fields.get("categories")),
        cover_color=_as_text(fields.get("cover_color"), "#E2E8F0"),
        isbn=None if isbn is None else _as_text(isbn, ""),
        match_reason=_as_text(fields.get("match_reason"), ""),
        source=_as_text(fields.get("source"), source),
    )


def to_review_entry(item: dict, index: int, source: str) -> ReviewEntry:
    """Map one decoded review object; rating is always clamped to [1, 5]."""
    fields = extract_fields_from_dict(item, REVIEW_FIELD_MAPPINGS)
    return ReviewEntry(
        id=_as_text(fields.get("id"), "") or _new_id(f"{source}-review"),
        reviewer_name=_as_text(fields.get("reviewer_name"), "Reader"),
        rating=_clamp_rating(fields.get("rating")),
        text=_as_text(fields.get("text"), ""),
        date=_as_text(fields.get("date"), "Recently"),
        avatar_color=_as_text(
            fields.get("avatar_color"), AVATAR_COLORS[index % len(AVATAR_COLORS)]
        ),
    )


def normalize_books(raw: Any, source: str = "ai") -> Union[List[BookSuggestion], Unparseable]:
    """
    Normalize a book list reply.

    An empty list is a valid result ("nothing matched"), not a failure.

    Args:
        raw: Raw provider reply
        source: Provider name recorded on each suggestion

    Returns:
        List of BookSuggestion, or Unparseable

    Examples:
        >>> books = normalize_books('```json\\n[{"title": "A"}]\\n```')
        >>> books[0].title, books[0].author, books[0].categories
        ('A', 'Unknown', [])
    """
    data = parse_model_output(raw)
    if isinstance(data, Unparseable):
        return data

    items = _unwrap_items(data)
    if items is None:
        return Unparseable(f"expected a list of books, got {type(data).__name__}", str(raw)[:500])
    if not all(isinstance(item, dict) for item in items):
        return Unparseable("book list contains non-object items", str(raw)[:500])

    try:
        return [to_book_suggestion(item, source) for item in items]
    except ValidationError as e:
        return Unparseable(f"book item failed validation: {str(e)[:200]}", str(raw)[:500])


def normalize_concierge(raw: Any, source: str = "ai") -> Union[ConciergeReply, Unparseable]:
    """
    Normalize a concierge reply of shape {"reply": ..., "suggestions": [...]}.

    Returns:
        ConciergeReply, or Unparseable
    """
    data = parse_model_output(raw)
    if isinstance(data, Unparseable):
        return data
    if not isinstance(data, dict):
        return Unparseable(f"expected an object, got {type(data).__name__}", str(raw)[:500])

    reply_fields = extract_fields_from_dict(data, {"reply": ["reply", "message", "response"]})
    reply = _as_text(reply_fields.get("reply"), DEFAULT_CONCIERGE_REPLY)
    suggestions_raw = data.get("suggestions") or data.get("books") or []
    if not isinstance(suggestions_raw, list):
        suggestions_raw = []

    suggestions = normalize_books(suggestions_raw, source)
    if isinstance(suggestions, Unparseable):
        return suggestions
    return ConciergeReply(reply=reply, suggestions=suggestions)


def normalize_reviews(raw: Any, source: str = "ai") -> Union[List[ReviewEntry], Unparseable]:
    """
    Normalize a review list reply.

    Returns:
        List of ReviewEntry, or Unparseable
    """
    data = parse_model_output(raw)
    if isinstance(data, Unparseable):
        return data

    items = data if isinstance(data, list) else None
    if isinstance(data, dict):
        items = data.get("reviews") if isinstance(data.get("reviews"), list) else None
    if items is None:
        return Unparseable(f"expected a list of reviews, got {type(data).__name__}", str(raw)[:500])
    if not all(isinstance(item, dict) for item in items):
        return Unparseable("review list contains non-object items", str(raw)[:500])

    return [to_review_entry(item, index, source) for index, item in enumerate(items)]


def normalize_text(raw: Any) -> Union[str, Unparseable]:
    """Normalize a free-text reply; blank text is unparseable."""
    if raw is None:
        return Unparseable("empty response")
    text = str(raw).strip()
    if not text:
        return Unparseable("empty response")
    return text


def normalize_chapter_html(raw: Any) -> Union[str, Unparseable]:
    """
    Normalize generated chapter content into sanitized HTML.

    Strips a markdown fence (```html) if present, then reduces the markup to
    <h3>/<p> only.
    """
    text = normalize_text(raw)
    if isinstance(text, Unparseable):
        return text

    html = sanitize_chapter_html(strip_code_fence(text))
    if not html:
        return Unparseable("chapter content empty after sanitizing", text[:500])
    return html


__all__ = [
    "AVATAR_COLORS",
    "Unparseable",
    "parse_model_output",
    "to_book_suggestion",
    "to_review_entry",
    "normalize_books",
    "normalize_concierge",
    "normalize_reviews",
    "normalize_text",
    "normalize_chapter_html",
]
