"""
Prompt Builders

One builder per capability operation. Builders are provider-neutral: they
return the system/user text and the conversation tail. Adapters decide how to
attach output requirements (native schema, JSON mode + prose, or prose only).
"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple, Type

from pydantic import BaseModel


CONCIERGE_HISTORY_LIMIT = 6
BOOK_CHAT_HISTORY_LIMIT = 5


@dataclass(frozen=True)
class Prompt:
    """
    Provider-neutral prompt.

    Attributes:
        system: Instructions for the model
        user: The user turn
        history: Earlier turns as {"role": "user"|"model", "text": ...}
        max_tokens: Output budget hint, None for provider default
    """
    system: str
    user: str
    history: Tuple[Dict[str, str], ...] = ()
    max_tokens: Optional[int] = None


def history_tail(history: Optional[Sequence[Any]], limit: int) -> Tuple[Dict[str, str], ...]:
    """Last ``limit`` non-empty turns of a history, as plain dicts."""
    turns = []
    for turn in list(history or [])[-limit:]:
        if isinstance(turn, BaseModel):
            turn = turn.model_dump()
        if isinstance(turn, dict) and turn.get("text"):
            role = "model" if turn.get("role") == "model" else "user"
            turns.append({"role": role, "text": str(turn["text"])})
    return tuple(turns)


# ==================== Schema As Prose ====================


def _resolve(node: dict, defs: dict) -> dict:
    ref = node.get("$ref")
    if ref:
        return defs.get(ref.rsplit("/", 1)[-1], {})
    return node


def _type_label(prop: dict, defs: dict) -> str:
    kind = prop.get("type", "object")
    if kind == "array":
        items = _resolve(prop.get("items", {}), defs)
        return f"array of {items.get('type', 'object')}s"
    return kind


def _describe_fields(node: dict, defs: dict, indent: int) -> List[str]:
    node = _resolve(node, defs)
    required = set(node.get("required", []))
    pad = "  " * indent
    lines = []
    for name, prop in node.get("properties", {}).items():
        label = f"{pad}- {name} ({_type_label(prop, defs)}"
        label += ", required)" if name in required else ")"
        if prop.get("description"):
            label += f": {prop['description']}"
        lines.append(label)

        items = _resolve(prop.get("items", {}), defs) if prop.get("type") == "array" else {}
        if items.get("properties"):
            lines.append(f"{pad}  each item is an object with:")
            lines.extend(_describe_fields(items, defs, indent + 2))
    return lines


def schema_instructions(schema: Type[BaseModel]) -> str:
    """
    Describe a payload schema in natural language for providers without
    native structured output.

    Examples:
        >>> print(schema_instructions(BookListPayload))  # doctest: +SKIP
        Respond with JSON only. Do not add prose or markdown code fences.
        The JSON value must be an object with these fields:
          - books (array of objects, required): Matching books; ...
    """
    json_schema = schema.model_json_schema()
    defs = json_schema.get("$defs", {})
    lines = [
        "Respond with JSON only. Do not add prose or markdown code fences.",
        "The JSON value must be an object with these fields:",
    ]
    lines.extend(_describe_fields(json_schema, defs, indent=1))
    return "\n".join(lines)


# ==================== Operation Prompts ====================


def search_books(query: str) -> Prompt:
    system = (
        "You are the search engine for the world's largest digital library.\n"
        "Rules:\n"
        "1. If the query names a particular book, return that book first.\n"
        "2. If the query is a genre or topic, return 6 popular, high-quality books in it.\n"
        "3. If the query is nonsense, random characters, or matches no known books, "
        "return an EMPTY list. Never guess.\n"
        "4. Only return real, existing books with a valid real-world ISBN-13.\n"
        "Write each description as a compelling 2-sentence hook and give every "
        "book a unique, aesthetic pastel hex cover color."
    )
    return Prompt(system=system, user=f'Search for books: "{query}"')


def concierge(message: str, history: Optional[Sequence[Any]]) -> Prompt:
    system = (
        'You are "Suitcase", a warm, witty and highly knowledgeable literary concierge. '
        "Have a natural conversation that helps the user find the perfect book.\n"
        "1. Respond conversationally to the user's input.\n"
        "2. If the user asks for books, describes a mood, or discusses genres, "
        "suggest 1-3 highly curated books.\n"
        "3. If the user is just chatting, reply without suggestions.\n"
        "4. match_reason is one personalised sentence on why you picked the book."
    )
    return Prompt(
        system=system,
        user=message,
        history=history_tail(history, CONCIERGE_HISTORY_LIMIT),
    )


def concierge_plain(message: str, history: Optional[Sequence[Any]]) -> Prompt:
    system = (
        'You are "Suitcase", a warm and witty literary concierge. '
        "Reply conversationally in plain text, in a few sentences."
    )
    return Prompt(
        system=system,
        user=message,
        history=history_tail(history, CONCIERGE_HISTORY_LIMIT),
        max_tokens=512,
    )


def onboarding(genres: Sequence[str], reading_goal: str) -> Prompt:
    system = (
        "You are a book recommendation expert. Recommend 4 diverse, highly-rated "
        "books that fit the reader's profile. Use soft, elegant cover colors and "
        "give a valid ISBN for each book."
    )
    user = (
        f"The reader loves these genres: {', '.join(genres) or 'anything'}.\n"
        f"Their reading goal is: {reading_goal or 'enjoyment'}."
    )
    return Prompt(system=system, user=user)


def mood(mood: str) -> Prompt:
    system = (
        "You are a literary concierge who aggregates critical consensus from "
        "Goodreads and major newspapers. Recommend 4 real books that fit the "
        "reader's current mood. match_reason says in one sentence why the book "
        "suits that mood. Use soft, elegant cover colors and give a valid ISBN "
        "for each book."
    )
    return Prompt(system=system, user=f'The reader is in this mood: "{mood}".')


def reviews(title: str, author: str) -> Prompt:
    system = (
        "Generate 4 realistic reader reviews in the style of Goodreads or Amazon. "
        "Mix lengths: some detailed, some short. Vary the ratings between 1 and 5, "
        "mostly positive with maybe one critical."
    )
    return Prompt(system=system, user=f'Generate reviews for "{title}" by {author}.')


def book_chat(title: str, message: str, history: Optional[Sequence[Any]]) -> Prompt:
    system = (
        "You are an expert literary scholar and reading companion. "
        f'The user is currently reading "{title}". Answer concisely but deeply, '
        "in at most 2-3 paragraphs. Avoid plot spoilers unless explicitly asked."
    )
    return Prompt(
        system=system,
        user=message,
        history=history_tail(history, BOOK_CHAT_HISTORY_LIMIT),
        max_tokens=512,
    )


def translate(text: str, target_lang: str) -> Prompt:
    system = (
        f"You are a literary translator. Translate the text to {target_lang}, "
        "preserving its tone and style. Return only the translation."
    )
    return Prompt(system=system, user=text, max_tokens=512)


def explain(text: str, title: str) -> Prompt:
    system = (
        f'The user is reading "{title}" and highlighted a passage. Explain it in '
        "simple terms: give the necessary context or historical background and "
        "define archaic words. Be concise but insightful (2-3 paragraphs)."
    )
    return Prompt(system=system, user=text, max_tokens=512)


def chapter(title: str, author: str, number: int) -> Prompt:
    system = (
        f'Write the content for Chapter {number} of "{title}" by {author}.\n'
        "1. If the book is in the public domain, provide the original, verbatim text.\n"
        "2. If it is copyrighted, write a detailed, scene-by-scene narrative adaptation "
        "covering all events, dialogue and descriptions, at least 1500 words.\n"
        "3. Format as clean HTML: <h3> for the chapter title, <p> for paragraphs. "
        "No other tags. Do NOT use markdown code blocks."
    )
    return Prompt(system=system, user=f"Write the full Chapter {number}.", max_tokens=6000)


def summary(title: str) -> Prompt:
    system = (
        "Provide a concise, engaging summary of the book in 2-3 paragraphs, "
        "covering the main plot points, themes and character arcs."
    )
    return Prompt(system=system, user=f'Summarize "{title}".', max_tokens=512)


def recap(title: str) -> Prompt:
    system = (
        "The reader has forgotten what happened so far. Give a quick recap of the "
        "beginning and setup of the book to jog their memory, 3-4 paragraphs, "
        "without spoiling the ending."
    )
    return Prompt(system=system, user=f'Recap "{title}".', max_tokens=768)


__all__ = [
    "Prompt",
    "history_tail",
    "schema_instructions",
    "search_books",
    "concierge",
    "concierge_plain",
    "onboarding",
    "mood",
    "reviews",
    "book_chat",
    "translate",
    "explain",
    "chapter",
    "summary",
    "recap",
]
