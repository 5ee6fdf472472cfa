"""Autocomplete suggestions for partially typed queries.

Two sources feed the search box: values observed in the record collection
(titles, tags, content types) and a fixed catalogue of query syntax.
"""

import re
from collections.abc import Sequence
from dataclasses import dataclass
from enum import Enum

from ..core.models import ContentType, Record

MAX_SUGGESTIONS = 10
MIN_TOKEN_LENGTH = 2

_whitespace = re.compile(r"\s+")


def last_token(query: str) -> str:
    """Return the last whitespace-delimited token, empty after a trailing space."""
    return _whitespace.split(query)[-1] if query else ""


def suggestions(
    partial_query: str, records: Sequence[Record], limit: int = MAX_SUGGESTIONS
) -> list[str]:
    """Suggest completions drawn from values observed in the records.

    Titles come first, then tags, then content types, each in order of first
    appearance in the collection.

    Args:
        partial_query: Query text typed so far
        records: Records to draw values from
        limit: Maximum number of suggestions

    Returns:
        Formatted ``title:"..."``, ``tags:...`` and ``type:...`` completions
    """
    token = last_token(partial_query).lower()
    if len(token) < MIN_TOKEN_LENGTH:
        return []

    titles = dict.fromkeys(record.title for record in records)
    tags = dict.fromkeys(tag for record in records for tag in record.tags)
    types = dict.fromkeys(ContentType(record.content_type).value for record in records)

    results = [f'title:"{title}"' for title in titles if token in title.lower()]
    results.extend(f"tags:{tag}" for tag in tags if token in tag.lower())
    results.extend(f"type:{type_}" for type_ in types if token in type_.lower())

    return results[:limit]


class HintKind(str, Enum):
    """Kinds of syntax hints."""

    FIELD = "field"
    OPERATOR = "operator"
    VALUE = "value"


@dataclass(frozen=True)
class SyntaxHint:
    """A piece of query syntax offered while typing."""

    kind: HintKind
    text: str
    description: str


SYNTAX_HINTS: tuple[SyntaxHint, ...] = (
    SyntaxHint(HintKind.FIELD, "title:", "Search in title field"),
    SyntaxHint(HintKind.FIELD, "content:", "Search in content field"),
    SyntaxHint(HintKind.FIELD, "tags:", "Search in tags"),
    SyntaxHint(HintKind.FIELD, "type:", "Filter by content type"),
    SyntaxHint(HintKind.FIELD, "created:", "Filter by creation date"),
    SyntaxHint(HintKind.FIELD, "updated:", "Filter by update date"),
    SyntaxHint(HintKind.OPERATOR, "AND", "Logical AND operator"),
    SyntaxHint(HintKind.OPERATOR, "OR", "Logical OR operator"),
    SyntaxHint(HintKind.OPERATOR, "NOT", "Logical NOT operator"),
    SyntaxHint(HintKind.OPERATOR, ">", "Greater than"),
    SyntaxHint(HintKind.OPERATOR, "<", "Less than"),
    SyntaxHint(HintKind.OPERATOR, ">=", "Greater than or equal"),
    SyntaxHint(HintKind.OPERATOR, "<=", "Less than or equal"),
    SyntaxHint(HintKind.OPERATOR, "=", "Equals"),
    SyntaxHint(HintKind.VALUE, "document", "Document content type"),
    SyntaxHint(HintKind.VALUE, "image", "Image content type"),
    SyntaxHint(HintKind.VALUE, "video", "Video content type"),
    SyntaxHint(HintKind.VALUE, "note", "Note content type"),
    SyntaxHint(HintKind.VALUE, "link", "Link content type"),
)


def syntax_hints(partial_query: str) -> list[SyntaxHint]:
    """Return catalogue entries containing the last typed token."""
    token = last_token(partial_query).lower()
    if not token:
        return []
    return [hint for hint in SYNTAX_HINTS if token in hint.text.lower()]


def apply_suggestion(query: str, text: str, kind: HintKind = HintKind.VALUE) -> str:
    """Replace the last token of a query with a chosen completion.

    Field prefixes are left open for the value; anything else is followed by
    a space so the next token can be typed straight away.
    """
    words = _whitespace.split(query) if query else [""]
    words[-1] = text
    completed = " ".join(words)
    return completed if kind == HintKind.FIELD else completed + " "
