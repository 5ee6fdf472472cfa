"""Search term highlighting.

The search term is always matched literally and case-insensitively; the
matched text keeps its original casing.
"""

import re
from dataclasses import dataclass


@dataclass
class Highlight:
    """Individual highlight fragment."""

    text: str
    start_offset: int
    end_offset: int


def _term_pattern(term: str) -> re.Pattern[str]:
    return re.compile(re.escape(term), re.IGNORECASE)


def find_highlights(text: str, term: str) -> list[Highlight]:
    """Find every literal, case-insensitive occurrence of a term.

    Args:
        text: Text to search
        term: Search term; regex metacharacters have no special meaning

    Returns:
        Non-overlapping highlights in text order
    """
    if not text or not term:
        return []

    return [
        Highlight(match.group(0), match.start(), match.end())
        for match in _term_pattern(term).finditer(text)
    ]


def highlight(
    text: str, term: str, tag: str = "mark", css_class: str | None = None
) -> str:
    """Wrap every occurrence of a term in an HTML tag.

    Args:
        text: Text to highlight
        term: Search term; an empty term returns the text unchanged
        tag: HTML tag used as the marker
        css_class: Optional class attribute for the opening tag

    Returns:
        Text with each match wrapped, all other characters untouched
    """
    if not term:
        return text

    opening = f'<{tag} class="{css_class}">' if css_class else f"<{tag}>"
    closing = f"</{tag}>"
    return _term_pattern(term).sub(
        lambda match: f"{opening}{match.group(0)}{closing}", text
    )
