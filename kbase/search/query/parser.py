"""Query parser for knowledge-base search queries.

A query mixes ``field:value`` clauses, date comparisons, connective keywords
and free text, e.g. ``type:note AND tags:react,vue created:>2024-01-01 hooks``.
"""

import logging
import re
from dataclasses import dataclass, field
from enum import Enum

logger = logging.getLogger(__name__)


class Connective(str, Enum):
    """Connective keywords recognized in query text."""

    AND = "AND"
    OR = "OR"
    NOT = "NOT"


DATE_FIELDS = ("created", "updated")
DATE_OPERATORS = (">", "<", ">=", "<=", "=")


@dataclass(frozen=True)
class DateFilter:
    """Comparison of a record timestamp against an unparsed date value."""

    field: str
    operator: str
    value: str

    def to_string(self) -> str:
        return f"{self.field}:{self.operator}{self.value}"


@dataclass
class ParsedQuery:
    """Structured form of a query string.

    ``full_text`` is ``None`` rather than an empty string when nothing is
    left over, so callers can test it directly.
    """

    fields: dict[str, str | list[str]] = field(default_factory=dict)
    date_filters: list[DateFilter] = field(default_factory=list)
    connectives: list[str] = field(default_factory=list)
    full_text: str | None = None

    @property
    def is_empty(self) -> bool:
        """True when the query would match every record."""
        return not self.fields and not self.date_filters and not self.full_text

    def to_string(self) -> str:
        """Convert query back to a canonical string representation."""
        parts = []
        for name, value in self.fields.items():
            if isinstance(value, list):
                parts.append(f"{name}:{','.join(value)}")
            elif " " in value:
                parts.append(f'{name}:"{value}"')
            else:
                parts.append(f"{name}:{value}")
        parts.extend(f.to_string() for f in self.date_filters)
        if self.full_text:
            parts.append(self.full_text)
        return " ".join(parts)


class QueryParser:
    """Parser for knowledge-base query strings."""

    def __init__(self):
        keywords = "|".join(c.value for c in Connective)
        # A value runs word by word until the next "field:" marker, a
        # standalone uppercase connective, or the end of the query.
        self.clause_pattern = re.compile(
            r"(\w+):\s*(\S+(?:\s+[^\s:]+)*?)"
            rf"(?=\s+\w+:|\s+(?:{keywords})(?=\s|$)|$)",
            re.ASCII,
        )
        self.quote_pattern = re.compile(r"^[\"']|[\"']$")
        self.date_pattern = re.compile(r"([><=!]+)(.+)")
        self.connective_pattern = re.compile(rf"\b({keywords})\b", re.IGNORECASE)
        self.whitespace_pattern = re.compile(r"\s+")

    def parse(self, query_string: str) -> ParsedQuery:
        """Parse a query string into a structured query.

        Never raises: clauses that cannot be interpreted are dropped and the
        rest of the query is kept.

        Args:
            query_string: Raw query string from user

        Returns:
            ParsedQuery for the query
        """
        result = ParsedQuery()
        normalized = self.normalize(query_string)

        clauses = list(self.clause_pattern.finditer(normalized))
        if not clauses:
            if normalized:
                result.full_text = normalized
            return result

        for match in clauses:
            self._classify(match.group(1), self._strip_quotes(match.group(2)), result)

        remaining = normalized
        for match in clauses:
            remaining = remaining.replace(match.group(0), "", 1)

        connectives = self.connective_pattern.findall(remaining)
        if connectives:
            result.connectives = [c.upper() for c in connectives]
            remaining = self.connective_pattern.sub("", remaining)

        remaining = remaining.strip()
        if remaining:
            result.full_text = remaining

        return result

    def normalize(self, query_string: str) -> str:
        """Collapse whitespace runs to single spaces and trim."""
        if not query_string:
            return ""
        return self.whitespace_pattern.sub(" ", query_string).strip()

    def _strip_quotes(self, value: str) -> str:
        return self.quote_pattern.sub("", value.strip())

    def _classify(self, name: str, value: str, result: ParsedQuery) -> None:
        """Route one clause into the date filters or the field map."""
        if name in DATE_FIELDS:
            match = self.date_pattern.match(value)
            if not match:
                logger.debug(f"Dropping date clause without operator: {name}:{value}")
                return
            result.date_filters.append(
                DateFilter(
                    field=name,
                    operator=match.group(1),
                    value=match.group(2).strip(),
                )
            )
        elif name == "tags" and "," in value:
            result.fields[name] = [tag.strip() for tag in value.split(",")]
        else:
            result.fields[name] = value


_default_parser = QueryParser()


def parse(query_string: str) -> ParsedQuery:
    """Parse a query string with the default parser."""
    return _default_parser.parse(query_string)
