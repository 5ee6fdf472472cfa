"""Structural validation of raw query strings.

Validation is advisory and independent of parsing: a query that fails here
can still be parsed and evaluated. Callers decide when to validate.
"""

import re
from dataclasses import dataclass, field
from enum import Enum

from rapidfuzz import fuzz, process

VALID_FIELDS = ("title", "content", "tags", "type", "created", "updated")

_field_pattern = re.compile(r"(\w+):", re.ASCII)


class ValidationReason(str, Enum):
    """Why a query failed validation."""

    EMPTY_QUERY = "empty_query"
    UNBALANCED_QUOTES = "unbalanced_quotes"
    UNKNOWN_FIELD = "unknown_field"


@dataclass
class ValidationResult:
    """Outcome of validating a query string."""

    valid: bool
    error: str | None = None
    reason: ValidationReason | None = None
    unknown_fields: list[str] = field(default_factory=list)
    hints: list[str] = field(default_factory=list)

    def __bool__(self) -> bool:
        return self.valid


def validate(query: str) -> ValidationResult:
    """Check a raw query for structural well-formedness.

    Args:
        query: Raw query string as typed by the user

    Returns:
        ValidationResult; ``error`` is set when ``valid`` is False
    """
    if not query or not query.strip():
        return ValidationResult(
            valid=False,
            error="Query cannot be empty",
            reason=ValidationReason.EMPTY_QUERY,
        )

    if query.count('"') % 2 != 0:
        return ValidationResult(
            valid=False,
            error="Unmatched quotes in query",
            reason=ValidationReason.UNBALANCED_QUOTES,
        )

    unknown = [
        name
        for name in dict.fromkeys(_field_pattern.findall(query))
        if name not in VALID_FIELDS
    ]
    if unknown:
        return ValidationResult(
            valid=False,
            error=(
                f"Invalid field(s): {', '.join(unknown)}. "
                f"Valid fields: {', '.join(VALID_FIELDS)}"
            ),
            reason=ValidationReason.UNKNOWN_FIELD,
            unknown_fields=unknown,
            hints=_suggest_fields(unknown),
        )

    return ValidationResult(valid=True)


def _suggest_fields(unknown: list[str], min_score: float = 70.0) -> list[str]:
    """Suggest valid field names close to misspelled ones."""
    hints = []
    for name in unknown:
        match = process.extractOne(
            name.lower(), VALID_FIELDS, scorer=fuzz.ratio, score_cutoff=min_score
        )
        if match and match[0] not in hints:
            hints.append(match[0])
    return hints
