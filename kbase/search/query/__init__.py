"""Query parsing and validation subsystem."""

from .parser import (
    DATE_FIELDS,
    DATE_OPERATORS,
    Connective,
    DateFilter,
    ParsedQuery,
    QueryParser,
    parse,
)
from .validator import VALID_FIELDS, ValidationReason, ValidationResult, validate

__all__ = [
    "QueryParser",
    "ParsedQuery",
    "DateFilter",
    "Connective",
    "DATE_FIELDS",
    "DATE_OPERATORS",
    "parse",
    "VALID_FIELDS",
    "ValidationReason",
    "ValidationResult",
    "validate",
]
