"""Search functionality for knowledge-base records.

This module provides the query language used by the search box: field
filters, date comparisons, connective keywords and free text, together with
result highlighting, autocomplete and query validation.

Main components:
- parse / QueryParser: Query string to ParsedQuery
- filter_records: Apply a ParsedQuery to records
- highlight: Mark search term occurrences in text
- suggestions: Autocomplete from observed values
- validate: Structural query checks
- SearchService: Parse, filter and sort in one call
"""

from .engine import SearchOutcome, SearchService
from .evaluator import filter_records, matches
from .filters import (
    DateRange,
    SearchFilters,
    SortConfig,
    SortDirection,
    SortField,
    apply_filters,
    sort_records,
)
from .highlighting import Highlight, find_highlights, highlight
from .query import (
    VALID_FIELDS,
    Connective,
    DateFilter,
    ParsedQuery,
    QueryParser,
    ValidationReason,
    ValidationResult,
    parse,
    validate,
)
from .sql import to_sql
from .suggestions import (
    HintKind,
    SyntaxHint,
    apply_suggestion,
    suggestions,
    syntax_hints,
)

__all__ = [
    # Query parsing
    "QueryParser",
    "ParsedQuery",
    "DateFilter",
    "Connective",
    "parse",
    # Validation
    "VALID_FIELDS",
    "ValidationReason",
    "ValidationResult",
    "validate",
    # Evaluation
    "filter_records",
    "matches",
    # Highlighting
    "Highlight",
    "find_highlights",
    "highlight",
    # Suggestions
    "suggestions",
    "syntax_hints",
    "apply_suggestion",
    "SyntaxHint",
    "HintKind",
    # Filters and sorting
    "SearchFilters",
    "DateRange",
    "SortConfig",
    "SortField",
    "SortDirection",
    "apply_filters",
    "sort_records",
    # Service
    "SearchService",
    "SearchOutcome",
    "to_sql",
]
