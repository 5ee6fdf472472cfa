"""Search service over an in-memory record collection.

Ties the query pipeline together: parse, evaluate, advanced filters, sort.
"""

import logging
import time
from collections.abc import Iterable
from dataclasses import dataclass, field

from ..core.models import Record
from .evaluator import filter_records
from .filters import SearchFilters, SortConfig, apply_filters, sort_records
from .query.parser import ParsedQuery, QueryParser
from .query.validator import ValidationResult, validate
from .suggestions import MAX_SUGGESTIONS, suggestions

logger = logging.getLogger(__name__)


@dataclass
class SearchOutcome:
    """Records found for a query together with how it was understood."""

    query: str
    parsed: ParsedQuery
    records: list[Record] = field(default_factory=list)
    validation: ValidationResult | None = None
    took_ms: int = 0

    @property
    def total(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return not self.records


class SearchService:
    """High-level search over a fixed collection of records."""

    def __init__(
        self,
        records: Iterable[Record],
        default_sort: SortConfig | None = None,
        suggestion_limit: int = MAX_SUGGESTIONS,
        parser: QueryParser | None = None,
    ):
        """Initialize search service.

        Args:
            records: Records to search; the service keeps its own list
            default_sort: Sort used when a search does not name one
            suggestion_limit: Maximum autocomplete suggestions
            parser: Query parser (default: new QueryParser)
        """
        self.records = list(records)
        self.default_sort = default_sort or SortConfig()
        self.suggestion_limit = suggestion_limit
        self.parser = parser or QueryParser()

    def search(
        self,
        query: str,
        filters: SearchFilters | None = None,
        sort: SortConfig | None = None,
        strict: bool = False,
    ) -> SearchOutcome:
        """Execute a search query.

        Args:
            query: Query string; blank queries list every record
            filters: Optional advanced filters applied after the query
            sort: Sort order (default: the service's default sort)
            strict: Return no records when the query fails validation

        Returns:
            SearchOutcome with matching records
        """
        start_time = time.time()
        validation = validate(query)

        if strict and not validation.valid:
            logger.info(f"Rejected query {query!r}: {validation.error}")
            return SearchOutcome(
                query=query, parsed=ParsedQuery(), validation=validation
            )

        if query and query.strip():
            parsed = self.parser.parse(query)
            matched = filter_records(self.records, parsed)
        else:
            parsed = ParsedQuery()
            matched = list(self.records)

        if filters is not None:
            matched = apply_filters(matched, filters)

        matched = sort_records(matched, sort or self.default_sort)

        took_ms = int((time.time() - start_time) * 1000)
        logger.debug(
            f"Query {query!r} matched {len(matched)}/{len(self.records)} records"
            f" in {took_ms}ms"
        )

        return SearchOutcome(
            query=query,
            parsed=parsed,
            records=matched,
            validation=validation,
            took_ms=took_ms,
        )

    def suggest(self, partial_query: str) -> list[str]:
        """Autocomplete suggestions drawn from the service's records."""
        return suggestions(partial_query, self.records, limit=self.suggestion_limit)
