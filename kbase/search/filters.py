"""Advanced filters and sorting applied on top of query results.

These mirror the filter panel next to the search box: content-type toggles,
a tag list and a creation date range, followed by a sort.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any

from ..core.models import ContentType, Record
from .evaluator import parse_timestamp


@dataclass
class DateRange:
    """Inclusive creation date range; either bound may be open."""

    start: datetime | str | None = None
    end: datetime | str | None = None

    @property
    def is_open(self) -> bool:
        return not self.start and not self.end


@dataclass
class SearchFilters:
    """Filters chosen outside the query string."""

    content_types: list[ContentType] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    date_range: DateRange | None = None

    @property
    def active_count(self) -> int:
        """Number of filter groups currently restricting results."""
        count = 0
        if self.content_types:
            count += 1
        if self.tags:
            count += 1
        if self.date_range and not self.date_range.is_open:
            count += 1
        return count


def apply_filters(records: Iterable[Record], filters: SearchFilters) -> list[Record]:
    """Keep the records passing every active filter group.

    Args:
        records: Records to filter
        filters: Content types, tags and date range to apply

    Returns:
        Matching records in their original order
    """
    result = list(records)

    if filters.content_types:
        allowed = {ContentType(t) for t in filters.content_types}
        result = [r for r in result if ContentType(r.content_type) in allowed]

    if filters.tags:
        wanted = [t.lower() for t in filters.tags]
        result = [
            r
            for r in result
            if any(want in tag.lower() for want in wanted for tag in r.tags)
        ]

    if filters.date_range:
        start = _bound(filters.date_range.start)
        end = _bound(filters.date_range.end)
        if start is not None or end is not None:
            result = [r for r in result if _within(_created(r), start, end)]

    return result


def _bound(value: datetime | str | None) -> datetime | None:
    if not value:
        return None
    return parse_timestamp(value)


def _created(record: Record) -> datetime | None:
    return parse_timestamp(record.created_at)


def _within(
    moment: datetime | None, start: datetime | None, end: datetime | None
) -> bool:
    if moment is None:
        return False
    if start is not None and moment < start:
        return False
    return end is None or moment <= end


class SortField(str, Enum):
    """Record attributes results can be sorted by."""

    CREATED_AT = "created_at"
    UPDATED_AT = "updated_at"
    TITLE = "title"
    CONTENT_TYPE = "content_type"


class SortDirection(str, Enum):
    """Sort directions."""

    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class SortConfig:
    """Sort field and direction."""

    field: SortField = SortField.UPDATED_AT
    direction: SortDirection = SortDirection.DESC


def _sort_key(record: Record, sort_field: SortField) -> Any:
    value = getattr(record, sort_field.value)
    if sort_field in (SortField.CREATED_AT, SortField.UPDATED_AT):
        return parse_timestamp(value)
    if isinstance(value, ContentType):
        return value.value
    return value.lower()


def sort_records(
    records: Sequence[Record], sort: SortConfig | None = None
) -> list[Record]:
    """Sort records by one attribute; ties keep their original order.

    Strings compare case-insensitively and timestamps chronologically.
    """
    sort = sort or SortConfig()
    return sorted(
        records,
        key=lambda record: _sort_key(record, SortField(sort.field)),
        reverse=SortDirection(sort.direction) == SortDirection.DESC,
    )
