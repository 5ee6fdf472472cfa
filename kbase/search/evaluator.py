"""Apply parsed queries to an in-memory record collection.

Evaluation is a linear scan: every record is checked against every active
predicate and the predicates are always AND-combined, whatever connectives
the query contained. There is no index; repeated searches over the same
collection repeat the full scan.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from datetime import UTC, datetime

from ..core.models import Record
from .query.parser import DATE_OPERATORS, DateFilter, ParsedQuery

logger = logging.getLogger(__name__)

Predicate = Callable[[Record], bool]


def _contains(haystack: str | None, needle: str) -> bool:
    return haystack is not None and needle.lower() in haystack.lower()


def _title_predicate(value: str | list[str]) -> Predicate | None:
    if not isinstance(value, str):
        return None
    return lambda record: _contains(record.title, value)


def _content_predicate(value: str | list[str]) -> Predicate | None:
    if not isinstance(value, str):
        return None
    # Records without content skip the clause
    return lambda record: not record.content or _contains(record.content, value)


def _type_predicate(value: str | list[str]) -> Predicate | None:
    if not isinstance(value, str):
        return None
    return lambda record: record.content_type == value


def _tags_predicate(value: str | list[str]) -> Predicate | None:
    wanted = [value] if isinstance(value, str) else list(value)
    return lambda record: any(
        _contains(tag, want) for want in wanted for tag in record.tags
    )


# Field names without an entry here contribute no predicate.
FIELD_PREDICATES: dict[str, Callable[[str | list[str]], Predicate | None]] = {
    "title": _title_predicate,
    "content": _content_predicate,
    "type": _type_predicate,
    "tags": _tags_predicate,
}


def parse_timestamp(value: str | datetime) -> datetime | None:
    """Parse an ISO-8601 date or timestamp; naive values are taken as UTC.

    Returns None when the value cannot be parsed.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed.astimezone(UTC)


def _compare(left: datetime, operator: str, right: datetime) -> bool | None:
    if operator == ">":
        return left > right
    if operator == "<":
        return left < right
    if operator == ">=":
        return left >= right
    if operator == "<=":
        return left <= right
    if operator == "=":
        return left.date() == right.date()
    return None


def _date_predicate(date_filter: DateFilter) -> Predicate | None:
    if date_filter.operator not in DATE_OPERATORS:
        logger.debug(f"Ignoring unsupported date operator: {date_filter.to_string()}")
        return None

    target = parse_timestamp(date_filter.value)

    def predicate(record: Record) -> bool:
        if target is None:
            return False
        stamp = (
            record.created_at if date_filter.field == "created" else record.updated_at
        )
        moment = parse_timestamp(stamp)
        if moment is None:
            return False
        return bool(_compare(moment, date_filter.operator, target))

    return predicate


def _full_text_predicate(text: str) -> Predicate:
    needle = text.lower()

    def predicate(record: Record) -> bool:
        return (
            needle in record.title.lower()
            or (record.content is not None and needle in record.content.lower())
            or any(needle in tag.lower() for tag in record.tags)
        )

    return predicate


def build_predicates(query: ParsedQuery) -> list[Predicate]:
    """Build the list of predicates a record must satisfy for a query."""
    predicates = []

    for name, value in query.fields.items():
        builder = FIELD_PREDICATES.get(name)
        if builder is None:
            continue
        predicate = builder(value)
        if predicate is not None:
            predicates.append(predicate)

    for date_filter in query.date_filters:
        predicate = _date_predicate(date_filter)
        if predicate is not None:
            predicates.append(predicate)

    if query.full_text:
        predicates.append(_full_text_predicate(query.full_text))

    return predicates


def matches(record: Record, query: ParsedQuery) -> bool:
    """Check a single record against a parsed query."""
    return all(predicate(record) for predicate in build_predicates(query))


def filter_records(records: Iterable[Record], query: ParsedQuery) -> list[Record]:
    """Return the records matching a parsed query, in their original order.

    Args:
        records: Records to scan
        query: Parsed query; an empty query matches every record

    Returns:
        New list with the matching records
    """
    predicates = build_predicates(query)
    return [
        record
        for record in records
        if all(predicate(record) for predicate in predicates)
    ]
