"""Render a parsed query as an equivalent SQL statement for display.

The statement is informational only (shown next to the search box and in
``kb explain``); it is never executed.
"""

from .query.parser import ParsedQuery, parse

TABLE_NAME = "content_items"

_COLUMNS = {"type": "contentType", "created": "createdAt", "updated": "updatedAt"}


def _quote(value: str) -> str:
    return "'" + value.replace("'", "''") + "'"


def _like(column: str, value: str) -> str:
    return f"{column} LIKE {_quote(f'%{value}%')}"


def _field_condition(name: str, value: str | list[str]) -> str:
    if isinstance(value, list):
        return "(" + " OR ".join(_like(name, v) for v in value) + ")"
    if name == "type":
        return f"{_COLUMNS[name]} = {_quote(value)}"
    return _like(name, value)


def to_sql(query: str | ParsedQuery) -> str:
    """Build a SELECT statement describing what a query filters on."""
    parsed = parse(query) if isinstance(query, str) else query

    conditions = [_field_condition(n, v) for n, v in parsed.fields.items()]
    conditions.extend(
        f"{_COLUMNS[f.field]} {f.operator} {_quote(f.value)}"
        for f in parsed.date_filters
    )
    if parsed.full_text:
        conditions.append(
            "("
            + " OR ".join(
                _like(column, parsed.full_text) for column in ("title", "content", "tags")
            )
            + ")"
        )

    sql = f"SELECT * FROM {TABLE_NAME}"
    if conditions:
        sql += " WHERE " + " AND ".join(conditions)
    return sql + " ORDER BY updatedAt DESC"
