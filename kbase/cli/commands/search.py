"""Search and query CLI commands."""

import click
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from kbase.core.models import ContentType, Record, load_records
from kbase.search.evaluator import parse_timestamp
from kbase.search import (
    DateRange,
    ParsedQuery,
    SearchFilters,
    SearchOutcome,
    SearchService,
    SortConfig,
    SortDirection,
    SortField,
    find_highlights,
    highlight,
    parse,
    syntax_hints,
    to_sql,
    validate,
)


def validate_date(value: str | None, param_hint: str) -> str | None:
    """Validate an ISO-8601 date option.

    Raises:
        click.BadParameter: If the value cannot be parsed
    """
    if value and parse_timestamp(value) is None:
        raise click.BadParameter(
            f"'{value}' is not an ISO-8601 date (e.g. 2024-01-31)",
            param_hint=param_hint,
        )
    return value


def get_search_service(ctx) -> SearchService:
    """Build a search service over the records named by the CLI context."""
    obj = ctx.obj
    if obj.records_path is None:
        raise click.UsageError(
            "No records file given; use --records or set KBASE_RECORDS"
        )

    search_config = obj.config.get("search", {})
    default_sort = SortConfig(
        field=SortField(search_config.get("sort_field", "updated_at")),
        direction=SortDirection(search_config.get("sort_direction", "desc")),
    )
    return SearchService(
        load_records(obj.records_path),
        default_sort=default_sort,
        suggestion_limit=obj.config.get("suggestions", {}).get("limit", 10),
    )


@click.command()
@click.argument("query", default="")
@click.option(
    "--type",
    "content_types",
    multiple=True,
    type=click.Choice([t.value for t in ContentType]),
    help="Only records of this content type",
)
@click.option("--tag", "tags", multiple=True, help="Only records with this tag")
@click.option("--from", "date_from", help="Created on or after this date")
@click.option("--to", "date_to", help="Created on or before this date")
@click.option(
    "--sort",
    "-s",
    type=click.Choice([f.value for f in SortField]),
    help="Sort field",
)
@click.option(
    "--order",
    type=click.Choice([d.value for d in SortDirection]),
    help="Sort direction",
)
@click.option("--limit", "-n", type=int, default=20, help="Maximum results to show")
@click.option("--strict", is_flag=True, help="Refuse queries that fail validation")
@click.pass_context
def search(ctx: click.Context, query: str, **kwargs) -> None:
    """Search records.

    Supports the query syntax:
    - Fields: title:"react hooks", content:api, tags:react,vue, type:note
    - Dates: created:>2024-01-01, updated:<=2024-06-30, created:=2024-03-15
    - Connectives: AND, OR, NOT (recognized, all clauses must match)
    - Anything else is searched in titles, content and tags
    """
    console = ctx.obj.console
    date_from = validate_date(kwargs["date_from"], "--from")
    date_to = validate_date(kwargs["date_to"], "--to")
    service = get_search_service(ctx)

    filters = None
    if any(kwargs[k] for k in ("content_types", "tags", "date_from", "date_to")):
        filters = SearchFilters(
            content_types=[ContentType(t) for t in kwargs["content_types"]],
            tags=list(kwargs["tags"]),
            date_range=DateRange(start=date_from, end=date_to),
        )

    sort = None
    if kwargs["sort"] or kwargs["order"]:
        sort = SortConfig(
            field=SortField(kwargs["sort"] or service.default_sort.field),
            direction=SortDirection(kwargs["order"] or service.default_sort.direction),
        )

    strict = kwargs["strict"]
    outcome = service.search(query, filters=filters, sort=sort, strict=strict)

    # A blank query lists everything unless strict validation is requested
    if not outcome.validation.valid and (strict or query.strip()):
        _display_validation_warning(console, outcome, strict=strict)
        if strict:
            ctx.exit(1)

    _display_results(console, outcome, kwargs["limit"])


@click.command()
@click.argument("partial")
@click.option("--syntax", is_flag=True, help="Also show matching query syntax")
@click.pass_context
def suggest(ctx: click.Context, partial: str, syntax: bool) -> None:
    """Suggest completions for a partially typed query."""
    console = ctx.obj.console
    service = get_search_service(ctx)

    completions = service.suggest(partial)
    hints = syntax_hints(partial) if syntax else []

    if not completions and not hints:
        console.print("[yellow]No suggestions[/yellow]")
        return

    for completion in completions:
        console.print(escape(completion), highlight=False)

    if hints:
        console.print("\n[bold]Syntax:[/bold]")
        for hint in hints:
            console.print(
                f"  [cyan]{escape(hint.text)}[/cyan] [dim]{hint.kind.value}[/dim]"
                f" - {hint.description}"
            )


@click.command()
@click.argument("query")
@click.pass_context
def validate_cmd(ctx: click.Context, query: str) -> None:
    """Check a query for structural problems."""
    console = ctx.obj.console
    result = validate(query)

    if result.valid:
        console.print("[green]✓[/green] Query is valid")
        return

    console.print(f"[red]✗[/red] {escape(result.error)}", highlight=False)
    for hint in result.hints:
        console.print(f"  Did you mean: [cyan]{hint}:[/cyan]?")
    ctx.exit(1)


@click.command()
@click.argument("text")
@click.argument("term")
@click.pass_context
def highlight_cmd(ctx: click.Context, text: str, term: str) -> None:
    """Wrap occurrences of TERM in TEXT with the configured marker tag."""
    tag = ctx.obj.config.get("highlight", {}).get("tag", "mark")
    click.echo(highlight(text, term, tag=tag))


@click.command()
@click.argument("query")
@click.pass_context
def explain(ctx: click.Context, query: str) -> None:
    """Show how a query is parsed and the equivalent SQL."""
    console = ctx.obj.console
    parsed = parse(query)

    console.print(
        Panel(_describe_query(parsed), title="Parsed query", border_style="blue")
    )
    console.print(f"[bold]SQL:[/bold] {escape(to_sql(parsed))}", highlight=False)


def _describe_query(parsed: ParsedQuery) -> str:
    """Render the parts of a parsed query as rich markup lines."""
    lines = []
    for name, value in parsed.fields.items():
        shown = ", ".join(value) if isinstance(value, list) else value
        lines.append(f"[bold]{escape(name)}:[/bold] {escape(shown)}")
    for date_filter in parsed.date_filters:
        lines.append(
            f"[bold]{date_filter.field}:[/bold] "
            f"{escape(date_filter.operator)} {escape(date_filter.value)}"
        )
    if parsed.connectives:
        lines.append(f"[bold]Connectives:[/bold] {' '.join(parsed.connectives)}")
    if parsed.full_text:
        lines.append(f"[bold]Full text:[/bold] {escape(parsed.full_text)}")
    return "\n".join(lines) or "[dim]Empty query (matches everything)[/dim]"


def _display_validation_warning(
    console: Console, outcome: SearchOutcome, strict: bool
) -> None:
    label = "[red]Invalid query:[/red]" if strict else "[yellow]Warning:[/yellow]"
    console.print(f"{label} {escape(outcome.validation.error)}", highlight=False)
    for hint in outcome.validation.hints:
        console.print(f"  Did you mean: [cyan]{hint}:[/cyan]?")


def _highlight_term(parsed: ParsedQuery) -> str:
    """Pick the term to mark in result titles."""
    if parsed.full_text:
        return parsed.full_text
    title = parsed.fields.get("title")
    return title if isinstance(title, str) else ""


def _styled_title(record: Record, term: str) -> Text:
    text = Text(record.title)
    for span in find_highlights(record.title, term):
        text.stylize("bold yellow", span.start_offset, span.end_offset)
    return text


def _display_results(console: Console, outcome: SearchOutcome, limit: int) -> None:
    """Display search results as a table."""
    if outcome.is_empty:
        console.print(f"\n[yellow]No results found for '{escape(outcome.query)}'[/yellow]")
        return

    if outcome.total == 1:
        console.print(f"\nFound [green]1[/green] result ({outcome.took_ms}ms)")
    else:
        console.print(
            f"\nFound [green]{outcome.total}[/green] results ({outcome.took_ms}ms)"
        )

    term = _highlight_term(outcome.parsed)

    table = Table()
    table.add_column("Title", overflow="ellipsis", max_width=50)
    table.add_column("Type", style="cyan")
    table.add_column("Tags", overflow="ellipsis", max_width=30)
    table.add_column("Updated", justify="right")

    for record in outcome.records[:limit]:
        table.add_row(
            _styled_title(record, term),
            ContentType(record.content_type).value,
            Text(", ".join(record.tags)),
            record.updated_at.strftime("%Y-%m-%d"),
        )

    console.print(table)

    if outcome.total > limit:
        console.print(f"[dim]Showing {limit} of {outcome.total}[/dim]")
