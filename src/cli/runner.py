# src/cli/runner.py

"""Headless CLI query runner built on the async catalog service."""

import json
import logging
import sys
from dataclasses import dataclass, field

from rich.console import Console
from rich.table import Table

from src.config.settings import Settings
from src.models.product import Category, Condition
from src.models.query import QueryDescriptor, QueryResult, SortKey
from src.services.catalog_service import CatalogService
from src.services.query_engine import InvalidQueryError
from src.storage.catalog_source import CatalogLoadError
from src.storage.file_manager import FileManager, product_to_dict
from src.ui.formatting import (
    format_listed_ago,
    format_location,
    format_price,
    format_seller,
)

logger = logging.getLogger("campus_market.cli")

# Stderr console for status messages so stdout stays clean for JSON
_err = Console(stderr=True)

EXIT_OK = 0
EXIT_LOAD_FAILED = 1
EXIT_INVALID_QUERY = 2


@dataclass
class QueryOptions:
    """Raw command-line query options, before enum resolution."""

    term: str = ""
    categories: list[str] = field(default_factory=lambda: list[str]())
    conditions: list[str] = field(default_factory=lambda: list[str]())
    min_price: float | None = None
    max_price: float | None = None
    location: str = ""
    verified: bool = False
    available: bool = False
    university: bool = False
    free: bool = False
    sort: str = SortKey.NEWEST.value
    page: int = 1
    page_size: int = Settings.PAGE_SIZE


def split_csv(values: list[str] | None) -> list[str]:
    """Flatten repeatable, comma-separated option values."""
    if not values:
        return []
    return [
        part.strip()
        for value in values
        for part in value.split(",")
        if part.strip()
    ]


def build_descriptor(options: QueryOptions) -> QueryDescriptor:
    """Turn CLI options into a query descriptor.

    Raises:
        InvalidQueryError: on an unknown category, condition or sort key.
    """
    try:
        categories = frozenset(Category.parse(c) for c in options.categories)
        conditions = frozenset(Condition.parse(c) for c in options.conditions)
    except ValueError as exc:
        raise InvalidQueryError(str(exc)) from exc

    try:
        sort_key = SortKey(options.sort)
    except ValueError:
        msg = f"Unknown sort key '{options.sort}'"
        raise InvalidQueryError(msg) from None

    default_low, default_high = Settings.DEFAULT_PRICE_RANGE
    low = default_low if options.min_price is None else options.min_price
    high = default_high if options.max_price is None else options.max_price

    return QueryDescriptor(
        search_term=options.term,
        categories=categories,
        conditions=conditions,
        price_range=(low, high),
        location_text=options.location,
        verified_only=options.verified,
        available_only=options.available,
        university_only=options.university,
        free_only=options.free,
        sort_key=sort_key,
        page=options.page,
        page_size=options.page_size,
    )


def result_to_dict(result: QueryResult) -> dict[str, object]:
    """Serialise a result page for JSON output."""
    return {
        "total": result.total,
        "total_pages": result.total_pages,
        "page": result.page,
        "items": [product_to_dict(p) for p in result.items],
    }


def _print_table(result: QueryResult) -> None:
    """Render a Rich table of one result page to stdout."""
    table = Table(
        title=(
            f"Listings — page {result.page} of {max(result.total_pages, 1)}"
            f" ({result.total} total)"
        ),
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=40)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Condition", justify="center")
    table.add_column("Seller", style="magenta")
    table.add_column("Location")
    table.add_column("Listed", style="dim")

    offset = (result.page - 1) * result.page_size
    for idx, p in enumerate(result.items, offset + 1):
        table.add_row(
            str(idx),
            p.title[:40] if p.is_available else f"{p.title[:33]} (sold)",
            format_price(p),
            p.condition.value,
            format_seller(p),
            format_location(p),
            format_listed_ago(p.created_at),
        )

    Console().print(table)

    links = result.page_links()
    if links:
        labels = [
            f"[{link}]" if link == result.page else str(link)
            for link in links
        ]
        Console().print("Pages: " + " ".join(labels))


def run_suggest(partial: str) -> int:
    """Print type-ahead suggestions for *partial* as JSON."""
    suggestions = CatalogService().suggestions(partial)
    json.dump(
        {"matches": suggestions.matches, "recent": suggestions.recent},
        sys.stdout,
        ensure_ascii=False,
        indent=2,
    )
    sys.stdout.write("\n")
    return EXIT_OK


async def cli_query(
    options: QueryOptions,
    output_format: str = "json",
    save: bool = False,
    export: bool = False,
    service: CatalogService | None = None,
) -> int:
    """Run one catalog query and return an exit code."""
    catalog = service or CatalogService()

    try:
        descriptor = build_descriptor(options)
        result = await catalog.search(descriptor)
    except InvalidQueryError as exc:
        logger.warning("Rejected query: %s", exc)
        _err.print(f"[red]Invalid query: {exc}[/red]")
        return EXIT_INVALID_QUERY
    except CatalogLoadError as exc:
        logger.error("Catalog load failed: %s", exc, exc_info=True)
        _err.print(f"[red]Could not load catalog: {exc}[/red]")
        return EXIT_LOAD_FAILED

    active = descriptor.active_filter_count()
    _err.print(
        f"[green]✓ {result.total} listings[/green]"
        f" [dim](page {result.page}/{max(result.total_pages, 1)},"
        f" {active} filters active)[/dim]"
    )
    if not result.total:
        _err.print("[yellow]No listings match this query.[/yellow]")

    if save or export:
        _save_results(descriptor, result, save=save, export=export)

    if output_format == "table":
        _print_table(result)
    else:
        json.dump(
            result_to_dict(result),
            sys.stdout,
            ensure_ascii=False,
            indent=2,
        )
        sys.stdout.write("\n")

    return EXIT_OK


def _save_results(
    descriptor: QueryDescriptor,
    result: QueryResult,
    save: bool,
    export: bool,
) -> None:
    """Write the page to JSON and/or CSV, reporting failures on stderr."""
    try:
        file_manager = FileManager()
        if save:
            path = file_manager.save_results(descriptor, result)
            _err.print(f"[dim]Saved → {path}[/dim]")
        if export:
            path = file_manager.export_csv(descriptor, result)
            _err.print(f"[dim]Exported → {path}[/dim]")
    except OSError as exc:
        logger.error("Save failed: %s", exc, exc_info=True)
        _err.print(f"[red]Save failed: {exc}[/red]")
