# src/ui/app.py

"""Terminal UI for browsing the campus_market catalog."""

import logging
from typing import cast

from rich.text import Text
from textual.app import App, ComposeResult
from textual.binding import Binding
from textual.containers import Container, Horizontal
from textual.widgets import (
    Button,
    Checkbox,
    DataTable,
    Footer,
    Header,
    Input,
    Select,
    Static,
)

from src.models.product import Product
from src.models.query import QueryDescriptor, QueryResult, SortKey
from src.services.catalog_service import CatalogService
from src.services.query_engine import InvalidQueryError
from src.storage.catalog_source import CatalogLoadError
from src.storage.file_manager import FileManager
from src.ui.formatting import (
    format_listed_ago,
    format_location,
    format_price,
    format_seller,
)

logger = logging.getLogger("campus_market.ui")

SORT_LABELS: dict[SortKey, str] = {
    SortKey.NEWEST: "Newest first",
    SortKey.OLDEST: "Oldest first",
    SortKey.PRICE_LOW_HIGH: "Price: low to high",
    SortKey.PRICE_HIGH_LOW: "Price: high to low",
    SortKey.RATING: "Seller rating",
    SortKey.POPULARITY: "Popularity",
}


class CampusMarketApp(App[object]):
    """Terminal UI for browsing the campus_market catalog."""

    CSS_PATH = "styles.css"

    BINDINGS = [
        Binding("ctrl+q", "quit", "Quit"),
        Binding("left_square_bracket,pageup", "previous_page", "Prev page"),
        Binding("right_square_bracket,pagedown", "next_page", "Next page"),
        Binding("ctrl+s", "save", "Save"),
        Binding("ctrl+e", "export", "Export CSV"),
    ]

    def __init__(self, service: CatalogService | None = None) -> None:
        super().__init__()
        self.service = service or CatalogService()
        self.file_manager: FileManager | None = None
        self.descriptor = QueryDescriptor()
        self.result = QueryResult()

    @property
    def products(self) -> tuple[Product, ...]:
        """Listings on the current page."""
        return self.result.items

    def compose(self) -> ComposeResult:
        """Build the widget tree for the TUI."""
        yield Header()
        yield Container(
            Static("🎓 Campus Market", id="title"),

            # Search Bar
            Horizontal(
                Input(
                    placeholder="Search listings, categories or tags...",
                    id="search_input",
                ),
                Button("Search", variant="primary", id="search_btn"),
                id="search_bar",
            ),
            Static("", id="suggestions"),

            # Sort and quick filters
            Horizontal(
                Select(
                    [(label, key.value) for key, label in SORT_LABELS.items()],
                    value=SortKey.NEWEST.value,
                    allow_blank=False,
                    id="sort_select",
                ),
                Checkbox("Verified sellers", id="check_verified"),
                Checkbox("Available only", id="check_available"),
                id="filter_bar",
            ),

            Static("Loading catalog...", id="status"),
            cast(
                DataTable[str | Text],
                DataTable(
                    id="results_table",
                    zebra_stripes=True,
                    cursor_type="row",
                ),
            ),
            Static("", id="page_info"),
            id="main_container",
        )
        yield Footer()

    async def on_mount(self) -> None:
        """Configure the results table and show the first page."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.add_columns(
            "Title", "Price", "Condition", "Seller", "Location", "Listed"
        )
        await self.run_query(self.descriptor)

    # ── Event handlers ───────────────────────────────────

    async def on_button_pressed(self, event: Button.Pressed) -> None:
        """Handle button click events."""
        if event.button.id == "search_btn":
            await self.perform_search()

    async def on_input_submitted(self, event: Input.Submitted) -> None:
        """Handle Enter key in the search input."""
        if event.input.id == "search_input":
            await self.perform_search()

    def on_input_changed(self, event: Input.Changed) -> None:
        """Show type-ahead suggestions while the user types."""
        if event.input.id != "search_input":
            return
        suggestions = self.service.suggestions(event.value)
        box = self.query_one("#suggestions", Static)
        if suggestions.matches:
            box.update("Suggestions: " + " · ".join(suggestions.matches))
        else:
            box.update("")

    async def on_select_changed(self, event: Select.Changed) -> None:
        """Re-run the query with the chosen ordering."""
        if event.select.id != "sort_select" or event.value is Select.BLANK:
            return
        sort_key = SortKey(str(event.value))
        if sort_key != self.descriptor.sort_key:
            await self.run_query(self.descriptor.replace(sort_key=sort_key))

    async def on_checkbox_changed(self, event: Checkbox.Changed) -> None:
        """Toggle the verified / available quick filters."""
        if event.checkbox.id == "check_verified":
            await self.run_query(
                self.descriptor.replace(verified_only=event.value)
            )
        elif event.checkbox.id == "check_available":
            await self.run_query(
                self.descriptor.replace(available_only=event.value)
            )

    # ── Query flow ───────────────────────────────────────

    async def perform_search(self) -> None:
        """Search for the term currently in the input box."""
        term = self.query_one("#search_input", Input).value.strip()
        self.query_one("#suggestions", Static).update("")
        await self.run_query(self.descriptor.replace(search_term=term))

    async def run_query(self, descriptor: QueryDescriptor) -> None:
        """Ask the service for *descriptor* and redraw the table."""
        status = self.query_one("#status", Static)
        if descriptor.search_term:
            status.update(f"🔍 Searching '{descriptor.search_term}'...")

        try:
            result = await self.service.search(descriptor)
        except InvalidQueryError as exc:
            logger.warning("Rejected query: %s", exc)
            self.notify(f"Invalid query: {exc}", severity="error")
            return
        except CatalogLoadError as exc:
            logger.error("Catalog load failed: %s", exc, exc_info=True)
            status.update("❌ Catalog unavailable")
            self.notify(str(exc), severity="error")
            return

        self.descriptor = descriptor
        self.result = result
        self.populate_table()

        if not result.total:
            status.update("❌ No listings match")
        else:
            active = descriptor.active_filter_count()
            status.update(
                f"✅ {result.total} listings"
                + (f" · {active} filters" if active else "")
            )

    def populate_table(self) -> None:
        """Fill the DataTable with the current result page."""
        table = cast(
            DataTable[str | Text],
            self.query_one("#results_table", DataTable),
        )
        table.clear()

        for p in self.result.items:
            title_style = "" if p.is_available else "dim strike"
            price_style = "bold green" if p.is_free else ""
            table.add_row(
                Text(p.title[:50], style=title_style),
                Text(format_price(p), style=price_style),
                p.condition.value,
                format_seller(p),
                format_location(p),
                format_listed_ago(p.created_at),
            )

        self.query_one("#page_info", Static).update(self._page_label())

    def _page_label(self) -> str:
        links = self.result.page_links()
        if not links:
            return ""
        labels = [
            f"[{link}]" if link == self.result.page else str(link)
            for link in links
        ]
        return "Page " + " ".join(labels) + "   ([ / ] or PgUp / PgDn)"

    # ── Actions ──────────────────────────────────────────

    async def action_previous_page(self) -> None:
        """Show the previous page of results."""
        if self.result.has_previous:
            await self.run_query(
                self.descriptor.replace(page=self.result.page - 1)
            )

    async def action_next_page(self) -> None:
        """Show the next page of results."""
        if self.result.has_next:
            await self.run_query(
                self.descriptor.replace(page=self.result.page + 1)
            )

    def _files(self) -> FileManager:
        if self.file_manager is None:
            self.file_manager = FileManager()
        return self.file_manager

    def action_save(self) -> None:
        """Save the current page to a JSON file."""
        if not self.result.items:
            self.notify("No results to save", severity="warning")
            return
        try:
            path = self._files().save_results(self.descriptor, self.result)
            self.notify(f"Saved to {path}")
        except OSError as e:
            logger.error("Failed to save results", exc_info=True)
            self.notify(f"Save failed: {e}", severity="error")

    def action_export(self) -> None:
        """Export the current page to a CSV file."""
        if not self.result.items:
            self.notify("No results to export", severity="warning")
            return
        try:
            path = self._files().export_csv(self.descriptor, self.result)
            self.notify(f"Exported to {path}")
        except OSError as e:
            logger.error("Failed to export results", exc_info=True)
            self.notify(f"Export failed: {e}", severity="error")
