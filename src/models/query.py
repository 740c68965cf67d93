# src/models/query.py

"""Query descriptor and result models for the catalog query engine."""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from src.config.settings import Settings
from src.models.product import Category, Condition, Product

ELLIPSIS = "..."


class SortKey(Enum):
    """Supported result orderings."""

    NEWEST = "newest"
    OLDEST = "oldest"
    PRICE_LOW_HIGH = "price_low_high"
    PRICE_HIGH_LOW = "price_high_low"
    RATING = "rating"
    POPULARITY = "popularity"


def _enum_value(member: object) -> str:
    """Return an enum's value, or the raw string for unparsed input."""
    if isinstance(member, Enum):
        return str(member.value)
    return str(member)


@dataclass(frozen=True)
class QueryDescriptor:
    """Everything the engine needs to answer one catalog request.

    Empty ``categories`` / ``conditions`` mean "no restriction".  The
    price filter only applies when ``price_range`` is narrower than
    ``Settings.DEFAULT_PRICE_RANGE``.
    """

    search_term: str = ""
    categories: frozenset[Category] = frozenset()
    conditions: frozenset[Condition] = frozenset()
    price_range: tuple[float, float] = Settings.DEFAULT_PRICE_RANGE
    location_text: str = ""
    verified_only: bool = False
    available_only: bool = False
    sort_key: SortKey = SortKey.NEWEST
    page: int = 1
    page_size: int = Settings.PAGE_SIZE
    university_only: bool = False
    free_only: bool = False
    near: tuple[float, float] | None = None
    radius_km: float = Settings.NEARBY_RADIUS_KM

    def __post_init__(self) -> None:
        # Accept any iterable from callers but store immutable sets.
        object.__setattr__(self, "categories", frozenset(self.categories))
        object.__setattr__(self, "conditions", frozenset(self.conditions))
        object.__setattr__(self, "price_range", tuple(self.price_range))

    @property
    def price_filter_active(self) -> bool:
        """True when the price range is narrower than the default."""
        low, high = self.price_range
        default_low, default_high = Settings.DEFAULT_PRICE_RANGE
        return low > default_low or high < default_high

    def active_filter_count(self) -> int:
        """Count active filters the way the filter sheet badges them."""
        count = len(self.categories) + len(self.conditions)
        flags = [
            self.price_filter_active,
            bool(self.location_text.strip()),
            self.verified_only,
            self.available_only,
            self.university_only,
            self.free_only,
            self.near is not None,
        ]
        return count + sum(flags)

    def replace(self, **changes: Any) -> "QueryDescriptor":
        """Return a copy with *changes* applied.

        Any change that does not set ``page`` explicitly sends the
        caller back to the first page.
        """
        if changes and "page" not in changes:
            changes["page"] = 1
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> dict[str, Any]:
        """Stable JSON-friendly view (used for cache keys and exports)."""
        return {
            "search_term": self.search_term,
            "categories": sorted(_enum_value(c) for c in self.categories),
            "conditions": sorted(_enum_value(c) for c in self.conditions),
            "price_range": list(self.price_range),
            "location_text": self.location_text,
            "verified_only": self.verified_only,
            "available_only": self.available_only,
            "sort_key": _enum_value(self.sort_key),
            "page": self.page,
            "page_size": self.page_size,
            "university_only": self.university_only,
            "free_only": self.free_only,
            "near": list(self.near) if self.near is not None else None,
            "radius_km": self.radius_km,
        }


@dataclass(frozen=True)
class QueryResult:
    """One page of engine output plus the metadata to paginate it."""

    items: tuple[Product, ...] = field(default=())
    total: int = 0
    total_pages: int = 0
    page: int = 1
    page_size: int = Settings.PAGE_SIZE

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    def page_links(self) -> list[int | str]:
        """Page labels for the pagination bar."""
        return page_window(self.page, self.total_pages)


def page_window(current: int, total_pages: int) -> list[int | str]:
    """Compute which page numbers a pagination bar should show.

    Short runs are shown in full.  Longer runs show the first and last
    page, the neighbours of *current*, and ``"..."`` for the gaps.
    """
    if total_pages <= 1:
        return []

    if total_pages <= Settings.PAGE_WINDOW_THRESHOLD:
        return list(range(1, total_pages + 1))

    pages: list[int | str] = [1]
    if current > 3:
        pages.append(ELLIPSIS)

    start = max(2, current - 1)
    end = min(total_pages - 1, current + 1)
    pages.extend(range(start, end + 1))

    if current < total_pages - 2:
        pages.append(ELLIPSIS)

    pages.append(total_pages)
    return pages
