# src/services/query_engine.py

"""Catalog query engine: search, filter, sort and paginate listings.

The engine is a pure function of the product collection and a
:class:`~src.models.query.QueryDescriptor`.  It never mutates its input
and returns identical results for identical arguments, including the
order of ties.

Pipeline (fixed order):
    search term → categories → conditions → price range → location text
    → verified sellers → available only → university / free / nearby
    → sort → paginate
"""

import logging
import math
from collections.abc import Sequence

from src.filters.product_filter import ProductFilter
from src.filters.product_sorter import ProductSorter
from src.models.product import Category, Condition, Product
from src.models.query import QueryDescriptor, QueryResult, SortKey

logger = logging.getLogger("campus_market.engine")


class InvalidQueryError(ValueError):
    """Raised when a query descriptor cannot be answered as given."""


# ── Descriptor validation ────────────────────────────────


def _resolve_sort_key(value: object) -> SortKey:
    if isinstance(value, SortKey):
        return value
    try:
        return SortKey(str(value))
    except ValueError:
        valid = ", ".join(k.value for k in SortKey)
        msg = f"Unknown sort key '{value}' (expected one of: {valid})"
        raise InvalidQueryError(msg) from None


def _resolve_categories(values: frozenset[object]) -> frozenset[Category]:
    resolved: set[Category] = set()
    for value in values:
        if isinstance(value, Category):
            resolved.add(value)
            continue
        try:
            resolved.add(Category.parse(str(value)))
        except ValueError as exc:
            raise InvalidQueryError(str(exc)) from exc
    return frozenset(resolved)


def _resolve_conditions(values: frozenset[object]) -> frozenset[Condition]:
    resolved: set[Condition] = set()
    for value in values:
        if isinstance(value, Condition):
            resolved.add(value)
            continue
        try:
            resolved.add(Condition.parse(str(value)))
        except ValueError as exc:
            raise InvalidQueryError(str(exc)) from exc
    return frozenset(resolved)


def _check_descriptor(descriptor: QueryDescriptor) -> None:
    """Reject descriptors that would make the result ill-defined."""
    if descriptor.page_size <= 0:
        msg = f"page_size must be positive, got {descriptor.page_size}"
        raise InvalidQueryError(msg)

    if len(descriptor.price_range) != 2:
        msg = "price_range must be a (min, max) pair"
        raise InvalidQueryError(msg)
    low, high = descriptor.price_range
    if low > high:
        msg = f"price_range min {low} exceeds max {high}"
        raise InvalidQueryError(msg)

    if descriptor.near is not None and descriptor.radius_km <= 0:
        msg = f"radius_km must be positive, got {descriptor.radius_km}"
        raise InvalidQueryError(msg)


# ── Public API ───────────────────────────────────────────


def apply_filters(
    collection: Sequence[Product],
    descriptor: QueryDescriptor,
) -> list[Product]:
    """Run every filter step of the pipeline, without sorting or paging."""
    _check_descriptor(descriptor)
    categories = _resolve_categories(frozenset(descriptor.categories))
    conditions = _resolve_conditions(frozenset(descriptor.conditions))

    products, _ = ProductFilter.by_search_term(
        collection, descriptor.search_term
    )
    products, _ = ProductFilter.by_categories(products, categories)
    products, _ = ProductFilter.by_conditions(products, conditions)

    if descriptor.price_filter_active:
        low, high = descriptor.price_range
        products, _ = ProductFilter.by_price_range(products, low, high)

    products, _ = ProductFilter.by_location_text(
        products, descriptor.location_text
    )
    if descriptor.verified_only:
        products, _ = ProductFilter.verified_sellers(products)
    if descriptor.available_only:
        products, _ = ProductFilter.available(products)

    if descriptor.university_only:
        products, _ = ProductFilter.at_university(products)
    if descriptor.free_only:
        products, _ = ProductFilter.free_items(products)
    if descriptor.near is not None:
        products, _ = ProductFilter.within_radius(
            products, descriptor.near, descriptor.radius_km
        )

    return products


def query(
    collection: Sequence[Product],
    descriptor: QueryDescriptor,
) -> QueryResult:
    """Answer *descriptor* against *collection*.

    Raises:
        InvalidQueryError: for a non-positive page size, an inverted
            price range, an unknown sort key or enum value, or a
            non-positive radius.
    """
    sort_key = _resolve_sort_key(descriptor.sort_key)
    filtered = apply_filters(collection, descriptor)
    ordered = ProductSorter.sort(filtered, sort_key)

    page_size = descriptor.page_size
    total = len(ordered)
    total_pages = math.ceil(total / page_size) if total else 0
    page = min(max(descriptor.page, 1), max(total_pages, 1))

    start = (page - 1) * page_size
    items = tuple(ordered[start:start + page_size])

    logger.debug(
        "Query '%s' sort=%s matched %d of %d listings (page %d/%d)",
        descriptor.search_term,
        sort_key.value,
        total,
        len(collection),
        page,
        total_pages,
    )

    return QueryResult(
        items=items,
        total=total,
        total_pages=total_pages,
        page=page,
        page_size=page_size,
    )
