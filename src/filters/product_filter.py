# src/filters/product_filter.py

"""Catalog filter predicates applied by the query engine."""

import logging
import math
from collections.abc import Callable, Collection, Sequence

from src.models.product import Category, Condition, Product

logger = logging.getLogger("campus_market.filters")

_EARTH_RADIUS_KM = 6371.0


def haversine_km(
    lat1: float, lon1: float, lat2: float, lon2: float
) -> float:
    """Great-circle distance between two points in kilometres."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lon / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return _EARTH_RADIUS_KM * c


def _keep(
    products: Sequence[Product],
    predicate: Callable[[Product], bool],
    label: str,
) -> tuple[list[Product], int]:
    """Split *products* on *predicate*; return kept items and drop count."""
    kept = [p for p in products if predicate(p)]
    excluded = len(products) - len(kept)
    if excluded:
        logger.debug("%s filter excluded %d products", label, excluded)
    return kept, excluded


class ProductFilter:
    """Individual catalog filters.

    Every method returns a new list and the number of products it
    removed; the input sequence is never modified.
    """

    @staticmethod
    def by_search_term(
        products: Sequence[Product], term: str
    ) -> tuple[list[Product], int]:
        """Case-insensitive substring match on title, description,
        category name and tags.  A blank term keeps everything.
        """
        needle = term.strip().lower()
        if not needle:
            return list(products), 0

        def matches(product: Product) -> bool:
            if needle in product.title.lower():
                return True
            if needle in product.description.lower():
                return True
            if needle in product.category.value.lower():
                return True
            return any(needle in tag.lower() for tag in product.tags)

        return _keep(products, matches, "search")

    @staticmethod
    def by_categories(
        products: Sequence[Product], categories: Collection[Category]
    ) -> tuple[list[Product], int]:
        """Inclusion filter: an empty set keeps everything."""
        if not categories:
            return list(products), 0
        return _keep(
            products, lambda p: p.category in categories, "category"
        )

    @staticmethod
    def by_conditions(
        products: Sequence[Product], conditions: Collection[Condition]
    ) -> tuple[list[Product], int]:
        """Inclusion filter: an empty set keeps everything."""
        if not conditions:
            return list(products), 0
        return _keep(
            products, lambda p: p.condition in conditions, "condition"
        )

    @staticmethod
    def by_price_range(
        products: Sequence[Product], low: float, high: float
    ) -> tuple[list[Product], int]:
        """Keep priced products within ``[low, high]``; unpriced ones go."""
        return _keep(
            products,
            lambda p: p.price is not None and low <= p.price <= high,
            "price",
        )

    @staticmethod
    def by_location_text(
        products: Sequence[Product], text: str
    ) -> tuple[list[Product], int]:
        """Substring match on address, city and university."""
        needle = text.strip().lower()
        if not needle:
            return list(products), 0
        return _keep(
            products,
            lambda p: p.location.matches_text(needle),
            "location",
        )

    @staticmethod
    def verified_sellers(
        products: Sequence[Product],
    ) -> tuple[list[Product], int]:
        return _keep(products, lambda p: p.owner.is_verified, "verified")

    @staticmethod
    def available(
        products: Sequence[Product],
    ) -> tuple[list[Product], int]:
        return _keep(products, lambda p: p.is_available, "available")

    @staticmethod
    def at_university(
        products: Sequence[Product],
    ) -> tuple[list[Product], int]:
        return _keep(
            products, lambda p: bool(p.location.university), "university"
        )

    @staticmethod
    def free_items(
        products: Sequence[Product],
    ) -> tuple[list[Product], int]:
        return _keep(products, lambda p: p.is_free, "free")

    @staticmethod
    def within_radius(
        products: Sequence[Product],
        origin: tuple[float, float],
        radius_km: float,
    ) -> tuple[list[Product], int]:
        """Keep products whose pickup point lies within *radius_km*."""
        lat, lon = origin
        return _keep(
            products,
            lambda p: haversine_km(
                lat, lon, p.location.latitude, p.location.longitude
            )
            <= radius_km,
            "nearby",
        )
