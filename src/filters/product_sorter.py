# src/filters/product_sorter.py

"""Deterministic orderings for catalog results.

Every ordering ends with ``id`` ascending so that equal keys always
come back in the same order and pagination is reproducible.
"""

from collections.abc import Callable, Sequence
from datetime import datetime
from typing import Any

from src.models.product import Product
from src.models.query import SortKey

_SECONDS_PER_DAY = 86_400


def _epoch_seconds(moment: datetime) -> float:
    return moment.timestamp()


def popularity_score(product: Product) -> float:
    """Blend seller rating and recency into one score.

    ``(1 + rating) * days since the epoch``, with days clamped at zero so
    listings dated before 1970 score 0 instead of going negative.  The
    score never decreases as rating or recency grows.
    """
    days = max(_epoch_seconds(product.created_at) / _SECONDS_PER_DAY, 0.0)
    return (1.0 + product.owner.rating) * days


def _price_ascending(product: Product) -> tuple[Any, ...]:
    # Unpriced listings go after every priced one.
    if product.price is None:
        return (1, 0.0, product.id)
    return (0, product.price, product.id)


def _price_descending(product: Product) -> tuple[Any, ...]:
    if product.price is None:
        return (1, 0.0, product.id)
    return (0, -product.price, product.id)


_SORT_KEYS: dict[SortKey, Callable[[Product], tuple[Any, ...]]] = {
    SortKey.NEWEST: lambda p: (-_epoch_seconds(p.created_at), p.id),
    SortKey.OLDEST: lambda p: (_epoch_seconds(p.created_at), p.id),
    SortKey.PRICE_LOW_HIGH: _price_ascending,
    SortKey.PRICE_HIGH_LOW: _price_descending,
    SortKey.RATING: lambda p: (-p.owner.rating, p.id),
    SortKey.POPULARITY: lambda p: (-popularity_score(p), p.id),
}


class ProductSorter:
    """Sort products by a :class:`SortKey`."""

    @staticmethod
    def sort_key_for(key: SortKey) -> Callable[[Product], tuple[Any, ...]]:
        """Return the ``sorted()`` key function for *key*."""
        return _SORT_KEYS[key]

    @staticmethod
    def sort(products: Sequence[Product], key: SortKey) -> list[Product]:
        """Return a new list ordered by *key*, ties broken by ``id``."""
        return sorted(products, key=_SORT_KEYS[key])
