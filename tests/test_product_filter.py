# tests/test_product_filter.py

"""Tests for the individual ProductFilter predicates."""

import unittest
from datetime import datetime, timezone

from src.filters.product_filter import ProductFilter, haversine_km
from src.models.product import (
    Category,
    Condition,
    Location,
    Owner,
    Product,
)

_NYU = Location(
    address="123 Main St",
    city="New York",
    university="NYU",
    latitude=40.7128,
    longitude=-74.006,
)
_JERSEY = Location(
    address="101 Hudson St",
    city="Jersey City",
    latitude=40.735,
    longitude=-74.0123,
)


def _make(
    pid: str,
    title: str = "Item",
    description: str = "",
    category: Category = Category.OTHER,
    condition: Condition = Condition.GOOD,
    price: float | None = 10.0,
    tags: tuple[str, ...] = (),
    location: Location = _NYU,
    verified: bool = False,
    available: bool = True,
) -> Product:
    """Create a Product with just the fields a test cares about."""
    return Product(
        id=pid,
        title=title,
        description=description,
        category=category,
        condition=condition,
        price=price,
        location=location,
        owner=Owner(id="u", name="Seller", rating=4.0, is_verified=verified),
        created_at=datetime(2024, 4, 1, tzinfo=timezone.utc),
        tags=tags,
        is_available=available,
    )


class TestSearchTerm(unittest.TestCase):
    """ProductFilter.by_search_term behaviour."""

    def setUp(self) -> None:
        self.products = [
            _make("a", title="iPhone Charger Cable"),
            _make("b", description="Comes with a CHARGER"),
            _make("c", category=Category.ELECTRONICS),
            _make("d", tags=("Laptop", "apple")),
            _make("e", title="Desk Lamp"),
        ]

    def test_blank_term_keeps_all(self) -> None:
        kept, excluded = ProductFilter.by_search_term(self.products, "   ")
        self.assertEqual(len(kept), 5)
        self.assertEqual(excluded, 0)

    def test_matches_title_and_description_case_insensitive(self) -> None:
        kept, excluded = ProductFilter.by_search_term(self.products, "Charger")
        self.assertEqual([p.id for p in kept], ["a", "b"])
        self.assertEqual(excluded, 3)

    def test_matches_category_name(self) -> None:
        kept, _ = ProductFilter.by_search_term(self.products, "electro")
        self.assertEqual([p.id for p in kept], ["c"])

    def test_matches_tags(self) -> None:
        kept, _ = ProductFilter.by_search_term(self.products, "laptop")
        self.assertEqual([p.id for p in kept], ["d"])

    def test_term_is_trimmed(self) -> None:
        kept, _ = ProductFilter.by_search_term(self.products, "  lamp ")
        self.assertEqual([p.id for p in kept], ["e"])

    def test_input_not_mutated(self) -> None:
        before = list(self.products)
        ProductFilter.by_search_term(self.products, "lamp")
        self.assertEqual(self.products, before)


class TestInclusionFilters(unittest.TestCase):
    """Category and condition sets use inclusion semantics."""

    def setUp(self) -> None:
        self.products = [
            _make("a", category=Category.BOOKS, condition=Condition.NEW),
            _make("b", category=Category.HOME, condition=Condition.FAIR),
            _make("c", category=Category.SPORTS, condition=Condition.NEW),
        ]

    def test_empty_category_set_keeps_all(self) -> None:
        kept, excluded = ProductFilter.by_categories(self.products, frozenset())
        self.assertEqual(len(kept), 3)
        self.assertEqual(excluded, 0)

    def test_category_set_is_or(self) -> None:
        kept, excluded = ProductFilter.by_categories(
            self.products, {Category.BOOKS, Category.SPORTS}
        )
        self.assertEqual([p.id for p in kept], ["a", "c"])
        self.assertEqual(excluded, 1)

    def test_condition_set(self) -> None:
        kept, _ = ProductFilter.by_conditions(self.products, {Condition.FAIR})
        self.assertEqual([p.id for p in kept], ["b"])

    def test_empty_condition_set_keeps_all(self) -> None:
        kept, _ = ProductFilter.by_conditions(self.products, set())
        self.assertEqual(len(kept), 3)


class TestPriceRange(unittest.TestCase):
    """ProductFilter.by_price_range behaviour."""

    def test_inclusive_bounds(self) -> None:
        products = [
            _make("a", price=5),
            _make("b", price=10),
            _make("c", price=20),
            _make("d", price=21),
        ]
        kept, excluded = ProductFilter.by_price_range(products, 10, 20)
        self.assertEqual([p.id for p in kept], ["b", "c"])
        self.assertEqual(excluded, 2)

    def test_unpriced_excluded(self) -> None:
        kept, _ = ProductFilter.by_price_range(
            [_make("a", price=None), _make("b", price=0)], 0, 100
        )
        self.assertEqual([p.id for p in kept], ["b"])


class TestLocationAndFlags(unittest.TestCase):
    """Location text and boolean quick filters."""

    def setUp(self) -> None:
        self.products = [
            _make("a", location=_NYU, verified=True, price=None),
            _make("b", location=_JERSEY, available=False, price=0),
            _make("c", location=_JERSEY, verified=True, price=12),
        ]

    def test_location_matches_city(self) -> None:
        kept, _ = ProductFilter.by_location_text(self.products, "jersey")
        self.assertEqual([p.id for p in kept], ["b", "c"])

    def test_location_matches_university(self) -> None:
        kept, _ = ProductFilter.by_location_text(self.products, "NYU")
        self.assertEqual([p.id for p in kept], ["a"])

    def test_location_matches_address(self) -> None:
        kept, _ = ProductFilter.by_location_text(self.products, "hudson")
        self.assertEqual([p.id for p in kept], ["b", "c"])

    def test_location_does_not_span_fields(self) -> None:
        """'st new' straddles the address and city of _NYU only."""
        kept, excluded = ProductFilter.by_location_text(
            self.products, "st new"
        )
        self.assertEqual(kept, [])
        self.assertEqual(excluded, 3)

    def test_blank_location_keeps_all(self) -> None:
        kept, _ = ProductFilter.by_location_text(self.products, "")
        self.assertEqual(len(kept), 3)

    def test_verified_sellers(self) -> None:
        kept, excluded = ProductFilter.verified_sellers(self.products)
        self.assertEqual([p.id for p in kept], ["a", "c"])
        self.assertEqual(excluded, 1)

    def test_available(self) -> None:
        kept, _ = ProductFilter.available(self.products)
        self.assertEqual([p.id for p in kept], ["a", "c"])

    def test_at_university(self) -> None:
        kept, _ = ProductFilter.at_university(self.products)
        self.assertEqual([p.id for p in kept], ["a"])

    def test_free_items(self) -> None:
        kept, _ = ProductFilter.free_items(self.products)
        self.assertEqual([p.id for p in kept], ["a", "b"])


class TestDistance(unittest.TestCase):
    """Haversine distance and the radius filter."""

    def test_zero_distance(self) -> None:
        self.assertAlmostEqual(
            haversine_km(40.7128, -74.006, 40.7128, -74.006), 0.0
        )

    def test_known_distance(self) -> None:
        """One degree of latitude is roughly 111 km."""
        self.assertAlmostEqual(haversine_km(0, 0, 1, 0), 111.19, places=1)

    def test_within_radius(self) -> None:
        products = [_make("a", location=_NYU), _make("b", location=_JERSEY)]
        kept, excluded = ProductFilter.within_radius(
            products, (40.7128, -74.006), 2.0
        )
        self.assertEqual([p.id for p in kept], ["a"])
        self.assertEqual(excluded, 1)


if __name__ == "__main__":
    unittest.main()
