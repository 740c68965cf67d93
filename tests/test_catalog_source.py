# tests/test_catalog_source.py

"""Tests for the seed catalog data source."""

import json
import tempfile
import unittest
from pathlib import Path
from typing import Any

from src.models.product import Category, Condition
from src.storage.catalog_source import CatalogLoadError, CatalogSource

_USER = {"id": "u1", "name": "Jane", "rating": 4.8, "is_verified": True}


def _listing(pid: str, **overrides: Any) -> dict[str, Any]:
    """Build one raw seed record."""
    record: dict[str, Any] = {
        "id": pid,
        "title": "Desk Lamp",
        "description": "Adjustable",
        "price": 15,
        "category": "Home",
        "condition": "Good",
        "tags": ["lamp"],
        "location": {"address": "1 Main St", "city": "New York"},
        "owner_id": "u1",
        "created_at": "2024-04-08T00:00:00+00:00",
    }
    record.update(overrides)
    return record


class TestCatalogSourceLoad(unittest.TestCase):
    """CatalogSource.load parsing and error handling."""

    def setUp(self) -> None:
        self.tmp_dir = Path(tempfile.mkdtemp())

    def _write(self, payload: object) -> Path:
        path = self.tmp_dir / "catalog.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return path

    def test_bundled_seed_loads(self) -> None:
        """The shipped seed catalog parses cleanly."""
        products = CatalogSource(latency=0).load()
        self.assertEqual(len(products), 16)
        self.assertEqual(len({p.id for p in products}), 16)
        titles = {p.title for p in products}
        self.assertIn("iPhone Charger Cable", titles)

    def test_bundled_seed_has_unpriced_and_sold_items(self) -> None:
        products = CatalogSource(latency=0).load()
        self.assertTrue(any(p.price is None for p in products))
        self.assertTrue(any(not p.is_available for p in products))

    def test_parses_fields(self) -> None:
        path = self._write(
            {
                "users": [_USER],
                "products": [
                    _listing(
                        "p1",
                        price=None,
                        condition="used",
                        location={
                            "address": "1 Main St",
                            "city": "New York",
                            "university": "NYU",
                            "latitude": 40.7,
                            "longitude": -74.0,
                        },
                    )
                ],
            }
        )
        (product,) = CatalogSource(path=path, latency=0).load()
        self.assertIsNone(product.price)
        self.assertIs(product.category, Category.HOME)
        self.assertIs(product.condition, Condition.GOOD)
        self.assertEqual(product.tags, ("lamp",))
        self.assertEqual(product.location.university, "NYU")
        self.assertEqual(product.owner.name, "Jane")
        self.assertTrue(product.owner.is_verified)
        self.assertIsNotNone(product.created_at.tzinfo)
        self.assertTrue(product.is_available)

    def test_naive_timestamp_treated_as_utc(self) -> None:
        path = self._write(
            {
                "users": [_USER],
                "products": [_listing("p1", created_at="2024-04-08T10:00:00")],
            }
        )
        (product,) = CatalogSource(path=path, latency=0).load()
        self.assertEqual(product.created_at.utcoffset().total_seconds(), 0)  # type: ignore[union-attr]

    def test_invalid_records_dropped(self) -> None:
        path = self._write(
            {
                "users": [_USER],
                "products": [
                    _listing("p1"),
                    _listing("p1", title="Duplicate"),
                    _listing("p2", price=-5),
                ],
            }
        )
        products = CatalogSource(path=path, latency=0).load()
        self.assertEqual([p.id for p in products], ["p1"])

    def test_missing_file(self) -> None:
        source = CatalogSource(path=self.tmp_dir / "nope.json", latency=0)
        with self.assertRaises(CatalogLoadError):
            source.load()

    def test_malformed_json(self) -> None:
        path = self.tmp_dir / "broken.json"
        path.write_text("{not json", encoding="utf-8")
        with self.assertRaises(CatalogLoadError):
            CatalogSource(path=path, latency=0).load()

    def test_unknown_owner(self) -> None:
        path = self._write(
            {"users": [_USER], "products": [_listing("p1", owner_id="ghost")]}
        )
        with self.assertRaises(CatalogLoadError):
            CatalogSource(path=path, latency=0).load()

    def test_unknown_category(self) -> None:
        path = self._write(
            {"users": [_USER], "products": [_listing("p1", category="Cars")]}
        )
        with self.assertRaises(CatalogLoadError):
            CatalogSource(path=path, latency=0).load()

    def test_missing_required_field(self) -> None:
        record = _listing("p1")
        del record["created_at"]
        path = self._write({"users": [_USER], "products": [record]})
        with self.assertRaises(CatalogLoadError):
            CatalogSource(path=path, latency=0).load()


class TestCatalogSourceFetch(unittest.IsolatedAsyncioTestCase):
    """CatalogSource.fetch memoises the snapshot."""

    async def test_fetch_returns_tuple_snapshot(self) -> None:
        source = CatalogSource(latency=0)
        first = await source.fetch()
        second = await source.fetch()
        self.assertIsInstance(first, tuple)
        self.assertIs(first, second)
        self.assertEqual(source.version, 1)

    async def test_version_starts_at_zero(self) -> None:
        source = CatalogSource(latency=0)
        self.assertEqual(source.version, 0)
        await source.fetch()
        self.assertEqual(source.version, 1)


if __name__ == "__main__":
    unittest.main()
