# tests/test_settings.py

"""Tests for the Settings configuration class."""

import unittest
from pathlib import Path

from src.config.settings import Settings


class TestSettings(unittest.TestCase):
    """Verify Settings constants."""

    def test_page_size_is_positive_int(self) -> None:
        """PAGE_SIZE must be a positive integer."""
        self.assertIsInstance(Settings.PAGE_SIZE, int)
        self.assertGreater(Settings.PAGE_SIZE, 0)

    def test_default_price_range_is_ordered(self) -> None:
        low, high = Settings.DEFAULT_PRICE_RANGE
        self.assertGreaterEqual(low, 0)
        self.assertLess(low, high)

    def test_nearby_radius_positive(self) -> None:
        self.assertGreater(Settings.NEARBY_RADIUS_KM, 0)

    def test_query_cache_ttl_positive(self) -> None:
        """QUERY_CACHE_TTL must be > 0."""
        self.assertGreater(Settings.QUERY_CACHE_TTL, 0)

    def test_suggestion_lists_are_lowercase(self) -> None:
        for term in Settings.POPULAR_SEARCHES + Settings.RECENT_SEARCHES:
            with self.subTest(term=term):
                self.assertEqual(term, term.lower())

    def test_path_constants_are_paths(self) -> None:
        """Path-typed settings are Path instances."""
        self.assertIsInstance(Settings.BASE_DIR, Path)
        self.assertIsInstance(Settings.CATALOG_PATH, Path)
        self.assertIsInstance(Settings.RESULTS_DIR, Path)
        self.assertIsInstance(Settings.LOGS_DIR, Path)

    def test_catalog_path_exists(self) -> None:
        """The bundled seed catalog must exist on disk."""
        self.assertTrue(Settings.CATALOG_PATH.exists())


if __name__ == "__main__":
    unittest.main()
