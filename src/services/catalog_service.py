# src/services/catalog_service.py

"""Async front door to the catalog for the CLI and the TUI."""

import logging

from src.filters.suggestions import SearchSuggestions, suggest
from src.models.product import Product
from src.models.query import QueryDescriptor, QueryResult
from src.services.query_engine import query
from src.storage.catalog_source import CatalogSource
from src.storage.query_cache import QueryCache

logger = logging.getLogger("campus_market.service")


class CatalogService:
    """Coordinates the data source, the result cache and the engine."""

    def __init__(
        self,
        source: CatalogSource | None = None,
        cache: QueryCache | None = None,
    ) -> None:
        self.source = source or CatalogSource()
        self.cache = cache or QueryCache()

    async def search(self, descriptor: QueryDescriptor) -> QueryResult:
        """Fetch the snapshot and answer *descriptor*.

        ``InvalidQueryError`` from the engine and ``CatalogLoadError``
        from the source propagate to the caller unchanged.
        """
        products = await self.source.fetch()
        version = self.source.version

        cached = self.cache.get(version, descriptor)
        if cached is not None:
            return cached

        result = query(products, descriptor)
        self.cache.store(version, descriptor, result)

        logger.info(
            "Search '%s' → %d results, page %d/%d",
            descriptor.search_term,
            result.total,
            result.page,
            result.total_pages,
        )
        return result

    async def get_product(self, product_id: str) -> Product | None:
        """Look a listing up by id."""
        products = await self.source.fetch()
        for product in products:
            if product.id == product_id:
                return product
        logger.debug("No listing with id '%s'", product_id)
        return None

    def suggestions(self, partial: str) -> SearchSuggestions:
        """Type-ahead suggestions for a partially typed term."""
        return suggest(partial)
