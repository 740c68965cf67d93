# src/storage/query_cache.py

"""In-memory memo of query engine results with TTL eviction."""

import json
import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.models.query import QueryDescriptor, QueryResult

logger = logging.getLogger("campus_market.cache")


@dataclass
class CacheEntry:
    """A cached result page for one descriptor and snapshot version."""

    key: str
    result: QueryResult
    timestamp: float


def cache_key(snapshot_version: int, descriptor: QueryDescriptor) -> str:
    """Build a stable key from the snapshot version and descriptor."""
    payload = descriptor.to_dict()
    return f"{snapshot_version}:{json.dumps(payload, sort_keys=True)}"


class QueryCache:
    """Remember recent query results.

    The engine is deterministic, so a result stays correct for as long
    as the snapshot it was computed from; the TTL just bounds memory
    while a user keeps refining filters.
    """

    def __init__(self, ttl: float | None = None) -> None:
        self._entries: dict[str, CacheEntry] = {}
        self._ttl: float = Settings.QUERY_CACHE_TTL if ttl is None else ttl

    def __len__(self) -> int:
        return len(self._entries)

    def get(
        self,
        snapshot_version: int,
        descriptor: QueryDescriptor,
    ) -> QueryResult | None:
        """Return the cached result, or ``None`` on a miss."""
        self._evict_expired(time.time())

        entry = self._entries.get(cache_key(snapshot_version, descriptor))
        if entry is None:
            return None

        logger.debug(
            "Cache hit for '%s' (page %d)",
            descriptor.search_term,
            entry.result.page,
        )
        return entry.result

    def store(
        self,
        snapshot_version: int,
        descriptor: QueryDescriptor,
        result: QueryResult,
    ) -> None:
        """Remember *result* for this descriptor."""
        now = time.time()
        self._evict_expired(now)
        key = cache_key(snapshot_version, descriptor)
        self._entries[key] = CacheEntry(
            key=key, result=result, timestamp=now
        )
        logger.debug(
            "Cached %d of %d results for '%s'",
            len(result.items),
            result.total,
            descriptor.search_term,
        )

    def clear(self) -> int:
        """Purge all cached entries.

        Returns the number of entries that were removed.
        """
        count = len(self._entries)
        self._entries.clear()
        logger.info("Cache manually purged (%d entries removed)", count)
        return count

    def _evict_expired(self, now: float) -> None:
        """Remove entries older than the TTL threshold."""
        expired = [
            key
            for key, entry in self._entries.items()
            if now - entry.timestamp >= self._ttl
        ]
        for key in expired:
            del self._entries[key]
        if expired:
            logger.debug("Evicted %d expired cache entries", len(expired))
