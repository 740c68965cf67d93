# src/filters/suggestions.py

"""Type-ahead suggestions for the search box."""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field

from src.config.settings import Settings

logger = logging.getLogger("campus_market.filters")


@dataclass(frozen=True)
class SearchSuggestions:
    """Suggestions shown under a partially typed search term."""

    matches: list[str] = field(default_factory=lambda: list[str]())
    recent: list[str] = field(default_factory=lambda: list[str]())


def suggest(
    partial: str,
    popular: Sequence[str] | None = None,
    recent: Sequence[str] | None = None,
    limit: int = Settings.SUGGESTION_LIMIT,
) -> SearchSuggestions:
    """Return popular terms containing *partial* plus recent searches.

    Matches keep the order of *popular*; a blank *partial* yields no
    matches but recent searches are still offered.
    """
    popular_terms = (
        Settings.POPULAR_SEARCHES if popular is None else popular
    )
    recent_terms = Settings.RECENT_SEARCHES if recent is None else recent

    needle = partial.strip().lower()
    matches: list[str] = []
    if needle:
        matches = [
            term for term in popular_terms if needle in term.lower()
        ][:limit]

    logger.debug(
        "Suggestions for '%s': %d matches", partial, len(matches)
    )
    return SearchSuggestions(
        matches=matches, recent=list(recent_terms[:limit])
    )
