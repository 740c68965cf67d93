# src/storage/catalog_source.py

"""Seed catalog data source.

The catalog is a static JSON file read once per session.  ``fetch()``
sleeps for ``Settings.SIMULATED_LATENCY`` seconds first so the
presenters behave as they would against a remote service.
"""

import asyncio
import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.filters.product_validator import ProductValidator
from src.models.product import (
    Category,
    Condition,
    Location,
    Owner,
    Product,
)

logger = logging.getLogger("campus_market.storage")


class CatalogLoadError(RuntimeError):
    """The seed catalog is missing or malformed."""


def _parse_timestamp(raw: str) -> datetime:
    moment = datetime.fromisoformat(raw)
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


def _parse_owner(raw: dict[str, Any]) -> Owner:
    return Owner(
        id=str(raw["id"]),
        name=str(raw["name"]),
        rating=float(raw.get("rating", 0.0)),
        is_verified=bool(raw.get("is_verified", False)),
    )


def _parse_location(raw: dict[str, Any]) -> Location:
    return Location(
        address=str(raw.get("address", "")),
        city=str(raw.get("city", "")),
        latitude=float(raw.get("latitude", 0.0)),
        longitude=float(raw.get("longitude", 0.0)),
        university=raw.get("university") or None,
    )


def _parse_product(
    raw: dict[str, Any], owners: dict[str, Owner]
) -> Product:
    owner_id = raw["owner_id"]
    if owner_id not in owners:
        msg = f"Listing {raw.get('id')} references unknown owner '{owner_id}'"
        raise CatalogLoadError(msg)

    price = raw.get("price")
    updated = raw.get("updated_at")
    return Product(
        id=str(raw["id"]),
        title=str(raw["title"]),
        description=str(raw.get("description", "")),
        category=Category.parse(raw["category"]),
        condition=Condition.parse(raw["condition"]),
        price=float(price) if price is not None else None,
        location=_parse_location(raw.get("location", {})),
        owner=owners[owner_id],
        created_at=_parse_timestamp(raw["created_at"]),
        tags=tuple(str(t) for t in raw.get("tags", [])),
        is_available=bool(raw.get("is_available", True)),
        updated_at=_parse_timestamp(updated) if updated else None,
        images=tuple(raw.get("images", [])),
    )


class CatalogSource:
    """Load and serve the immutable product snapshot."""

    def __init__(
        self,
        path: Path | None = None,
        latency: float | None = None,
    ) -> None:
        self.path: Path = path or Settings.CATALOG_PATH
        self.latency: float = (
            Settings.SIMULATED_LATENCY if latency is None else latency
        )
        self._snapshot: tuple[Product, ...] | None = None
        self.version: int = 0

    def load(self) -> list[Product]:
        """Parse and validate the seed file.

        Raises:
            CatalogLoadError: if the file cannot be read or a record
                is structurally invalid.
        """
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as exc:
            msg = f"Catalog file not found: {self.path}"
            raise CatalogLoadError(msg) from exc
        except json.JSONDecodeError as exc:
            msg = f"Catalog file is not valid JSON: {self.path} ({exc})"
            raise CatalogLoadError(msg) from exc

        try:
            owners = {
                str(u["id"]): _parse_owner(u)
                for u in data.get("users", [])
            }
            products = [
                _parse_product(raw, owners)
                for raw in data.get("products", [])
            ]
        except CatalogLoadError:
            raise
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            msg = f"Malformed catalog record in {self.path}: {exc!r}"
            raise CatalogLoadError(msg) from exc

        valid, dropped = ProductValidator.validate(products)
        logger.info(
            "Loaded %d listings from %s (%d dropped)",
            len(valid),
            self.path,
            dropped,
        )
        return valid

    def snapshot(self) -> tuple[Product, ...]:
        """Return the cached snapshot, loading it on first use."""
        if self._snapshot is None:
            self._snapshot = tuple(self.load())
            self.version += 1
        return self._snapshot

    async def fetch(self) -> tuple[Product, ...]:
        """Simulate a remote fetch, then return the snapshot."""
        if self.latency > 0:
            await asyncio.sleep(self.latency)
        return self.snapshot()
