# src/storage/file_manager.py

"""Handles saving query results to disk."""

import csv
import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Any

from src.config.settings import Settings
from src.models.product import Product
from src.models.query import QueryDescriptor, QueryResult

logger = logging.getLogger("campus_market.storage")

_UNSAFE_CHARS_RE = re.compile(r"[^A-Za-z0-9_-]+")


def product_to_dict(product: Product) -> dict[str, Any]:
    """Serialise a listing to a plain dict."""
    return {
        "id": product.id,
        "title": product.title,
        "description": product.description,
        "category": product.category.value,
        "condition": product.condition.value,
        "price": product.price,
        "tags": list(product.tags),
        "city": product.location.city,
        "address": product.location.address,
        "university": product.location.university,
        "seller": product.owner.name,
        "seller_rating": product.owner.rating,
        "seller_verified": product.owner.is_verified,
        "is_available": product.is_available,
        "created_at": product.created_at.isoformat(),
    }


def _slug(descriptor: QueryDescriptor) -> str:
    term = descriptor.search_term.strip() or "all"
    return _UNSAFE_CHARS_RE.sub("_", term)[:40]


class FileManager:
    """Handles saving query results to disk."""

    def __init__(self, results_dir: Path | None = None) -> None:
        self.results_dir: Path = results_dir or Settings.RESULTS_DIR
        self.results_dir.mkdir(parents=True, exist_ok=True)
        logger.debug(
            "FileManager initialised — results_dir=%s", self.results_dir
        )

    def save_results(
        self, descriptor: QueryDescriptor, result: QueryResult
    ) -> Path:
        """Save one result page and its query to a timestamped JSON file."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = (
            f"results_{_slug(descriptor)}_p{result.page}_{timestamp}.json"
        )
        filepath = self.results_dir / filename

        data = {
            "query": descriptor.to_dict(),
            "total": result.total,
            "total_pages": result.total_pages,
            "page": result.page,
            "items": [product_to_dict(p) for p in result.items],
        }

        with open(filepath, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.info(
            "Saved %d listings for '%s' to %s",
            len(result.items),
            descriptor.search_term,
            filepath,
        )
        return filepath

    def export_csv(
        self, descriptor: QueryDescriptor, result: QueryResult
    ) -> Path:
        """Export one result page to CSV, keeping the engine's order."""
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = (
            f"export_{_slug(descriptor)}_p{result.page}_{timestamp}.csv"
        )
        filepath = self.results_dir / filename

        with open(filepath, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(
                [
                    "ID",
                    "Title",
                    "Price",
                    "Category",
                    "Condition",
                    "City",
                    "Seller",
                    "Verified",
                    "Listed",
                ]
            )
            for p in result.items:
                writer.writerow(
                    [
                        p.id,
                        p.title,
                        "" if p.price is None else p.price,
                        p.category.value,
                        p.condition.value,
                        p.location.city,
                        p.owner.name,
                        "yes" if p.owner.is_verified else "no",
                        p.created_at.date().isoformat(),
                    ]
                )

        logger.info(
            "Exported %d listings for '%s' to %s",
            len(result.items),
            descriptor.search_term,
            filepath,
        )
        return filepath
