# src/filters/product_validator.py

"""Seed validation: drop listings that break catalog invariants."""

import logging

from src.models.product import Product

logger = logging.getLogger("campus_market.filters")


class ProductValidator:
    """Validate seeded products before they reach the query engine."""

    @staticmethod
    def validate(
        products: list[Product],
    ) -> tuple[list[Product], int]:
        """Drop products with blank titles, negative prices or reused ids.

        The first product seen with a given id wins.  Returns the valid
        products and the count of dropped items.
        """
        valid: list[Product] = []
        seen_ids: set[str] = set()
        dropped = 0

        for product in products:
            if not product.title.strip():
                logger.debug(
                    "Dropped listing with empty title (id=%s)",
                    product.id,
                )
                dropped += 1
                continue
            if product.price is not None and product.price < 0:
                logger.debug(
                    "Dropped listing with negative price "
                    "(id=%s, price=%s)",
                    product.id,
                    product.price,
                )
                dropped += 1
                continue
            if product.id in seen_ids:
                logger.debug(
                    "Dropped listing with duplicate id (id=%s, title=%s)",
                    product.id,
                    product.title,
                )
                dropped += 1
                continue
            seen_ids.add(product.id)
            valid.append(product)

        if dropped:
            logger.info(
                "Validation dropped %d invalid listings",
                dropped,
            )

        return valid, dropped
