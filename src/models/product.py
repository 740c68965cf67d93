# src/models/product.py

"""Catalog listing model shared by the engine, storage and presenters."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class Category(Enum):
    """Closed set of listing categories."""

    ELECTRONICS = "Electronics"
    BOOKS = "Books"
    FURNITURE = "Furniture"
    CLOTHING = "Clothing"
    SPORTS = "Sports"
    HOME = "Home"
    TOOLS = "Tools"
    ACCESSORIES = "Accessories"
    OTHER = "Other"

    @classmethod
    def parse(cls, text: str) -> "Category":
        """Resolve a category from its display name or member name."""
        key = text.strip().lower()
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        msg = f"Unknown category: '{text}'"
        raise ValueError(msg)


# Older listings use "used" / "damaged" for the middle and bottom grades.
_CONDITION_ALIASES: dict[str, str] = {
    "used": "GOOD",
    "damaged": "POOR",
    "like_new": "LIKE_NEW",
    "likenew": "LIKE_NEW",
}


class Condition(Enum):
    """Closed set of item conditions, best first."""

    NEW = "New"
    LIKE_NEW = "Like New"
    GOOD = "Good"
    FAIR = "Fair"
    POOR = "Poor"

    @classmethod
    def parse(cls, text: str) -> "Condition":
        """Resolve a condition from its display name, member name or alias."""
        key = text.strip().lower()
        if key in _CONDITION_ALIASES:
            return cls[_CONDITION_ALIASES[key]]
        for member in cls:
            if key in (member.value.lower(), member.name.lower()):
                return member
        msg = f"Unknown condition: '{text}'"
        raise ValueError(msg)


@dataclass(frozen=True)
class Location:
    """Where a listing can be picked up."""

    address: str
    city: str
    latitude: float = 0.0
    longitude: float = 0.0
    university: str | None = None

    def matches_text(self, needle: str) -> bool:
        """True when *needle* occurs in the address, city or university.

        Each field is matched on its own, so a needle spanning two
        fields does not match.
        """
        needle = needle.lower()
        return any(
            needle in part.lower()
            for part in (self.address, self.city, self.university or "")
        )


@dataclass(frozen=True)
class Owner:
    """The seller of a listing, as seen by the catalog."""

    id: str
    name: str
    rating: float = 0.0
    is_verified: bool = False


@dataclass(frozen=True)
class Product:
    """A single marketplace listing.

    ``price`` is ``None`` for items that are free or have no asking
    price yet; this is kept distinct from a price of ``0``.
    """

    id: str
    title: str
    description: str
    category: Category
    condition: Condition
    price: float | None
    location: Location
    owner: Owner
    created_at: datetime
    tags: tuple[str, ...] = ()
    is_available: bool = True
    updated_at: datetime | None = None
    images: tuple[str, ...] = field(default=(), compare=False)

    @property
    def is_free(self) -> bool:
        """True when the listing has no price or a zero price."""
        return self.price is None or self.price == 0
