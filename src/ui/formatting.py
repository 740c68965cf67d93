# src/ui/formatting.py

"""Display helpers shared by the CLI table and the TUI."""

from datetime import datetime, timezone

from src.models.product import Product


def format_listed_ago(created_at: datetime, now: datetime | None = None) -> str:
    """Describe how long ago a listing was posted ("3 days ago")."""
    reference = now or datetime.now(timezone.utc)
    if created_at.tzinfo is None:
        created_at = created_at.replace(tzinfo=timezone.utc)
    if reference.tzinfo is None:
        reference = reference.replace(tzinfo=timezone.utc)

    days = (reference - created_at).days
    if days <= 0:
        return "Today"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days} days ago"
    if days < 30:
        return f"{days // 7} weeks ago"
    return f"{days // 30} months ago"


def format_price(product: Product) -> str:
    """Price label; unpriced listings read as free."""
    if product.price is None:
        return "Free"
    if product.price == 0:
        return "$0.00"
    return f"${product.price:,.2f}"


def format_seller(product: Product) -> str:
    badge = " ✓" if product.owner.is_verified else ""
    return f"{product.owner.name}{badge} ({product.owner.rating:.1f})"


def format_location(product: Product) -> str:
    if product.location.university:
        return f"{product.location.city} · {product.location.university}"
    return product.location.city
