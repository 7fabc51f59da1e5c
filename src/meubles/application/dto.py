"""Data Transfer Objects: plain containers that cross layer boundaries.

Drafts carry what an admin form submits for a create or an update;
they hold raw values and are validated when mapped to backend rows.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class ProductDraft:
    """Input: the product form (create and full update)."""

    name: str
    price: str
    stock: int = 0
    description: str | None = None
    old_price: str | None = None
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    category_id: str | None = None


@dataclass(frozen=True)
class CategoryDraft:
    """Input: the category form. A parent id makes it a subcategory."""

    name: str
    parent_id: str | None = None


@dataclass(frozen=True)
class CheckoutForm:
    """Input: what the customer typed on the product page."""

    product_id: str
    quantity: int
    full_name: str
    phone_number: str
    address: str
    email: str | None = None


@dataclass(frozen=True)
class PlacedOrderDTO:
    """Output: the created order plus the notification outcome."""

    order_id: str | None
    total: str
    notified: bool
    message_id: str | None = None
