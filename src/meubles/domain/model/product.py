"""Product aggregate.

Products live independently of orders. They are created, edited and
removed by the admin; orders only keep a snapshot of the product at
checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from meubles.domain.exceptions import ValidationError
from meubles.domain.model.category import Category
from meubles.domain.model.value_objects import Money, discount_percent


@dataclass(frozen=True)
class Product:
    """A product in the catalog, as read back from the backend.

    ``image_urls`` keeps the order the admin chose; the first image is
    the one shown in listings.
    """

    id: str
    name: str
    price: Money
    stock: int = 0
    description: str | None = None
    old_price: Money | None = None
    image_urls: tuple[str, ...] = field(default_factory=tuple)
    category_id: str | None = None
    created_at: datetime | None = None
    category: Category | None = None  # only resolved by single-product reads

    def __post_init__(self) -> None:
        if self.stock < 0:
            raise ValidationError(f"Product stock cannot be negative, got {self.stock}")

    @property
    def in_stock(self) -> bool:
        return self.stock > 0

    @property
    def discount_percent(self) -> int:
        return discount_percent(self.price, self.old_price)

    @property
    def main_image(self) -> str | None:
        return self.image_urls[0] if self.image_urls else None
