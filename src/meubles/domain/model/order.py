"""Order aggregate.

An order is created by the storefront checkout and afterwards only ever
changes status (or is deleted) from the admin side. Everything else it
carries is a snapshot taken at checkout time.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum

from meubles.domain.exceptions import ValidationError
from meubles.domain.model.product import Product
from meubles.domain.model.value_objects import Money, Quantity


class OrderStatus(Enum):
    NEW = "Nouvelle"
    PROCESSING = "En traitement"
    SHIPPED = "Expédiée"
    DELIVERED = "Livrée"
    CANCELLED = "Annulée"

    @classmethod
    def parse(cls, value: str) -> OrderStatus:
        """Accept either the stored French label or the member name."""
        for status in cls:
            if value in (status.value, status.name):
                return status
        allowed = ", ".join(s.value for s in cls)
        raise ValidationError(f"Unknown order status {value!r} (expected one of: {allowed})")


# ---------------------------------------------------------------------------
# Constants for business rules
# ---------------------------------------------------------------------------
DEFAULT_DELIVERY_PRICE = Money(Decimal("7.00"))


@dataclass(frozen=True)
class CustomerDetails:
    full_name: str
    phone_number: str
    address: str
    email: str | None = None

    @staticmethod
    def create(
        full_name: str,
        phone_number: str,
        address: str,
        email: str | None = None,
    ) -> CustomerDetails:
        """Build checkout details, requiring name, phone and address."""
        missing = [
            label
            for label, value in (
                ("full name", full_name),
                ("phone number", phone_number),
                ("address", address),
            )
            if not value or not value.strip()
        ]
        if missing:
            raise ValidationError(f"Missing required customer fields: {', '.join(missing)}")
        return CustomerDetails(
            full_name=full_name.strip(),
            phone_number=phone_number.strip(),
            address=address.strip(),
            email=email.strip() if email and email.strip() else None,
        )


@dataclass(frozen=True)
class OrderLine:
    """Snapshot of the ordered product (stored as the order's form data).

    Prices are locked at checkout: later product edits never change an
    existing order.
    """

    product_id: str
    product_name: str
    quantity: Quantity
    unit_price: Money
    subtotal: Money
    delivery_price: Money


@dataclass(frozen=True)
class Order:
    """Aggregate root for storefront orders.

    Use ``Order.create()`` for new orders. The plain constructor is what
    the record mapper uses to reconstitute orders read from the backend.
    """

    id: str | None
    customer: CustomerDetails
    total_amount: Money
    line: OrderLine
    status: OrderStatus = OrderStatus.NEW
    created_at: datetime | None = None

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        customer: CustomerDetails,
        product: Product,
        quantity: int,
        delivery_price: Money | None = None,
    ) -> Order:
        """Snapshot *product* into a new order for *quantity* units."""
        qty = Quantity(quantity)
        delivery = delivery_price if delivery_price is not None else DEFAULT_DELIVERY_PRICE
        subtotal = product.price * qty.value
        line = OrderLine(
            product_id=product.id,
            product_name=product.name,
            quantity=qty,
            unit_price=product.price,
            subtotal=subtotal,
            delivery_price=delivery,
        )
        return Order(
            id=None,
            customer=customer,
            total_amount=subtotal + delivery,
            line=line,
        )
