"""Mapping between backend rows and domain models.

The backend speaks JSON rows; these helpers are the only place that
knows the column names and nested document keys.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any

from meubles.application.dto import CategoryDraft, ProductDraft
from meubles.domain.exceptions import ValidationError
from meubles.domain.model.category import Category
from meubles.domain.model.order import CustomerDetails, Order, OrderLine, OrderStatus
from meubles.domain.model.product import Product
from meubles.domain.model.value_objects import Money, Quantity
from meubles.domain.repository.backend import Row
from meubles.domain.service.dashboard_stats import OrderSummary

PRODUCT_COLUMNS = (
    "id, name, description, price, old_price, stock, image_urls, category_id, created_at"
)
PRODUCT_WITH_CATEGORY_COLUMNS = PRODUCT_COLUMNS + ", categories(id, name, parent_id)"
CATEGORY_COLUMNS = "id, name, parent_id"
ORDER_SUMMARY_COLUMNS = "total_amount, created_at, status"


# --- Scalars -----------------------------------------------------------------


def parse_timestamp(value: Any) -> datetime | None:
    """Parse a backend timestamp; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValidationError(f"Invalid timestamp: {value!r}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_decimal(value: Any) -> Decimal | None:
    if value is None or value == "":
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Invalid amount: {value!r}") from exc


def _money(value: Any) -> Money | None:
    amount = parse_decimal(value)
    return None if amount is None else Money(amount)


def _number(money: Money | None) -> float | None:
    return None if money is None else money.as_number()


def _id(value: Any) -> str | None:
    return None if value is None else str(value)


# --- Categories --------------------------------------------------------------


def category_from_row(row: Row) -> Category:
    return Category(
        id=str(row["id"]),
        name=row.get("name") or "",
        parent_id=_id(row.get("parent_id")),
    )


def category_draft_to_row(draft: CategoryDraft) -> Row:
    if not draft.name or not draft.name.strip():
        raise ValidationError("Category name is required")
    return {"name": draft.name.strip(), "parent_id": draft.parent_id}


def category_name_to_row(name: str) -> Row:
    """Row for a rename that leaves the parent untouched."""
    return {"name": category_draft_to_row(CategoryDraft(name=name))["name"]}


# --- Products ----------------------------------------------------------------


def product_from_row(row: Row) -> Product:
    category_row = row.get("categories")
    return Product(
        id=str(row["id"]),
        name=row.get("name") or "",
        description=row.get("description"),
        price=_money(row.get("price")) or Money.zero(),
        old_price=_money(row.get("old_price")),
        stock=int(row.get("stock") or 0),
        image_urls=tuple(row.get("image_urls") or ()),
        category_id=_id(row.get("category_id")),
        created_at=parse_timestamp(row.get("created_at")),
        category=category_from_row(category_row) if category_row else None,
    )


def product_draft_to_row(draft: ProductDraft) -> Row:
    """Validate a product form and turn it into a row for insert/update."""
    if not draft.name or not draft.name.strip():
        raise ValidationError("Product name is required")
    if draft.stock < 0:
        raise ValidationError("Product stock cannot be negative")
    old_price = Money.of(draft.old_price) if draft.old_price not in (None, "") else None
    return {
        "name": draft.name.strip(),
        "description": draft.description,
        "price": _number(Money.of(draft.price)),
        "old_price": _number(old_price),
        "stock": draft.stock,
        "image_urls": list(draft.image_urls),
        "category_id": draft.category_id,
    }


# --- Orders ------------------------------------------------------------------


def order_from_row(row: Row) -> Order:
    customer = row.get("customer_details") or {}
    form = row.get("form_data") or {}
    return Order(
        id=_id(row.get("id")),
        customer=CustomerDetails(
            full_name=customer.get("fullName") or "",
            phone_number=customer.get("phoneNumber") or "",
            address=customer.get("address") or "",
            email=customer.get("email"),
        ),
        total_amount=_money(row.get("total_amount")) or Money.zero(),
        status=OrderStatus.parse(row.get("status") or OrderStatus.NEW.value),
        line=OrderLine(
            product_id=str(form.get("product_id") or ""),
            product_name=form.get("product_name") or "",
            quantity=Quantity(int(form.get("quantity") or 1)),
            unit_price=_money(form.get("unit_price")) or Money.zero(),
            subtotal=_money(form.get("subtotal")) or Money.zero(),
            delivery_price=_money(form.get("delivery_price")) or Money.zero(),
        ),
        created_at=parse_timestamp(row.get("created_at")),
    )


def order_to_row(order: Order) -> Row:
    """Row for inserting a new order; id and created_at come from the backend."""
    customer_details: Row = {
        "fullName": order.customer.full_name,
        "phoneNumber": order.customer.phone_number,
        "address": order.customer.address,
    }
    if order.customer.email:
        customer_details["email"] = order.customer.email
    return {
        "customer_details": customer_details,
        "total_amount": _number(order.total_amount),
        "status": order.status.value,
        "form_data": {
            "product_id": order.line.product_id,
            "product_name": order.line.product_name,
            "quantity": order.line.quantity.value,
            "unit_price": _number(order.line.unit_price),
            "subtotal": _number(order.line.subtotal),
            "delivery_price": _number(order.line.delivery_price),
        },
    }


def order_summary_from_row(row: Row) -> OrderSummary:
    return OrderSummary(
        total_amount=parse_decimal(row.get("total_amount")),
        created_at=parse_timestamp(row.get("created_at")),
        status=row.get("status"),
    )
