"""Tests for the row <-> domain mapping."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from meubles.application import records
from meubles.application.dto import CategoryDraft, ProductDraft
from meubles.domain.exceptions import ValidationError
from meubles.domain.model.order import OrderStatus


class TestScalars:

    def test_timestamp_with_z_suffix(self):
        assert records.parse_timestamp("2025-03-01T10:00:00Z") == datetime(
            2025, 3, 1, 10, tzinfo=timezone.utc
        )

    def test_naive_timestamp_is_utc(self):
        assert records.parse_timestamp("2025-03-01T10:00:00").tzinfo == timezone.utc

    def test_empty_values(self):
        assert records.parse_timestamp(None) is None
        assert records.parse_decimal("") is None

    def test_bad_values(self):
        with pytest.raises(ValidationError):
            records.parse_timestamp("yesterday")
        with pytest.raises(ValidationError):
            records.parse_decimal("cheap")

    def test_float_amount_keeps_its_printed_value(self):
        assert records.parse_decimal(25.5) == Decimal("25.5")


class TestProducts:

    def test_row_with_nested_category(self):
        product = records.product_from_row({
            "id": 3,
            "name": "Buffet",
            "price": 800,
            "old_price": 1000,
            "stock": None,
            "image_urls": None,
            "category_id": 2,
            "categories": {"id": 2, "name": "Salle à manger", "parent_id": None},
        })

        assert product.id == "3"
        assert product.stock == 0
        assert product.image_urls == ()
        assert product.discount_percent == 20
        assert product.category.name == "Salle à manger"
        assert product.category.is_root

    def test_draft_to_row(self):
        row = records.product_draft_to_row(
            ProductDraft(name=" Buffet ", price="799.90", old_price="", image_urls=("a",))
        )

        assert row["name"] == "Buffet"
        assert row["price"] == 799.9
        assert row["old_price"] is None
        assert row["image_urls"] == ["a"]

    @pytest.mark.parametrize(
        "draft, message",
        [
            (ProductDraft(name="", price="10"), "name is required"),
            (ProductDraft(name="X", price="10", stock=-1), "stock cannot be negative"),
            (ProductDraft(name="X", price="abc"), "Invalid money amount"),
        ],
    )
    def test_invalid_drafts(self, draft, message):
        with pytest.raises(ValidationError, match=message):
            records.product_draft_to_row(draft)


class TestCategories:

    def test_draft_strips_name(self):
        assert records.category_draft_to_row(CategoryDraft(" Salon ", "1")) == {
            "name": "Salon",
            "parent_id": "1",
        }


class TestOrders:

    ROW = {
        "id": 11,
        "customer_details": {"fullName": "Amira", "phoneNumber": "20", "address": "Tunis"},
        "total_amount": 607,
        "status": "En traitement",
        "form_data": {
            "product_id": 9,
            "product_name": "Table basse",
            "quantity": 2,
            "unit_price": 300,
            "subtotal": 600,
            "delivery_price": 7,
        },
        "created_at": "2025-05-02T08:30:00+00:00",
    }

    def test_row_to_order(self):
        order = records.order_from_row(self.ROW)

        assert order.id == "11"
        assert order.status == OrderStatus.PROCESSING
        assert order.customer.email is None
        assert order.line.product_id == "9"
        assert order.line.quantity.value == 2
        assert str(order.total_amount) == "607.00 TND"

    def test_order_back_to_row_keeps_document_keys(self):
        row = records.order_to_row(records.order_from_row(self.ROW))

        assert row["customer_details"] == self.ROW["customer_details"]
        assert row["form_data"]["product_name"] == "Table basse"
        assert row["total_amount"] == 607.0
        assert "id" not in row and "created_at" not in row

    def test_unknown_status_is_rejected(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            records.order_from_row({**self.ROW, "status": "Perdue"})

    def test_summary_tolerates_missing_amount(self):
        summary = records.order_summary_from_row({"created_at": "2025-05-02T08:30:00Z"})
        assert summary.total_amount is None
