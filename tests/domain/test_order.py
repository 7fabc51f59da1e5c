"""Unit tests for the Order aggregate and its checkout snapshot."""

import pytest

from meubles.domain.exceptions import ValidationError
from meubles.domain.model.order import CustomerDetails, Order, OrderStatus
from meubles.domain.model.product import Product
from meubles.domain.model.value_objects import Money


def _customer() -> CustomerDetails:
    return CustomerDetails.create("Amira Ben Salah", "+216 20 000 000", "12 rue de Carthage, Tunis")


def _product(price: str = "450.00") -> Product:
    return Product(id="7", name="Fauteuil Doré", price=Money.of(price), stock=4)


class TestOrderCreation:

    def test_happy_path(self):
        order = Order.create(_customer(), _product(), quantity=2)
        assert order.id is None  # assigned by the backend
        assert order.status == OrderStatus.NEW
        assert order.line.product_id == "7"
        assert order.line.product_name == "Fauteuil Doré"

    def test_total_is_subtotal_plus_default_delivery(self):
        order = Order.create(_customer(), _product("450.00"), quantity=2)
        assert order.line.subtotal == Money.of("900.00")
        assert order.line.delivery_price == Money.of("7.00")
        assert order.total_amount == Money.of("907.00")

    def test_custom_delivery_price(self):
        order = Order.create(_customer(), _product("100"), 1, delivery_price=Money.of("0"))
        assert order.total_amount == Money.of("100")

    def test_zero_quantity_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Order.create(_customer(), _product(), quantity=0)

    def test_price_is_snapshot(self):
        """The order keeps the unit price it was created with."""
        order = Order.create(_customer(), _product("450.00"), quantity=1)
        repriced = _product("999.00")
        assert repriced.price != order.line.unit_price
        assert order.line.unit_price == Money.of("450.00")


class TestCustomerDetails:

    def test_strips_whitespace(self):
        c = CustomerDetails.create("  Amira ", " 20 ", " Tunis ", email="  ")
        assert (c.full_name, c.phone_number, c.address, c.email) == ("Amira", "20", "Tunis", None)

    @pytest.mark.parametrize(
        "name, phone, address, missing",
        [
            ("", "20", "Tunis", "full name"),
            ("Amira", "   ", "Tunis", "phone number"),
            ("Amira", "20", "", "address"),
        ],
    )
    def test_required_fields(self, name, phone, address, missing):
        with pytest.raises(ValidationError, match=missing):
            CustomerDetails.create(name, phone, address)


class TestOrderStatus:

    def test_initial_value_is_nouvelle(self):
        assert OrderStatus.NEW.value == "Nouvelle"

    def test_parse_label_and_name(self):
        assert OrderStatus.parse("Expédiée") is OrderStatus.SHIPPED
        assert OrderStatus.parse("CANCELLED") is OrderStatus.CANCELLED

    def test_parse_unknown_rejected(self):
        with pytest.raises(ValidationError, match="Unknown order status"):
            OrderStatus.parse("Perdue")
