"""Unit tests for domain value objects."""

from decimal import Decimal

import pytest

from meubles.domain.exceptions import ValidationError
from meubles.domain.model.value_objects import Money, Quantity, discount_percent


# ── Money ────────────────────────────────────────────────────────────────────


class TestMoney:

    def test_creation(self):
        m = Money(Decimal("10.50"))
        assert m.amount == Decimal("10.50")
        assert m.currency == "TND"

    def test_of_factory_from_string(self):
        assert Money.of("25.99").amount == Decimal("25.99")

    def test_of_factory_from_float(self):
        assert Money.of(12.5) == Money.of("12.50")

    def test_of_accepts_french_formatting(self):
        assert Money.of("1 250,50") == Money.of("1250.50")
        assert Money.of("1\u00a0250") == Money.of("1250")

    def test_invalid_amount_rejected(self):
        with pytest.raises(ValidationError, match="Invalid money amount"):
            Money.of("abc")

    def test_negative_amount_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Money(Decimal("-1"))

    @pytest.mark.parametrize("raw", ["inf", "-Infinity", "NaN"])
    def test_non_finite_amount_rejected(self, raw):
        with pytest.raises(ValidationError, match="finite"):
            Money.of(raw)

    def test_addition(self):
        assert Money.of("10") + Money.of("5.50") == Money.of("15.50")

    def test_multiplication_by_int(self):
        assert Money.of("7.50") * 3 == Money.of("22.50")

    def test_multiplication_by_float_rejected(self):
        with pytest.raises(TypeError):
            Money.of("7.50") * 1.5

    def test_currency_mismatch_rejected(self):
        with pytest.raises(ValidationError, match="Cannot combine"):
            Money(Decimal("1"), "TND") + Money(Decimal("1"), "EUR")

    def test_str(self):
        assert str(Money.of("7")) == "7.00 TND"


class TestDiscountPercent:

    def test_no_old_price(self):
        assert discount_percent(Money.of("100"), None) == 0

    def test_rounded_percentage(self):
        assert discount_percent(Money.of("450"), Money.of("600")) == 25
        assert discount_percent(Money.of("2"), Money.of("3")) == 33


# ── Quantity ─────────────────────────────────────────────────────────────────


class TestQuantity:

    def test_positive(self):
        assert Quantity(3).value == 3

    def test_zero_rejected(self):
        with pytest.raises(ValidationError, match="must be positive"):
            Quantity(0)

    def test_non_integer_rejected(self):
        with pytest.raises(ValidationError, match="must be an integer"):
            Quantity(1.5)
