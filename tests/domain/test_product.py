"""Unit tests for the Product aggregate."""

import pytest

from meubles.domain.exceptions import ValidationError
from meubles.domain.model.product import Product
from meubles.domain.model.value_objects import Money


class TestProduct:

    def test_negative_stock_rejected(self):
        with pytest.raises(ValidationError, match="stock cannot be negative"):
            Product(id="1", name="Table", price=Money.of("10"), stock=-1)

    def test_negative_price_rejected(self):
        with pytest.raises(ValidationError, match="cannot be negative"):
            Product(id="1", name="Table", price=Money.of("-10"))

    def test_main_image_is_first_url(self):
        p = Product(id="1", name="Table", price=Money.of("10"), image_urls=("b.jpg", "a.jpg"))
        assert p.main_image == "b.jpg"

    def test_discount(self):
        p = Product(id="1", name="Table", price=Money.of("80"), old_price=Money.of("100"))
        assert p.discount_percent == 20

    def test_in_stock(self):
        assert not Product(id="1", name="Table", price=Money.of("10")).in_stock
