"""Value Objects for prices and quantities.

Prices are entered in Tunisian dinars on French-language forms, so the
parser accepts both ``1250.5`` and ``1 250,50``.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from meubles.domain.exceptions import ValidationError

CURRENCY = "TND"


@dataclass(frozen=True)
class Money:
    """A non-negative price or total.

    Kept as Decimal in the domain; the backend's numeric columns receive
    it as a JSON number via ``as_number``.
    """

    amount: Decimal
    currency: str = CURRENCY

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(f"Money amount must be a Decimal, got {self.amount!r}")
        if not self.amount.is_finite():
            raise ValidationError(f"Money amount must be a finite number, got {self.amount}")
        if self.amount < 0:
            raise ValidationError(f"Money amount cannot be negative, got {self.amount}")

    def __add__(self, other: Money) -> Money:
        if other.currency != self.currency:
            raise ValidationError(f"Cannot combine {self.currency} with {other.currency}")
        return Money(self.amount + other.amount, self.currency)

    def __mul__(self, units: int) -> Money:
        if not isinstance(units, int):
            raise TypeError(f"Money can only be multiplied by a unit count, not {units!r}")
        return Money(self.amount * units, self.currency)

    def __str__(self) -> str:
        return f"{self.amount:.2f} {self.currency}"

    def as_number(self) -> float:
        return float(self.amount)

    @staticmethod
    def of(raw: str | float | int | Decimal) -> Money:
        """Parse a form or wire value: ``"1 250,50"``, ``"799.90"``, ``450``."""
        text = str(raw).strip().replace("\u00a0", "").replace(" ", "").replace(",", ".")
        try:
            return Money(Decimal(text))
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {raw!r}") from exc

    @staticmethod
    def zero() -> Money:
        return Money(Decimal(0))


def discount_percent(price: Money, old_price: Money | None) -> int:
    """Whole-number discount shown next to a crossed-out old price."""
    if old_price is None or not old_price.amount:
        return 0
    saved = (old_price.amount - price.amount) * 100 / old_price.amount
    return int(saved.quantize(Decimal(1), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Quantity:
    """Units of one product in an order; at least one."""

    value: int

    def __post_init__(self) -> None:
        # bool is an int subclass but never a unit count
        if isinstance(self.value, bool) or not isinstance(self.value, int):
            raise ValidationError(f"Quantity must be an integer, got {self.value!r}")
        if self.value < 1:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return str(self.value)
