"""Value Objects shared across the domain.

Value Objects are immutable and compared by value, not identity.
They encapsulate validation so invalid values can never exist.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from eoms.domain.exceptions import ValidationError

CURRENCY_SYMBOL = "₹"
CENT = Decimal("0.01")


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, halves away from zero."""
    try:
        return value.quantize(CENT, rounding=ROUND_HALF_UP)
    except InvalidOperation as exc:
        # quantize fails once the result needs more digits than the context holds
        raise ValidationError(f"Amount out of range: {value}") from exc


def to_decimal(raw: str | float | int | Decimal) -> Decimal:
    """Coerce user or stored input to a finite Decimal.

    Floats go through ``str`` so 0.1 stays 0.1 instead of its binary
    expansion.
    """
    if isinstance(raw, bool):
        raise ValidationError(f"Not a number: {raw!r}")
    try:
        value = raw if isinstance(raw, Decimal) else Decimal(str(raw).strip())
    except (InvalidOperation, ValueError) as exc:
        raise ValidationError(f"Not a number: {raw!r}") from exc
    if not value.is_finite():
        raise ValidationError(f"Not a number: {raw!r}")
    return value


def format_number(value: Decimal) -> str:
    """Plain rendering without trailing zeros: 2.50 -> '2.5', 100 -> '100'."""
    return f"{value.normalize():f}"


@dataclass(frozen=True)
class Money:
    """Monetary amount in the business currency.

    Uses Decimal to avoid floating-point rounding errors that would be
    unacceptable on a customer's bill.
    """

    amount: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal):
            raise ValidationError(
                f"Money amount must be a Decimal, got {type(self.amount).__name__}"
            )
        if self.amount < Decimal("0"):
            raise ValidationError(
                f"Money amount cannot be negative, got {self.amount}"
            )

    # --- Arithmetic helpers ---------------------------------------------------

    def __add__(self, other: Money) -> Money:
        return Money(self.amount + other.amount)

    def __mul__(self, factor: int | Decimal) -> Money:
        if isinstance(factor, bool) or not isinstance(factor, (int, Decimal)):
            raise TypeError(
                f"Can only multiply Money by int or Decimal, got {type(factor).__name__}"
            )
        return Money(self.amount * factor)

    def __lt__(self, other: Money) -> bool:
        return self.amount < other.amount

    def rounded(self) -> Money:
        return Money(round2(self.amount))

    # --- Display --------------------------------------------------------------

    def __str__(self) -> str:
        return f"{CURRENCY_SYMBOL}{round2(self.amount):.2f}"

    # --- Factory --------------------------------------------------------------

    @staticmethod
    def zero() -> Money:
        return Money(Decimal("0.00"))

    @staticmethod
    def of(amount: str | float | int | Decimal) -> Money:
        """Convenient factory that coerces to Decimal safely."""
        try:
            return Money(to_decimal(amount))
        except ValidationError as exc:
            raise ValidationError(f"Invalid money amount: {amount!r}") from exc


@dataclass(frozen=True)
class Weight:
    """A strictly positive weight in kilograms.

    Plating is charged per kg, so fractional quantities are normal.
    """

    kg: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.kg, Decimal):
            raise ValidationError(
                f"Weight must be a Decimal, got {type(self.kg).__name__}"
            )
        if self.kg <= 0:
            raise ValidationError("Quantity must be positive")

    def __str__(self) -> str:
        return f"{format_number(self.kg)}kg"

    @staticmethod
    def of(kg: str | float | int | Decimal) -> Weight:
        return Weight(to_decimal(kg))
