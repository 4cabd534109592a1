"""Domain service: Pricing.

Turns raw item input (as typed into the order form) into priced
``PlatingLineItem`` values and aggregates an order total.

An item's per-kg rate is the sum of its plating prices; the line total
is rate x weight, plus GST when the order carries it.  Rate and line
total are each rounded to paise, halves away from zero, and the order
total is the rounded sum of the rounded line totals.

The service is pure: no repositories, no clock, no side effects.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Sequence, TypeVar

from eoms.domain.exceptions import (
    MissingFieldError,
    NoItemsError,
    OrderItemsInvalidError,
    PriceCountMismatchError,
    ValidationError,
)
from eoms.domain.model.order import Material, PlatingLineItem, PlatingType
from eoms.domain.model.value_objects import Money, Weight, to_decimal

GST_RATE = Decimal("0.18")

E = TypeVar("E", bound=Enum)


@dataclass(frozen=True)
class RawItem:
    """Input: one item row of the order form, not yet validated."""

    item_name: str | None
    material: str | Material | None
    plating_types: Sequence[str | PlatingType] = field(default_factory=tuple)
    plating_prices: Sequence[str | int | float | Decimal] = field(default_factory=tuple)
    quantity_kg: str | int | float | Decimal | None = None


@dataclass(frozen=True)
class PricedOrder:
    items: tuple[PlatingLineItem, ...]
    order_total: Money


class PricingEngine:

    def __init__(self, gst_rate: Decimal = GST_RATE) -> None:
        self._gst_multiplier = Decimal("1") + gst_rate

    def price_item(
        self,
        item_name: str | None,
        material: str | Material | None,
        plating_types: Sequence[str | PlatingType],
        plating_prices: Sequence[str | int | float | Decimal],
        quantity_kg: str | int | float | Decimal | None,
        gst_applied: bool,
    ) -> PlatingLineItem:
        """Validate one item and compute its rate and line total.

        Raises MissingFieldError when a required field is absent or the
        quantity is not a positive number, PriceCountMismatchError when
        prices and plating types are not paired one to one, and
        ValidationError for unknown choices or unusable prices.
        """
        name = _require(item_name, "item_name")
        material_text = _require(material, "material")
        quantity = _parse_quantity(quantity_kg)
        if not plating_types:
            raise MissingFieldError("plating_types", "Select at least one plating type")
        if not plating_prices:
            raise MissingFieldError("plating_prices", "Enter the plating prices")
        if len(plating_prices) != len(plating_types):
            raise PriceCountMismatchError(len(plating_types), len(plating_prices))

        parsed_material = _choice(Material, material_text, "material")
        parsed_types = tuple(
            _choice(PlatingType, _require(t, "plating_types"), "plating type")
            for t in plating_types
        )
        prices = tuple(_parse_price(p) for p in plating_prices)

        rate = sum(prices, Money.zero())
        total = rate * quantity.kg
        if gst_applied:
            total = total * self._gst_multiplier

        return PlatingLineItem(
            item_name=name,
            material=parsed_material,
            plating_types=parsed_types,
            plating_prices=prices,
            quantity=quantity,
            rate_per_kg=rate.rounded(),
            line_total=total.rounded(),
        )

    def price_order(self, raw_items: Sequence[RawItem], gst_applied: bool) -> PricedOrder:
        """Price every item of an order, all or nothing.

        Every item is checked even after one fails, so the caller can
        report all defective items in one pass.
        """
        if not raw_items:
            raise NoItemsError()

        priced: list[PlatingLineItem] = []
        errors: dict[int, ValidationError] = {}
        for position, raw in enumerate(raw_items, start=1):
            try:
                priced.append(
                    self.price_item(
                        raw.item_name,
                        raw.material,
                        raw.plating_types,
                        raw.plating_prices,
                        raw.quantity_kg,
                        gst_applied,
                    )
                )
            except ValidationError as exc:
                errors[position] = exc

        if errors:
            raise OrderItemsInvalidError(len(raw_items), errors)

        total = sum((item.line_total for item in priced), Money.zero())
        return PricedOrder(items=tuple(priced), order_total=total.rounded())


# --- Parsing helpers ----------------------------------------------------------


def _require(value: object, field_name: str) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if value is None or not str(value).strip():
        raise MissingFieldError(field_name)
    return str(value).strip()


def _choice(enum_cls: type[E], text: str, label: str) -> E:
    for member in enum_cls:
        if member.value.lower() == text.lower():
            return member
    allowed = ", ".join(m.value for m in enum_cls)
    raise ValidationError(f"Unknown {label} {text!r} (expected one of: {allowed})")


def _parse_quantity(raw: str | int | float | Decimal | None) -> Weight:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        raise MissingFieldError("quantity_kg")
    try:
        return Weight.of(raw)
    except ValidationError as exc:
        raise MissingFieldError(
            "quantity_kg", f"Quantity must be a positive number, got {raw!r}"
        ) from exc


def _parse_price(raw: str | int | float | Decimal) -> Money:
    try:
        return Money(to_decimal(raw))
    except ValidationError as exc:
        raise ValidationError(f"Invalid plating price: {raw!r}") from exc
