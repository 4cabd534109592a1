"""Order aggregate and its priced line items.

The Order is an aggregate root that owns its priced line items.
Line items are priced once, by the pricing service, and stored with
their computed rate and total so a bill never changes after the fact.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from enum import Enum

from eoms.domain.exceptions import MissingFieldError, ValidationError
from eoms.domain.model.customer import CustomerRef
from eoms.domain.model.value_objects import Money, Weight


class Material(Enum):
    BRASS = "Brass"
    STEEL = "Steel"
    COPPER = "Copper"
    ALUMINUM = "Aluminum"


class PlatingType(Enum):
    CHROME = "Chrome"
    ZINC = "Zinc"
    NICKEL = "Nickel"
    GOLD = "Gold"
    SILVER = "Silver"


class OrderStatus(Enum):
    """Statuses offered when taking an order.

    ``Order.status`` is stored as plain text; records carrying any other
    non-empty status are kept as they are.
    """

    PENDING = "Pending"
    IN_PROGRESS = "In Progress"
    COMPLETED = "Completed"
    DELIVERED = "Delivered"


OPEN_STATUSES = frozenset({OrderStatus.PENDING.value, OrderStatus.IN_PROGRESS.value})
CLOSED_STATUSES = frozenset({OrderStatus.COMPLETED.value, OrderStatus.DELIVERED.value})

_ISO_DATE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def required_text(value: str | None, field: str) -> str:
    """Return ``value`` trimmed, or raise if it is absent or blank."""
    if value is None or not str(value).strip():
        raise MissingFieldError(field)
    return str(value).strip()


def parse_order_date(value: str | None) -> str:
    """Validate an ISO ``YYYY-MM-DD`` date and return it unchanged."""
    text = required_text(value, "order_date")
    if not _ISO_DATE.match(text):
        raise ValidationError(f"Order date must be YYYY-MM-DD, got {text!r}")
    try:
        date.fromisoformat(text)
    except ValueError as exc:
        raise ValidationError(f"Invalid order date: {text!r}") from exc
    return text


@dataclass(frozen=True)
class PlatingLineItem:
    """One item sent for plating, priced at order time.

    ``plating_prices[i]`` is the per-kg price of ``plating_types[i]``.
    """

    item_name: str
    material: Material
    plating_types: tuple[PlatingType, ...]
    plating_prices: tuple[Money, ...]
    quantity: Weight
    rate_per_kg: Money
    line_total: Money

    def __post_init__(self) -> None:
        if not self.plating_types:
            raise MissingFieldError("plating_types")
        if len(self.plating_types) != len(self.plating_prices):
            raise ValidationError(
                "Plating prices must be position-aligned with plating types"
            )

    @property
    def plating_label(self) -> str:
        return ", ".join(t.value for t in self.plating_types)

    def summary(self) -> str:
        """Short form used in tables: ``Brackets (2.5kg)``."""
        return f"{self.item_name} ({self.quantity})"


@dataclass
class Order:
    """Aggregate root for plating orders.

    Use ``Order.create()`` for new orders. The ``__init__`` stays simple so
    persisted orders can be reconstituted without re-pricing.
    """

    id: str
    customer: CustomerRef
    status: str
    gst_applied: bool
    order_date: str
    items: list[PlatingLineItem]
    order_total: Money

    # --- Factory (used for NEW orders only) -----------------------------------

    @staticmethod
    def create(
        order_id: str,
        customer: CustomerRef,
        status: str,
        gst_applied: bool,
        order_date: str,
        items: list[PlatingLineItem],
        order_total: Money,
    ) -> Order:
        if not items:
            raise ValidationError("Order must contain at least one item")
        return Order(
            id=order_id,
            customer=customer,
            status=required_text(status, "status"),
            gst_applied=gst_applied,
            order_date=parse_order_date(order_date),
            items=list(items),
            order_total=order_total,
        )

    # --- Mutation -------------------------------------------------------------

    def revise(
        self,
        customer: CustomerRef,
        status: str,
        gst_applied: bool,
        order_date: str,
        items: list[PlatingLineItem],
        order_total: Money,
    ) -> None:
        """Replace everything but the id, keeping this record's identity."""
        if not items:
            raise ValidationError("Order must contain at least one item")
        status = required_text(status, "status")
        order_date = parse_order_date(order_date)

        self.customer = customer
        self.status = status
        self.gst_applied = gst_applied
        self.order_date = order_date
        self.items = list(items)
        self.order_total = order_total

    # --- Computed properties --------------------------------------------------

    @property
    def sequence_number(self) -> int:
        """Numeric suffix of ``ORD-0007`` style ids; 0 when there is none."""
        match = re.search(r"(\d+)$", self.id)
        return int(match.group(1)) if match else 0

    @property
    def item_summary(self) -> str:
        return ", ".join(item.summary() for item in self.items)
