"""Display-ready containers handed from the application layer outward.

Amounts arrive here already formatted, so the CLI and the exporters never
touch Money or Decimal.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class OrderRowDTO:
    """Output: one row of the order table."""

    id: str
    customer_name: str
    item_summary: str  # e.g. "Brackets (2kg), Pipes (1.5kg)"
    total: str  # formatted, e.g. "₹590.00"
    status: str
    order_date: str


@dataclass(frozen=True)
class SummaryDTO:
    total_orders: int
    open_orders: int
    closed_orders: int
    total_revenue: str


@dataclass(frozen=True)
class OrderPageDTO:
    """Output: one page of the order table plus the dashboard figures."""

    rows: list[OrderRowDTO]
    page: int
    total_matching: int
    total_pages: int
    summary: SummaryDTO

    @property
    def showing_label(self) -> str:
        return f"Showing {len(self.rows)} of {self.total_matching} orders"


@dataclass(frozen=True)
class LineItemDTO:
    item_name: str
    material: str
    plating_types: str
    plating_prices: str
    quantity: str
    rate_per_kg: str
    line_total: str


@dataclass(frozen=True)
class OrderDetailsDTO:
    """Output: a complete order as shown in the details view."""

    id: str
    customer_name: str
    customer_phone: str
    order_date: str
    status: str
    gst_label: str
    items: list[LineItemDTO]
    total: str


@dataclass(frozen=True)
class BillRowDTO:
    """One line item on a monthly bill.

    ``order_id`` and ``order_date`` are blank on every row but the first
    of each order.
    """

    order_id: str
    item_name: str
    material: str
    plating_types: str
    quantity: str
    rate_per_kg: str
    line_total: str
    order_date: str


@dataclass(frozen=True)
class BillDTO:
    customer_name: str
    customer_phone: str
    month: str
    rows: list[BillRowDTO]
    grand_total: str
