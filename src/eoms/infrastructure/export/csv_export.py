"""CSV export of the full order collection.

One row per order.  Line items are flattened into a single cell:

    Brackets (Brass, Chrome/Zinc, 2kg, ₹250.00/kg, ₹590.00); Pipes (...)
"""

from __future__ import annotations

import csv
from pathlib import Path
from typing import Sequence, TextIO

from eoms.domain.model.order import Order, PlatingLineItem

HEADER = [
    "Order ID",
    "Customer",
    "Items (Name, Material, Plating, Qty, Rate/kg, Item Total)",
    "Total",
    "Status",
    "Date",
]
DEFAULT_FILENAME = "electroplating_orders.csv"


def _item_detail(item: PlatingLineItem) -> str:
    platings = "/".join(t.value for t in item.plating_types)
    return (
        f"{item.item_name} ({item.material.value}, {platings}, {item.quantity}, "
        f"{item.rate_per_kg}/kg, {item.line_total})"
    )


def order_to_row(order: Order) -> list[str]:
    return [
        order.id,
        order.customer.name,
        "; ".join(_item_detail(item) for item in order.items),
        f"{order.order_total.amount:.2f}",
        order.status,
        order.order_date,
    ]


def write_orders_csv(orders: Sequence[Order], stream: TextIO) -> int:
    """Write header plus one row per order; returns the number of orders."""
    writer = csv.writer(stream)
    writer.writerow(HEADER)
    for order in orders:
        writer.writerow(order_to_row(order))
    return len(orders)


def export_orders_csv(orders: Sequence[Order], path: Path) -> int:
    with path.open("w", encoding="utf-8", newline="") as fh:
        return write_orders_csv(orders, fh)
