"""Domain service: order listing queries.

Produces the page of orders to display from the full collection:

  1. search  : case-insensitive substring over id, customer name, status
                and each item's name, material and plating types
  2. status  : exact match
  3. customer: exact customer id match
  4. month   : order date prefix (``2024-05`` matches ``2024-05-17``)
  5. sort    : closed set of columns, stable in both directions
  6. page    : 1-based slice; pages past the end are simply empty

An empty filter value disables that stage.  The four filters are
independent predicates, so their order does not matter.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Sequence

from eoms.domain.exceptions import ValidationError
from eoms.domain.model.order import CLOSED_STATUSES, OPEN_STATUSES, Order
from eoms.domain.model.value_objects import Money

DEFAULT_PAGE_SIZE = 10


class SortColumn(Enum):
    ID = "id"
    CUSTOMER_NAME = "customer.name"
    CREATED_AT = "createdAt"
    ORDER_TOTAL = "orderTotal"
    STATUS = "status"
    GST_APPLIED = "gstApply"


class SortDirection(Enum):
    ASC = "asc"
    DESC = "desc"


_SORT_KEYS: dict[SortColumn, Callable[[Order], Any]] = {
    SortColumn.ID: lambda o: o.sequence_number,
    SortColumn.CUSTOMER_NAME: lambda o: o.customer.name.lower(),
    # ISO dates order chronologically as text.
    SortColumn.CREATED_AT: lambda o: o.order_date,
    SortColumn.ORDER_TOTAL: lambda o: o.order_total,
    SortColumn.STATUS: lambda o: o.status.lower(),
    SortColumn.GST_APPLIED: lambda o: ("yes" if o.gst_applied else "no"),
}


@dataclass(frozen=True)
class SortState:
    column: SortColumn = SortColumn.CREATED_AT
    direction: SortDirection = SortDirection.DESC

    def toggled(self, column: SortColumn) -> SortState:
        """Clicking the current column flips direction; a new column starts ascending."""
        if column == self.column:
            flipped = (
                SortDirection.DESC
                if self.direction == SortDirection.ASC
                else SortDirection.ASC
            )
            return SortState(column, flipped)
        return SortState(column, SortDirection.ASC)


@dataclass(frozen=True)
class OrderQuery:
    search: str = ""
    status: str = ""
    customer_id: str = ""
    month: str = ""
    sort: SortState = field(default_factory=SortState)
    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class QueryResult:
    page_rows: list[Order]
    total_matching: int
    total_pages: int


@dataclass(frozen=True)
class OrderSummary:
    """Dashboard figures over the whole collection, never just one page."""

    total_orders: int
    open_orders: int
    closed_orders: int
    total_revenue: Money


# --- Filter predicates --------------------------------------------------------


def matches_search(order: Order, term: str) -> bool:
    needle = term.strip().lower()
    if not needle:
        return True
    fields = [order.id, order.customer.name, order.status]
    for item in order.items:
        fields.append(item.item_name)
        fields.append(item.material.value)
        fields.extend(t.value for t in item.plating_types)
    return any(needle in value.lower() for value in fields)


def matches_status(order: Order, status: str) -> bool:
    return not status or order.status == status


def matches_customer(order: Order, customer_id: str) -> bool:
    return not customer_id or order.customer.id == customer_id


def matches_month(order: Order, month: str) -> bool:
    return not month or order.order_date.startswith(month)


def filter_orders(orders: Sequence[Order], query: OrderQuery) -> list[Order]:
    return [
        o
        for o in orders
        if matches_search(o, query.search)
        and matches_status(o, query.status)
        and matches_customer(o, query.customer_id)
        and matches_month(o, query.month)
    ]


# --- Sorting and paging -------------------------------------------------------


def sort_orders(orders: Sequence[Order], sort: SortState) -> list[Order]:
    # sorted() stays stable with reverse=True: ties keep their input order.
    return sorted(
        orders,
        key=_SORT_KEYS[sort.column],
        reverse=sort.direction == SortDirection.DESC,
    )


def run_query(orders: Sequence[Order], query: OrderQuery) -> QueryResult:
    """Filter, sort and slice ``orders`` for one page of the order table."""
    if query.page_size < 1:
        raise ValidationError(f"Page size must be positive, got {query.page_size}")

    matching = sort_orders(filter_orders(orders, query), query.sort)
    total = len(matching)

    if query.page < 1:
        rows: list[Order] = []
    else:
        start = (query.page - 1) * query.page_size
        rows = matching[start:start + query.page_size]

    return QueryResult(
        page_rows=rows,
        total_matching=total,
        total_pages=math.ceil(total / query.page_size),
    )


def clamp_page(page: int, total_pages: int) -> int:
    """Bring a requested page into ``1..total_pages`` (1 when there are none)."""
    return max(1, min(page, total_pages))


def summarize(orders: Sequence[Order]) -> OrderSummary:
    revenue = sum((o.order_total for o in orders), Money.zero())
    return OrderSummary(
        total_orders=len(orders),
        open_orders=sum(1 for o in orders if o.status in OPEN_STATUSES),
        closed_orders=sum(1 for o in orders if o.status in CLOSED_STATUSES),
        total_revenue=revenue.rounded(),
    )
