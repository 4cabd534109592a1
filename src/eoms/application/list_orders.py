"""Application service: List Orders use case (query).

Runs the listing query over the store's orders and maps the page to
table rows.  The summary figures always cover the whole collection.
"""

from __future__ import annotations

from eoms.application.dto import OrderPageDTO, OrderRowDTO, SummaryDTO
from eoms.application.order_store import OrderStore
from eoms.domain.model.order import Order
from eoms.domain.service.order_query import OrderQuery, run_query, summarize


class ListOrdersHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, query: OrderQuery) -> OrderPageDTO:
        orders = self._store.orders
        result = run_query(orders, query)
        summary = summarize(orders)

        return OrderPageDTO(
            rows=[self._to_row(o) for o in result.page_rows],
            page=query.page,
            total_matching=result.total_matching,
            total_pages=result.total_pages,
            summary=SummaryDTO(
                total_orders=summary.total_orders,
                open_orders=summary.open_orders,
                closed_orders=summary.closed_orders,
                total_revenue=str(summary.total_revenue),
            ),
        )

    @staticmethod
    def _to_row(order: Order) -> OrderRowDTO:
        return OrderRowDTO(
            id=order.id,
            customer_name=order.customer.name,
            item_summary=order.item_summary,
            total=str(order.order_total),
            status=order.status,
            order_date=order.order_date,
        )
