"""Application service: Monthly Bill use case.

Collects one customer's orders for a month (order date prefix match)
and lays them out as bill rows: one row per line item, with the order
id and date printed only on the first row of each order.
"""

from __future__ import annotations

from eoms.application.dto import BillDTO, BillRowDTO
from eoms.application.order_store import OrderStore
from eoms.domain.exceptions import CustomerNotFoundError, ValidationError
from eoms.domain.model.order import Order, required_text
from eoms.domain.model.value_objects import Money, format_number
from eoms.domain.service.order_query import matches_customer, matches_month


class MonthlyBillHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, customer_id: str, month: str) -> BillDTO:
        customer_id = required_text(customer_id, "customer_id")
        month = required_text(month, "month")

        customer = self._store.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)

        orders = [
            o
            for o in self._store.orders
            if matches_customer(o, customer_id) and matches_month(o, month)
        ]
        if not orders:
            raise ValidationError(
                f"No orders found for {customer.name} in {month}"
            )

        rows: list[BillRowDTO] = []
        for order in orders:
            rows.extend(self._rows_for(order))
        grand_total = sum((o.order_total for o in orders), Money.zero()).rounded()

        return BillDTO(
            customer_name=customer.name,
            customer_phone=customer.phone,
            month=month,
            rows=rows,
            grand_total=f"{grand_total.amount:.2f}",
        )

    @staticmethod
    def _rows_for(order: Order) -> list[BillRowDTO]:
        return [
            BillRowDTO(
                order_id=order.id if index == 0 else "",
                item_name=item.item_name,
                material=item.material.value,
                plating_types=item.plating_label,
                quantity=format_number(item.quantity.kg),
                rate_per_kg=f"{item.rate_per_kg.amount:.2f}",
                line_total=f"{item.line_total.amount:.2f}",
                order_date=order.order_date if index == 0 else "",
            )
            for index, item in enumerate(order.items)
        ]
