"""Application service: Show Order use case (query)."""

from __future__ import annotations

from eoms.application.dto import LineItemDTO, OrderDetailsDTO
from eoms.application.order_store import OrderStore
from eoms.domain.exceptions import OrderNotFoundError
from eoms.domain.model.order import Order
from eoms.domain.model.value_objects import format_number


class ShowOrderHandler:

    def __init__(self, store: OrderStore) -> None:
        self._store = store

    def handle(self, order_id: str) -> OrderDetailsDTO:
        order = self._store.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        # The order only holds a name snapshot; the phone comes from the
        # customer record, which a reset may have removed.
        customer = self._store.get_customer(order.customer.id)
        phone = customer.phone if customer is not None else "N/A"
        return self._to_dto(order, phone)

    @staticmethod
    def _to_dto(order: Order, phone: str) -> OrderDetailsDTO:
        return OrderDetailsDTO(
            id=order.id,
            customer_name=order.customer.name,
            customer_phone=phone,
            order_date=order.order_date,
            status=order.status,
            gst_label="Yes (18%)" if order.gst_applied else "No",
            items=[
                LineItemDTO(
                    item_name=item.item_name,
                    material=item.material.value,
                    plating_types=item.plating_label,
                    plating_prices=", ".join(
                        format_number(p.amount) for p in item.plating_prices
                    ),
                    quantity=format_number(item.quantity.kg),
                    rate_per_kg=str(item.rate_per_kg),
                    line_total=str(item.line_total),
                )
                for item in order.items
            ],
            total=str(order.order_total),
        )
