"""Key-value implementation of StoreRepository.

Each collection is one JSON string under its own key, in the layout the
browser version of the tool wrote to ``localStorage``:

    electroplatingCustomers -> [{"id", "name", "phone"}]
    electroplatingOrders    -> [{"id", "customer": {"id", "name"}, "status",
                                 "gstApply": "yes" | "no", "createdAt",
                                 "items": [...], "orderTotal"}]

A missing or malformed collection loads as empty.
"""

from __future__ import annotations

import json
import logging
from decimal import Decimal
from typing import Any, Callable, Sequence, TypeVar

from eoms.domain.exceptions import ValidationError
from eoms.domain.model.customer import Customer, CustomerRef
from eoms.domain.model.order import Material, Order, PlatingLineItem, PlatingType
from eoms.domain.model.value_objects import Money, Weight, to_decimal
from eoms.domain.repository.store_repository import StoreRepository
from eoms.infrastructure.persistence.key_value_storage import KeyValueStorage

logger = logging.getLogger(__name__)

CUSTOMERS_KEY = "electroplatingCustomers"
ORDERS_KEY = "electroplatingOrders"

T = TypeVar("T")


class KeyValueStoreRepository(StoreRepository):

    def __init__(self, storage: KeyValueStorage) -> None:
        self._storage = storage

    # --- StoreRepository interface --------------------------------------------

    def load_customers(self) -> list[Customer]:
        return self._load(CUSTOMERS_KEY, self._customer_to_domain)

    def load_orders(self) -> list[Order]:
        return self._load(ORDERS_KEY, self._order_to_domain)

    def save_all(self, customers: Sequence[Customer], orders: Sequence[Order]) -> None:
        self._storage.set_item(
            CUSTOMERS_KEY,
            json.dumps([self._customer_to_raw(c) for c in customers], ensure_ascii=False),
        )
        self._storage.set_item(
            ORDERS_KEY,
            json.dumps([self._order_to_raw(o) for o in orders], ensure_ascii=False),
        )

    def clear(self) -> None:
        self._storage.remove_item(CUSTOMERS_KEY)
        self._storage.remove_item(ORDERS_KEY)

    # --- Serialization --------------------------------------------------------

    @staticmethod
    def _customer_to_raw(customer: Customer) -> dict:
        return {"id": customer.id, "name": customer.name, "phone": customer.phone}

    @staticmethod
    def _customer_to_domain(raw: dict) -> Customer:
        return Customer(
            id=_text(raw, "id"), name=_text(raw, "name"), phone=_text(raw, "phone")
        )

    @staticmethod
    def _order_to_raw(order: Order) -> dict:
        return {
            "id": order.id,
            "customer": {"id": order.customer.id, "name": order.customer.name},
            "status": order.status,
            "gstApply": "yes" if order.gst_applied else "no",
            "createdAt": order.order_date,
            "items": [
                {
                    "itemName": item.item_name,
                    "material": item.material.value,
                    "platingTypes": [t.value for t in item.plating_types],
                    "platingPrices": [_number(p.amount) for p in item.plating_prices],
                    "quantity": _number(item.quantity.kg),
                    "itemRatePerKg": _number(item.rate_per_kg.amount),
                    "itemTotal": _number(item.line_total.amount),
                }
                for item in order.items
            ],
            "orderTotal": _number(order.order_total.amount),
        }

    @staticmethod
    def _order_to_domain(raw: dict) -> Order:
        items = [
            PlatingLineItem(
                item_name=_text(i, "itemName"),
                material=Material(i["material"]),
                plating_types=tuple(PlatingType(t) for t in i["platingTypes"]),
                plating_prices=tuple(Money(to_decimal(p)) for p in i["platingPrices"]),
                quantity=Weight(to_decimal(i["quantity"])),
                rate_per_kg=Money(to_decimal(i["itemRatePerKg"])),
                line_total=Money(to_decimal(i["itemTotal"])),
            )
            for i in raw["items"]
        ]
        return Order(
            id=_text(raw, "id"),
            customer=CustomerRef(
                id=_text(raw["customer"], "id"), name=_text(raw["customer"], "name")
            ),
            status=_text(raw, "status"),
            gst_applied=raw.get("gstApply") == "yes",
            order_date=_text(raw, "createdAt"),
            items=items,
            order_total=Money(to_decimal(raw["orderTotal"])),
        )

    # --- Storage helpers ------------------------------------------------------

    def _load(self, key: str, to_domain: Callable[[dict], T]) -> list[T]:
        text = self._storage.get_item(key)
        if text is None:
            return []
        try:
            records = json.loads(text)
            if not isinstance(records, list):
                raise ValueError("expected a JSON array")
            return [to_domain(raw) for raw in records]
        except (KeyError, TypeError, ValueError, ValidationError) as exc:
            logger.warning("Stored %s is malformed, starting empty: %s", key, exc)
            return []


def _number(value: Decimal) -> Any:
    """JSON number for a Decimal: int when whole, float otherwise."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)


def _text(raw: dict, key: str) -> str:
    value = raw[key]
    if not isinstance(value, str):
        raise ValidationError(f"Field {key!r} must be text, got {value!r}")
    return value
