"""Application service: the order store.

Owns the in-memory customer and order collections and is the only
thing that mutates them.  Every mutation validates first, then changes
memory, then hands the full state to the injected ``StoreRepository``
before returning.  A failed validation therefore never leaves a trace.

If the write itself fails, the repository raises ``PersistenceError``;
the in-memory state already reflects the change and stays the source
of truth for the rest of the session.
"""

from __future__ import annotations

import logging
from typing import Sequence

from eoms.domain.exceptions import (
    CustomerNotFoundError,
    NoItemsError,
    OrderNotFoundError,
    ValidationError,
)
from eoms.domain.model.customer import Customer, CustomerRef
from eoms.domain.model.order import Order, parse_order_date, required_text
from eoms.domain.repository.store_repository import StoreRepository
from eoms.domain.service.identifiers import CUSTOMER_PREFIX, IdentifierAllocator
from eoms.domain.service.pricing import PricedOrder, PricingEngine, RawItem

logger = logging.getLogger(__name__)


class OrderStore:

    def __init__(
        self,
        repository: StoreRepository,
        allocator: IdentifierAllocator | None = None,
        pricing: PricingEngine | None = None,
    ) -> None:
        self._repository = repository
        self._allocator = allocator or IdentifierAllocator()
        self._pricing = pricing or PricingEngine()
        self._customers: list[Customer] = repository.load_customers()
        self._orders: list[Order] = repository.load_orders()
        logger.debug(
            "Loaded %d customers and %d orders",
            len(self._customers),
            len(self._orders),
        )

    # --- Read access ----------------------------------------------------------

    @property
    def customers(self) -> tuple[Customer, ...]:
        return tuple(self._customers)

    @property
    def orders(self) -> tuple[Order, ...]:
        return tuple(self._orders)

    def get_customer(self, customer_id: str) -> Customer | None:
        for customer in self._customers:
            if customer.id == customer_id:
                return customer
        return None

    def get_order(self, order_id: str) -> Order | None:
        for order in self._orders:
            if order.id == order_id:
                return order
        return None

    # --- Customers ------------------------------------------------------------

    def add_customer(self, name: str, phone: str) -> Customer:
        name = (name or "").strip()
        phone = (phone or "").strip()
        if not name or not phone:
            raise ValidationError("Please enter both customer name and phone")

        customer = Customer(
            id=self._allocator.new_id(CUSTOMER_PREFIX),
            name=name,
            phone=phone,
        )
        self._customers.append(customer)
        self._persist()
        logger.info("Added customer %s (%s)", customer.id, customer.name)
        return customer

    # --- Orders ---------------------------------------------------------------

    def create_order(
        self,
        customer_id: str,
        status: str,
        gst_applied: bool,
        order_date: str,
        raw_items: Sequence[RawItem],
    ) -> Order:
        customer, priced = self._validate(
            customer_id, status, gst_applied, order_date, raw_items
        )
        order = Order.create(
            order_id=self._allocator.next_order_id(len(self._orders)),
            customer=customer,
            status=status,
            gst_applied=gst_applied,
            order_date=order_date,
            items=list(priced.items),
            order_total=priced.order_total,
        )
        self._orders.append(order)
        self._persist()
        logger.info("Created order %s for %s, total %s", order.id, customer.name, order.order_total)
        return order

    def update_order(
        self,
        order_id: str,
        customer_id: str,
        status: str,
        gst_applied: bool,
        order_date: str,
        raw_items: Sequence[RawItem],
    ) -> Order:
        order = self.get_order(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)

        customer, priced = self._validate(
            customer_id, status, gst_applied, order_date, raw_items
        )
        order.revise(
            customer=customer,
            status=status,
            gst_applied=gst_applied,
            order_date=order_date,
            items=list(priced.items),
            order_total=priced.order_total,
        )
        self._persist()
        logger.info("Updated order %s, total %s", order.id, order.order_total)
        return order

    def delete_order(self, order_id: str) -> None:
        """Remove the order if it exists; unknown ids are ignored."""
        remaining = [o for o in self._orders if o.id != order_id]
        if len(remaining) == len(self._orders):
            logger.debug("Delete ignored, no order %s", order_id)
            return
        self._orders = remaining
        self._persist()
        logger.info("Deleted order %s", order_id)

    def reset_all(self) -> None:
        self._customers = []
        self._orders = []
        self._repository.clear()
        logger.info("Cleared all customers and orders")

    # --- Internal helpers -----------------------------------------------------

    def _validate(
        self,
        customer_id: str,
        status: str,
        gst_applied: bool,
        order_date: str,
        raw_items: Sequence[RawItem],
    ) -> tuple[CustomerRef, PricedOrder]:
        """Run every check an order submission needs, without mutating anything.

        Checks run in form order: items present, items valid, header
        fields present, customer known.
        """
        if not raw_items:
            raise NoItemsError()
        priced = self._pricing.price_order(raw_items, gst_applied)

        customer_id = required_text(customer_id, "customer_id")
        required_text(status, "status")
        parse_order_date(order_date)

        customer = self.get_customer(customer_id)
        if customer is None:
            raise CustomerNotFoundError(customer_id)
        return CustomerRef.snapshot(customer), priced

    def _persist(self) -> None:
        self._repository.save_all(self._customers, self._orders)
