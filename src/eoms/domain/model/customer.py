"""Customer aggregate.

Customers live independently of orders. An order keeps its own
``CustomerRef`` snapshot, so nothing here ever reaches into orders.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Customer:
    id: str
    name: str
    phone: str


@dataclass(frozen=True)
class CustomerRef:
    """Identity of the customer as it was when the order was written.

    Deliberately a copy rather than a reference: bills must show the name
    the customer had at order time.
    """

    id: str
    name: str

    @staticmethod
    def snapshot(customer: Customer) -> CustomerRef:
        return CustomerRef(id=customer.id, name=customer.name)
