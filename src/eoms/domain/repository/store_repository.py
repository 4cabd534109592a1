"""Abstract persistence hook for the order store.

Defined in the domain layer so the domain never depends on
infrastructure.  The store keeps both collections in memory and hands
the complete state to ``save_all`` after every mutation.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Sequence

from eoms.domain.model.customer import Customer
from eoms.domain.model.order import Order


class StoreRepository(ABC):

    @abstractmethod
    def load_customers(self) -> list[Customer]:
        """Return persisted customers; empty if none or unreadable."""

    @abstractmethod
    def load_orders(self) -> list[Order]:
        """Return persisted orders; empty if none or unreadable."""

    @abstractmethod
    def save_all(self, customers: Sequence[Customer], orders: Sequence[Order]) -> None:
        """Replace the persisted copies of both collections."""

    @abstractmethod
    def clear(self) -> None:
        """Remove both persisted collections."""
