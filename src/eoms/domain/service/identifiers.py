"""Domain service: identifier allocation.

Customers get ``CUST-<epoch millis>-<0..999>`` ids.  Orders get
``ORD-0001`` style ids derived from the size of the order collection at
creation time; deleting an order and creating a new one can therefore
reuse an id that is still taken.  Existing bills and exports reference
these ids, so the scheme is kept as it is.
"""

from __future__ import annotations

import random
import time
from typing import Callable

ORDER_PREFIX = "ORD"
CUSTOMER_PREFIX = "CUST"
ORDER_NUMBER_WIDTH = 4


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class IdentifierAllocator:

    def __init__(
        self,
        clock: Callable[[], int] = _epoch_millis,
        rng: random.Random | None = None,
    ) -> None:
        self._clock = clock
        self._rng = rng or random.Random()

    def new_id(self, prefix: str) -> str:
        """Timestamp + random id; collisions are possible but not checked."""
        return f"{prefix}-{self._clock()}-{self._rng.randint(0, 999)}"

    @staticmethod
    def next_order_id(existing_count: int) -> str:
        return f"{ORDER_PREFIX}-{existing_count + 1:0{ORDER_NUMBER_WIDTH}d}"
