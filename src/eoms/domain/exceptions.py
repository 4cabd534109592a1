"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.
"""

from __future__ import annotations


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """User input is missing or malformed."""


class MissingFieldError(ValidationError):
    """A required field is absent, empty, or not a usable value."""

    def __init__(self, field: str, message: str | None = None) -> None:
        super().__init__(message or f"Missing or invalid field: {field}")
        self.field = field


class PriceCountMismatchError(ValidationError):
    """The number of plating prices differs from the number of plating types."""

    def __init__(self, type_count: int, price_count: int) -> None:
        super().__init__(
            f"Number of plating prices ({price_count}) must match "
            f"plating types ({type_count})"
        )
        self.type_count = type_count
        self.price_count = price_count


class NoItemsError(ValidationError):
    """An order was submitted without any line items."""

    def __init__(self) -> None:
        super().__init__("Please add at least one item to the order")


class OrderItemsInvalidError(ValidationError):
    """One or more line items of an order failed validation.

    ``errors`` maps the 1-based item position to the error raised for it,
    so every defective item can be reported at once.
    """

    def __init__(self, item_count: int, errors: dict[int, ValidationError]) -> None:
        lines = [f"Item {pos}: {err}" for pos, err in sorted(errors.items())]
        super().__init__("Invalid order items:\n" + "\n".join(lines))
        self.item_count = item_count
        self.errors = dict(errors)

    @property
    def validity(self) -> list[bool]:
        """Per-item validity, in submission order."""
        return [pos not in self.errors for pos in range(1, self.item_count + 1)]


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class CustomerNotFoundError(EntityNotFoundError):
    def __init__(self, customer_id: str) -> None:
        super().__init__(f"Customer '{customer_id}' not found")
        self.customer_id = customer_id


class OrderNotFoundError(EntityNotFoundError):
    def __init__(self, order_id: str) -> None:
        super().__init__(f"Order '{order_id}' not found")
        self.order_id = order_id


class PersistenceError(DomainException):
    """The backing store could not be written."""
