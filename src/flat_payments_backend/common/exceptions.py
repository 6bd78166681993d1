"""
This file contains custom, application-specific exceptions.

Every failure the payment domain can report has its own type, so callers
(the API layer, scripts, tests) can tell them apart without parsing
messages.
"""
from typing import Any, Optional


class FlatPaymentsError(Exception):
    """Base class for all domain errors."""
    detail: str = "Unexpected error."

    def __init__(self, detail: Optional[str] = None):
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class InvalidFormatError(FlatPaymentsError):
    """Raised when an identifier does not have the canonical UUID shape."""

    def __init__(self, field: str, value: Any):
        self.field = field
        self.value = value
        super().__init__(f"Invalid {field} format: {value!r}")


class InvalidInputError(FlatPaymentsError):
    """Raised when a command field fails one of its declared constraints."""

    def __init__(self, errors: dict[str, str], detail: str = "Validation failed"):
        self.errors = errors
        super().__init__(detail)


class NotFoundError(FlatPaymentsError):
    """
    Raised when an entity does not exist OR belongs to another user.
    Both cases produce the same message.
    """

    def __init__(self, entity: str):
        self.entity = entity
        super().__init__(f"{entity} not found")


class AlreadyPaidError(FlatPaymentsError):
    """Raised when marking a payment that is already paid."""

    def __init__(self, payment_id: Any):
        self.payment_id = payment_id
        super().__init__("Payment is already marked as paid")


class NoPaymentTypesError(FlatPaymentsError):
    """Raised when generating payments for a flat without payment types."""

    def __init__(self, flat_id: Any):
        self.flat_id = flat_id
        super().__init__("No payment types found for this flat. Create payment types first.")


class ConflictError(FlatPaymentsError):
    """Raised when payments for the requested period already exist."""

    def __init__(self, detail: str, conflicts: Optional[list[dict[str, Any]]] = None):
        self.conflicts = conflicts or []
        super().__init__(detail)


class StoreFailureError(FlatPaymentsError):
    """
    Raised when the database fails. The original exception is chained as
    __cause__ for logging and never shown to the caller.
    """

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"Store failure during {operation}")
