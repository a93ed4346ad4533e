"""Exceptions raised by the order workflow."""


class OrdersError(Exception):
    """Base class for order workflow errors."""


class InvalidQuantityError(OrdersError, ValueError):
    """A quantity or variant count violates the distributor's preconditions."""


class VariantKeyCollisionError(OrdersError, ValueError):
    """Two different value combinations join to the same variant key."""
    def __init__(self, duplicates: list[str]):
        super().__init__(
            f"Variant values produce duplicate combination keys: {', '.join(duplicates)}"
        )
        self.duplicates = list(duplicates)


class OrderValidationError(OrdersError):
    """Draft is not complete enough to be saved. Carries every blocking problem."""
    def __init__(self, problems: list[str]):
        super().__init__("; ".join(problems) or "Order is not valid")
        self.problems = list(problems)


class SampleRoutingError(OrdersError):
    """Requested sample hand-off is not in the transition table."""
    def __init__(self, role: str, routed_to: str, destination: str):
        super().__init__(
            f"Role '{role}' cannot route a sample held by '{routed_to}' to '{destination}'"
        )
        self.role = role
        self.routed_to = routed_to
        self.destination = destination


class StoreError(OrdersError):
    """Persistence store rejected a request."""


class SubmissionError(OrdersError):
    """Order row could not be written, nothing else was attempted."""
    def __init__(self, message: str, *, order_number: str | None = None):
        super().__init__(message)
        self.order_number = order_number


class MediaTooLargeError(OrdersError):
    """Attached file exceeds the upload size limit."""
    def __init__(self, filename: str, size: int, limit: int):
        super().__init__(
            f"File \"{filename}\" is too large. Maximum size is {limit // (1024 * 1024)}MB."
        )
        self.filename = filename
        self.size = size
        self.limit = limit
