"""Ordering and payment errors."""


class OrderingError(Exception):
    """Base class for order placement and payment errors."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class OrderValidationError(OrderingError):
    """Malformed or missing identifiers, quantities or payment method."""

    status_code = 400


class NotFoundError(OrderingError):
    """Unknown seller, catalog item or pending order."""

    status_code = 404


class SignatureMismatchError(OrderingError):
    """Payment signature did not verify; the order is left untouched."""

    status_code = 400


class GatewayUnavailableError(OrderingError):
    """Payment gateway is not configured or the upstream call failed."""

    status_code = 502
