from typing import Any, Optional


class RelayError(Exception):
    """
    Base class for every failure the relay turns into an HTTP answer.
    status_code is what the storefront gets back, which decides whether
    Shopify retries the webhook (only 5xx and timeouts are retried usefully).
    """

    status_code: int = 500

    def __init__(self, message: str, details: Any | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class TransportError(RelayError):
    """Raised when the inbound request body cannot be read."""

    status_code = 400


class AuthError(RelayError):
    """Raised when the webhook signature or static token does not match."""

    status_code = 401


class FormatError(RelayError):
    """Raised when the body is not JSON or not shaped like an order."""

    status_code = 400


class MappingError(RelayError):
    """
    The order can never be sent as-is (empty cart, unknown SKU, bad quantity).
    Returned by the translator instead of being raised, and answered with 200
    so Shopify stops retrying a payload that will not become mappable.
    """

    status_code = 200

    def __init__(
        self,
        message: str,
        order_ref: str = "",
        sku: Optional[str] = None,
        line_item_id: Any = None,
    ) -> None:
        super().__init__(
            message,
            details={"order_ref": order_ref, "sku": sku, "line_item_id": line_item_id},
        )
        self.order_ref = order_ref
        self.sku = sku
        self.line_item_id = line_item_id
