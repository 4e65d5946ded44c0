"""Storefront error taxonomy.

Each error carries the HTTP status it maps to; ``shared.http`` turns any
``StorefrontError`` that escapes a route into ``{"error": message}``.
"""


class StorefrontError(Exception):
    """Base class for storefront errors."""

    status_code = 500
    default_message = "Internal server error"

    def __init__(self, message: str | None = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(StorefrontError):
    status_code = 400
    default_message = "Invalid request"


class InvalidLineItem(ValidationError):
    default_message = "Invalid line item"


class InvalidQuantity(ValidationError):
    default_message = "Quantity must be a positive integer"


class InvalidOtp(ValidationError):
    default_message = "Invalid OTP"


class OtpExpired(ValidationError):
    default_message = "OTP expired"


class InvalidOrderId(ValidationError):
    default_message = "Invalid order ID"


class CheckoutStepError(ValidationError):
    default_message = "Action not allowed at this checkout step"


class NotFoundError(StorefrontError):
    status_code = 404
    default_message = "Not found"


class ProductNotFound(NotFoundError):
    def __init__(self, product_id: str | None = None):
        self.product_id = product_id
        message = f"Product {product_id} not found" if product_id else "Product not found"
        super().__init__(message)


class OrderNotFound(NotFoundError):
    def __init__(self, order_id: str | None = None):
        self.order_id = order_id
        super().__init__("Order not found")


class TicketNotFound(NotFoundError):
    default_message = "Ticket not found"


class UnauthorizedError(StorefrontError):
    status_code = 401
    default_message = "Unauthorized: Incorrect password"


class UpstreamError(StorefrontError):
    """A payment gateway or mail relay call failed."""

    status_code = 500
    default_message = "Upstream service failed"


class RateLimitError(StorefrontError):
    status_code = 429
    default_message = "Too many requests, please try again later."
