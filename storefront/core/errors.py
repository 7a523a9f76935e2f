from typing import Optional


class StorefrontError(Exception):
    """Base class for errors the API layer turns into JSON responses."""

    status_code: int = 400
    default_detail: str = "Request could not be processed"

    def __init__(self, detail: Optional[str] = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFound(StorefrontError):
    status_code = 404
    default_detail = "Not found"


class Forbidden(StorefrontError):
    status_code = 403
    default_detail = "Not authorized"


class Conflict(StorefrontError):
    default_detail = "Already exists"


class ValidationFailed(StorefrontError):
    default_detail = "Invalid input"


class PreconditionFailed(StorefrontError):
    default_detail = "Precondition failed"


# Checkout flow

class CheckoutError(StorefrontError):
    default_detail = "Checkout failed"


class CheckoutUnavailable(CheckoutError):
    default_detail = "Your cart is empty"


class PaymentDetailsRequired(CheckoutError):
    default_detail = "Please fill in all payment fields"


class CheckoutFailed(CheckoutError):
    default_detail = "An error occurred during checkout"
