"""Multi-step checkout controller.

The flow walks ``shipping -> payment -> review -> confirmation``. Each
``submit`` validates the whole form and moves one step forward; ``back``
moves one step back without touching the entered values. Submitting the
review step places the order from a snapshot of the cart and, once the order
exists, empties the cart. ``confirmation`` is terminal.
"""
import logging
from enum import Enum
from typing import Any, Dict, Literal, Optional

from pydantic import BaseModel, EmailStr, Field, ValidationError

from storefront.core.errors import (
    CheckoutFailed,
    CheckoutUnavailable,
    PaymentDetailsRequired,
    ValidationFailed,
)
from storefront.models import Order, OrderItemCreate, User
from storefront.services.cart import CartService
from storefront.services.order import OrderService
from storefront.services.pricing import OrderSummary, summarize_cart

logger = logging.getLogger(__name__)


class CheckoutStep(str, Enum):
    SHIPPING = "shipping"
    PAYMENT = "payment"
    REVIEW = "review"
    CONFIRMATION = "confirmation"


CARD_FIELDS = ("card_number", "card_name", "exp_month", "exp_year", "cvv")


class CheckoutForm(BaseModel):
    # Shipping information
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    email: EmailStr
    phone: str = Field(min_length=1)
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    state: str = Field(min_length=1)
    zip_code: str = Field(min_length=1)
    country: str = Field(min_length=1)

    # Payment information; card fields only matter for "credit"
    payment_method: Literal["credit", "paypal", "bank"] = "credit"
    card_number: Optional[str] = None
    card_name: Optional[str] = None
    exp_month: Optional[str] = None
    exp_year: Optional[str] = None
    cvv: Optional[str] = None

    def payment_details_complete(self) -> bool:
        if self.payment_method != "credit":
            return True
        return all(getattr(self, name) for name in CARD_FIELDS)


def default_form_values(user: Optional[User] = None) -> Dict[str, Any]:
    return {
        "first_name": (user.first_name if user else None) or "",
        "last_name": (user.last_name if user else None) or "",
        "email": user.email if user else "",
        "phone": "",
        "address": "",
        "city": "",
        "state": "",
        "zip_code": "",
        "country": "United States",
        "payment_method": "credit",
        "card_number": "",
        "card_name": "",
        "exp_month": "",
        "exp_year": "",
        "cvv": "",
    }


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"])
        parts.append(f"{field}: {error['msg']}")
    return "; ".join(parts)


class CheckoutFlow:
    def __init__(
        self,
        user_id: int,
        cart_service: CartService,
        order_service: OrderService,
        user: Optional[User] = None,
    ):
        self.user_id = user_id
        self.cart_service = cart_service
        self.order_service = order_service
        self.step = CheckoutStep.SHIPPING
        self.values = default_form_values(user)
        self.order: Optional[Order] = None
        self.error: Optional[str] = None

    def ensure_reachable(self) -> None:
        """Checkout is unreachable with nothing to buy, except on the confirmation page."""
        if self.step == CheckoutStep.CONFIRMATION:
            return
        if not self.cart_service.get_cart(self.user_id):
            raise CheckoutUnavailable()

    def update(self, **fields: Any) -> None:
        unknown = set(fields) - set(self.values)
        if unknown:
            raise ValidationFailed(f"Unknown checkout fields: {', '.join(sorted(unknown))}")
        self.values.update(fields)

    def validate(self) -> CheckoutForm:
        try:
            return CheckoutForm(**self.values)
        except ValidationError as exc:
            raise ValidationFailed(_describe(exc)) from exc

    def summary(self) -> OrderSummary:
        return summarize_cart(self.cart_service.get_cart(self.user_id))

    def submit(self, **fields: Any) -> CheckoutStep:
        self.ensure_reachable()
        if self.step == CheckoutStep.CONFIRMATION:
            return self.step

        self.update(**fields)
        form = self.validate()

        if self.step == CheckoutStep.SHIPPING:
            self._move(CheckoutStep.PAYMENT)
        elif self.step == CheckoutStep.PAYMENT:
            if not form.payment_details_complete():
                raise PaymentDetailsRequired()
            self._move(CheckoutStep.REVIEW)
        elif self.step == CheckoutStep.REVIEW:
            self._place_order()
        return self.step

    def back(self) -> CheckoutStep:
        self.ensure_reachable()
        if self.step == CheckoutStep.PAYMENT:
            self._move(CheckoutStep.SHIPPING)
        elif self.step == CheckoutStep.REVIEW:
            self._move(CheckoutStep.PAYMENT)
        return self.step

    def _move(self, step: CheckoutStep) -> None:
        logger.debug(
            "checkout %s -> %s",
            self.step.value,
            step.value,
            extra={"user_id": self.user_id, "step": step.value},
        )
        self.step = step

    def _place_order(self) -> None:
        snapshot = self.cart_service.get_cart(self.user_id)
        summary = summarize_cart(snapshot)
        items = [
            OrderItemCreate(product_id=line.product_id, quantity=line.quantity, price=line.product.price)
            for line in snapshot
        ]

        try:
            order = self.order_service.place_order(self.user_id, summary.total, items)
        except Exception as exc:
            self.error = getattr(exc, "detail", None) or str(exc) or CheckoutFailed.default_detail
            logger.warning("Checkout failed: %s", self.error, extra={"user_id": self.user_id})
            raise CheckoutFailed(self.error) from exc

        self.cart_service.clear(self.user_id)
        self.order = order
        self.error = None
        self._move(CheckoutStep.CONFIRMATION)
