from decimal import Decimal
from typing import Iterable, Optional

from pydantic import BaseModel

from storefront.core.config import settings
from storefront.models import CartItemWithProduct

ZERO = Decimal("0")


class OrderSummary(BaseModel):
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def compute_order_summary(
    subtotal: Decimal,
    shipping_fee: Optional[Decimal] = None,
    tax_rate: Optional[Decimal] = None,
) -> OrderSummary:
    """Flat shipping on any non-empty subtotal, tax on the subtotal only. No rounding."""
    shipping_fee = settings.SHIPPING_FEE if shipping_fee is None else shipping_fee
    tax_rate = settings.TAX_RATE if tax_rate is None else tax_rate

    shipping = shipping_fee if subtotal > 0 else ZERO
    tax = subtotal * tax_rate
    return OrderSummary(subtotal=subtotal, shipping=shipping, tax=tax, total=subtotal + shipping + tax)


def cart_subtotal(items: Iterable[CartItemWithProduct]) -> Decimal:
    return sum((item.line_total for item in items), ZERO)


def summarize_cart(items: Iterable[CartItemWithProduct]) -> OrderSummary:
    return compute_order_summary(cart_subtotal(items))
