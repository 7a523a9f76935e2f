from decimal import Decimal

import pytest

from storefront.core.errors import (
    CheckoutFailed,
    CheckoutUnavailable,
    PaymentDetailsRequired,
    ValidationFailed,
)
from storefront.services.checkout import CheckoutFlow, CheckoutStep

SHIPPING = {
    "first_name": "Ada",
    "last_name": "Lovelace",
    "email": "ada@example.com",
    "phone": "555-0100",
    "address": "12 Analytical Way",
    "city": "London",
    "state": "LDN",
    "zip_code": "N1 9GU",
}

CARD = {
    "card_number": "4242424242424242",
    "card_name": "Ada Lovelace",
    "exp_month": "12",
    "exp_year": "2030",
    "cvv": "123",
}


@pytest.fixture
def flow(cart_service, order_service):
    cart_service.add_item(1, 19, 2)
    return CheckoutFlow(1, cart_service, order_service)


def test_starts_at_shipping_with_defaults(flow):
    assert flow.step == CheckoutStep.SHIPPING
    assert flow.values["country"] == "United States"
    assert flow.values["payment_method"] == "credit"


def test_shipping_requires_valid_fields(flow):
    with pytest.raises(ValidationFailed):
        flow.submit()
    with pytest.raises(ValidationFailed):
        flow.submit(**{**SHIPPING, "email": "not-an-email"})
    assert flow.step == CheckoutStep.SHIPPING

    assert flow.submit(**{**SHIPPING, "email": "ada@example.com"}) == CheckoutStep.PAYMENT


def test_credit_without_card_number_blocks_review(flow):
    flow.submit(**SHIPPING)
    with pytest.raises(PaymentDetailsRequired):
        flow.submit(payment_method="credit", **{**CARD, "card_number": ""})
    assert flow.step == CheckoutStep.PAYMENT

    assert flow.submit(card_number=CARD["card_number"]) == CheckoutStep.REVIEW


def test_paypal_needs_no_card_fields(flow):
    flow.submit(**SHIPPING)
    assert flow.submit(payment_method="paypal") == CheckoutStep.REVIEW


def test_back_keeps_entered_values(flow):
    flow.submit(**SHIPPING)
    flow.submit(payment_method="bank")

    assert flow.back() == CheckoutStep.PAYMENT
    assert flow.back() == CheckoutStep.SHIPPING
    assert flow.back() == CheckoutStep.SHIPPING
    assert flow.values["city"] == "London"
    assert flow.values["payment_method"] == "bank"

    assert flow.submit() == CheckoutStep.PAYMENT
    assert flow.submit() == CheckoutStep.REVIEW


def test_review_places_order_and_clears_cart(flow, cart_service, order_service):
    flow.submit(**SHIPPING)
    flow.submit(**CARD)
    assert flow.summary().total == Decimal("53.1684")

    assert flow.submit() == CheckoutStep.CONFIRMATION
    assert cart_service.get_cart(1) == []

    detail = order_service.get_order(1, flow.order.id)
    assert detail.total == Decimal("53.1684")
    assert [(i.product_id, i.quantity, i.price) for i in detail.items] == [(19, 2, Decimal("19.99"))]

    # Terminal: nothing moves, the empty cart does not redirect
    assert flow.submit() == CheckoutStep.CONFIRMATION
    assert flow.back() == CheckoutStep.CONFIRMATION


def test_failed_order_stays_on_review(flow, cart_service, order_service, monkeypatch):
    flow.submit(**SHIPPING)
    flow.submit(payment_method="paypal")

    def broken(*args, **kwargs):
        raise RuntimeError("storage offline")

    monkeypatch.setattr(order_service, "place_order", broken)
    with pytest.raises(CheckoutFailed):
        flow.submit()

    assert flow.step == CheckoutStep.REVIEW
    assert flow.error == "storage offline"
    assert len(cart_service.get_cart(1)) == 1


def test_empty_cart_makes_checkout_unreachable(cart_service, order_service):
    flow = CheckoutFlow(1, cart_service, order_service)
    with pytest.raises(CheckoutUnavailable):
        flow.submit(**SHIPPING)
    with pytest.raises(CheckoutUnavailable):
        flow.back()


def test_unknown_fields_are_rejected(flow):
    with pytest.raises(ValidationFailed):
        flow.submit(favourite_colour="teal")
