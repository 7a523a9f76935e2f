from decimal import Decimal

import pytest

from storefront.core import config
from storefront.core.errors import Forbidden, NotFound, PreconditionFailed, ValidationFailed
from storefront.models import OrderItemCreate
from storefront.services.catalog import CatalogService
from storefront.services.pricing import compute_order_summary, summarize_cart


# ---------- Pricing ----------

def test_summary_for_two_of_a_1999_item(cart_service):
    cart_service.add_item(1, 19, 2)  # Essential Cotton T-Shirt, 19.99
    summary = summarize_cart(cart_service.get_cart(1))

    assert cart_service.get_cart(1)[0].line_total == Decimal("39.98")
    assert summary.subtotal == Decimal("39.98")
    assert summary.shipping == Decimal("9.99")
    assert summary.tax == Decimal("3.1984")
    assert summary.total == Decimal("53.1684")


def test_empty_subtotal_ships_free():
    summary = compute_order_summary(Decimal("0"))
    assert summary.shipping == Decimal("0")
    assert summary.total == Decimal("0")


# ---------- Catalog ----------

def test_catalog_page_and_pagination_block(mem_storage):
    service = CatalogService(mem_storage)

    first = service.list_products(page=1, limit=12)
    assert [p.id for p in first.products] == list(range(1, 13))
    assert first.pagination.total == 20
    assert first.pagination.total_pages == 2

    second = service.list_products(page=2, limit=12)
    assert [p.id for p in second.products] == list(range(13, 21))


def test_catalog_total_honours_featured_filter(mem_storage):
    page = CatalogService(mem_storage).list_products(featured=True, limit=5)
    assert len(page.products) == 5
    assert page.pagination.total == 7
    assert page.pagination.total_pages == 2


# ---------- Cart ----------

def test_add_item_requires_existing_product(cart_service):
    with pytest.raises(NotFound):
        cart_service.add_item(1, 999)


def test_add_item_rejects_non_positive_quantity(cart_service):
    with pytest.raises(ValidationFailed):
        cart_service.add_item(1, 1, 0)
    assert cart_service.get_cart(1) == []


def test_update_item_checks_quantity_and_owner(cart_service):
    item = cart_service.add_item(1, 4)

    with pytest.raises(ValidationFailed):
        cart_service.update_item(1, item.id, 0)
    with pytest.raises(NotFound):
        cart_service.update_item(2, item.id, 3)

    assert cart_service.update_item(1, item.id, 3).quantity == 3


def test_remove_item_ignores_other_users_lines(cart_service):
    item = cart_service.add_item(1, 4)
    cart_service.remove_item(2, item.id)
    assert len(cart_service.get_cart(1)) == 1

    cart_service.remove_item(1, item.id)
    cart_service.remove_item(1, 12345)
    assert cart_service.get_cart(1) == []


# ---------- Orders ----------

def _lines(*lines):
    return [OrderItemCreate(product_id=p, quantity=q, price=Decimal(price)) for p, q, price in lines]


def test_place_order_rejects_empty_items(order_service, mem_storage):
    with pytest.raises(PreconditionFailed):
        order_service.place_order(1, Decimal("0"), [])
    assert len(mem_storage.orders) == 0
    assert len(mem_storage.order_items) == 0


def test_place_order_and_read_back(order_service):
    order = order_service.place_order(1, Decimal("53.1684"), _lines((19, 2, "19.99")))
    assert order.status == "pending"

    detail = order_service.get_order(1, order.id)
    assert detail.total == Decimal("53.1684")
    assert detail.items[0].price == Decimal("19.99")
    assert [o.id for o in order_service.list_orders(1)] == [order.id]


def test_get_order_enforces_ownership(order_service):
    order = order_service.place_order(1, Decimal("53.1684"), _lines((19, 2, "19.99")))
    with pytest.raises(Forbidden):
        order_service.get_order(2, order.id)
    with pytest.raises(NotFound):
        order_service.get_order(1, 404)


def test_mismatched_total_is_stored_unless_verification_is_on(order_service, monkeypatch):
    order = order_service.place_order(1, Decimal("1.00"), _lines((19, 2, "19.99")))
    assert order.total == Decimal("1.00")

    monkeypatch.setattr(config.settings, "VERIFY_ORDER_TOTALS", True)
    with pytest.raises(ValidationFailed):
        order_service.place_order(1, Decimal("1.00"), _lines((19, 2, "19.99")))
    # A matching total still goes through
    order_service.place_order(1, Decimal("53.1684"), _lines((19, 2, "19.99")))
    assert len(order_service.list_orders(1)) == 2


def test_place_order_rejects_unknown_products(order_service, mem_storage):
    with pytest.raises(NotFound):
        order_service.place_order(1, Decimal("10.00"), _lines((19, 1, "19.99"), (999, 1, "5.00")))
    assert len(mem_storage.orders) == 0
    assert len(mem_storage.order_items) == 0
