import logging
from decimal import Decimal
from typing import List

from storefront.core.config import settings
from storefront.core.errors import Forbidden, NotFound, PreconditionFailed, ValidationFailed
from storefront.db.storage import Storage
from storefront.models import Order, OrderCreate, OrderItemCreate, OrderStatus, OrderWithItems
from storefront.services.pricing import compute_order_summary

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")


class OrderService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def place_order(
        self,
        user_id: int,
        total: Decimal,
        items: List[OrderItemCreate],
        status: OrderStatus = OrderStatus.PENDING,
    ) -> Order:
        """Create the order and its lines in one step.

        ``total`` is computed by the caller (subtotal + shipping + tax). It is
        stored as given; with ``VERIFY_ORDER_TOTALS`` on, a total that does not
        match the lines to the cent is rejected, otherwise the mismatch is only
        logged.
        """
        if not items:
            raise PreconditionFailed("Order must contain items")
        for item in items:
            if item.quantity < 1:
                raise ValidationFailed("Quantity must be at least 1")
            if not self.storage.get_product(item.product_id):
                raise NotFound(f"Product {item.product_id} not found")

        self._check_total(user_id, total, items)

        order = self.storage.create_order(
            OrderCreate(user_id=user_id, total=total, status=status),
            items,
        )

        logger.info(
            "order.created",
            extra={"order_id": order.id, "user_id": user_id},
        )
        return order

    def _check_total(self, user_id: int, total: Decimal, items: List[OrderItemCreate]) -> None:
        subtotal = sum((item.price * item.quantity for item in items), Decimal("0"))
        expected = compute_order_summary(subtotal).total
        if expected.quantize(CENT) == Decimal(total).quantize(CENT):
            return
        if settings.VERIFY_ORDER_TOTALS:
            raise ValidationFailed(f"Order total {total} does not match items ({expected})")
        logger.warning(
            "Order total %s differs from computed %s",
            total,
            expected,
            extra={"user_id": user_id},
        )

    def list_orders(self, user_id: int) -> List[Order]:
        return self.storage.get_orders(user_id)

    def get_order(self, user_id: int, order_id: int) -> OrderWithItems:
        order = self.storage.get_order(order_id)
        if not order:
            raise NotFound("Order not found")
        if order.user_id != user_id:
            raise Forbidden("Unauthorized")
        return order
