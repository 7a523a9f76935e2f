import logging
from typing import List

from storefront.core.errors import NotFound, ValidationFailed
from storefront.db.storage import Storage
from storefront.models import CartItem, CartItemWithProduct

logger = logging.getLogger(__name__)


class CartService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def get_cart(self, user_id: int) -> List[CartItemWithProduct]:
        """Get all cart items for a user with product details"""
        return self.storage.get_cart_items(user_id)

    def add_item(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
        """Add item to cart or increase quantity if already there"""
        if quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")
        if not self.storage.get_product(product_id):
            raise NotFound("Product not found")

        item = self.storage.add_cart_item(user_id, product_id, quantity)
        logger.info(
            "cart.item_added",
            extra={"user_id": user_id, "product_id": product_id, "cart_item_id": item.id},
        )
        return item

    def _owned_item(self, user_id: int, cart_item_id: int):
        for item in self.storage.get_cart_items(user_id):
            if item.id == cart_item_id:
                return item
        return None

    def update_item(self, user_id: int, cart_item_id: int, quantity: int) -> CartItem:
        """Set cart item quantity"""
        if quantity < 1:
            raise ValidationFailed("Invalid quantity")
        if not self._owned_item(user_id, cart_item_id):
            raise NotFound("Cart item not found")

        item = self.storage.update_cart_item(cart_item_id, quantity)
        if not item:
            raise NotFound("Cart item not found")
        return item

    def remove_item(self, user_id: int, cart_item_id: int) -> None:
        """Remove item from cart; unknown or foreign items are ignored"""
        if self._owned_item(user_id, cart_item_id):
            self.storage.remove_cart_item(cart_item_id)

    def clear(self, user_id: int) -> None:
        """Clear all items from user's cart"""
        self.storage.clear_cart(user_id)
        logger.info("cart.cleared", extra={"user_id": user_id})
