# Import all models to register them with SQLModel
from storefront.models.user import User, UserCreate, UserRead
from storefront.models.product import (
    Category,
    CategoryCreate,
    Product,
    ProductCreate,
    ProductFilter,
    ProductSort,
)
from storefront.models.cart import CartItem, CartItemWithProduct
from storefront.models.order import (
    Order,
    OrderCreate,
    OrderItem,
    OrderItemCreate,
    OrderItemWithProduct,
    OrderStatus,
    OrderWithItems,
)

__all__ = [
    "User",
    "UserCreate",
    "UserRead",
    "Category",
    "CategoryCreate",
    "Product",
    "ProductCreate",
    "ProductFilter",
    "ProductSort",
    "CartItem",
    "CartItemWithProduct",
    "Order",
    "OrderCreate",
    "OrderItem",
    "OrderItemCreate",
    "OrderItemWithProduct",
    "OrderStatus",
    "OrderWithItems",
]
