from abc import ABC, abstractmethod
from typing import Callable, Iterable, List, Optional, Type, TypeVar

from sqlmodel import SQLModel

from storefront.core.errors import NotFound, PreconditionFailed
from storefront.models import (
    CartItem,
    CartItemWithProduct,
    Category,
    CategoryCreate,
    Order,
    OrderCreate,
    OrderItemCreate,
    OrderWithItems,
    Product,
    ProductCreate,
    ProductFilter,
    User,
)
from storefront.models.user import UserBase

JoinedT = TypeVar("JoinedT", bound=SQLModel)


class Storage(ABC):
    """Data access for the catalog, carts, orders and users.

    Point lookups return ``None`` for unknown ids. Writes either apply fully
    or raise before touching stored state.
    """

    # User methods

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]: ...

    @abstractmethod
    def create_user(self, user: UserBase, password_hash: str) -> User: ...

    # Catalog methods

    @abstractmethod
    def create_category(self, category: CategoryCreate) -> Category: ...

    @abstractmethod
    def create_product(self, product: ProductCreate) -> Product: ...

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]: ...

    @abstractmethod
    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[Product]: ...

    @abstractmethod
    def count_products(self, product_filter: Optional[ProductFilter] = None) -> int: ...

    @abstractmethod
    def get_category(self, category_id: int) -> Optional[Category]: ...

    @abstractmethod
    def list_categories(self) -> List[Category]: ...

    # Cart methods

    @abstractmethod
    def get_cart_items(self, user_id: int) -> List[CartItemWithProduct]: ...

    @abstractmethod
    def get_cart_item(self, user_id: int, product_id: int) -> Optional[CartItem]: ...

    @abstractmethod
    def add_cart_item(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem: ...

    @abstractmethod
    def update_cart_item(self, cart_item_id: int, quantity: int) -> Optional[CartItem]: ...

    @abstractmethod
    def remove_cart_item(self, cart_item_id: int) -> None: ...

    @abstractmethod
    def clear_cart(self, user_id: int) -> None: ...

    # Order methods

    @abstractmethod
    def create_order(self, order: OrderCreate, items: List[OrderItemCreate]) -> Order: ...

    @abstractmethod
    def get_orders(self, user_id: int) -> List[Order]: ...

    @abstractmethod
    def get_order(self, order_id: int) -> Optional[OrderWithItems]: ...

    # Shared helpers

    @staticmethod
    def _join_products(
        lines: Iterable[SQLModel],
        lookup: Callable[[int], Optional[Product]],
        model: Type[JoinedT],
    ) -> List[JoinedT]:
        """Attach each line's product. Every read path that joins goes through here."""
        joined = []
        for line in lines:
            product = lookup(line.product_id)
            if product is None:
                raise NotFound(f"Product {line.product_id} referenced by line {line.id} no longer exists")
            joined.append(model(**line.model_dump(), product=product))
        return joined

    @staticmethod
    def _require_items(items: List[OrderItemCreate]) -> None:
        if not items:
            raise PreconditionFailed("Order must contain items")
