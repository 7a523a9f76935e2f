import threading
from typing import Dict, Generic, Iterator, List, Optional, TypeVar

from sqlmodel import SQLModel

from storefront.core.clock import utc_now
from storefront.db.storage import Storage
from storefront.models import (
    CartItem,
    CartItemWithProduct,
    Category,
    CategoryCreate,
    Order,
    OrderCreate,
    OrderItem,
    OrderItemCreate,
    OrderItemWithProduct,
    OrderWithItems,
    Product,
    ProductCreate,
    ProductFilter,
    User,
)
from storefront.models.user import UserBase

RecordT = TypeVar("RecordT", bound=SQLModel)


def _copy(record: RecordT) -> RecordT:
    return type(record)(**record.model_dump())


class Table(Generic[RecordT]):
    """Arena table: ``id -> record`` plus an auto-increment counter."""

    def __init__(self):
        self.rows: Dict[int, RecordT] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self.rows)

    def allocate_id(self) -> int:
        record_id = self._next_id
        self._next_id += 1
        return record_id

    def put(self, record: RecordT) -> RecordT:
        self.rows[record.id] = record
        return _copy(record)

    def get(self, record_id: int) -> Optional[RecordT]:
        record = self.rows.get(record_id)
        return _copy(record) if record is not None else None

    def delete(self, record_id: int) -> None:
        self.rows.pop(record_id, None)

    def scan(self) -> Iterator[RecordT]:
        """Stored records in insertion order. Callers must not mutate them."""
        return iter(list(self.rows.values()))


class MemStorage(Storage):
    """In-process storage.

    FastAPI runs sync endpoints on a thread pool, so every write holds
    ``_lock``, and order reads take it too. That keeps cart merges and order
    creation whole.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self.users: Table[User] = Table()
        self.categories: Table[Category] = Table()
        self.products: Table[Product] = Table()
        self.cart_items: Table[CartItem] = Table()
        self.orders: Table[Order] = Table()
        self.order_items: Table[OrderItem] = Table()

    # User methods

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        for user in self.users.scan():
            if user.username == username:
                return _copy(user)
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        for user in self.users.scan():
            if user.email == email:
                return _copy(user)
        return None

    def create_user(self, user: UserBase, password_hash: str) -> User:
        with self._lock:
            record = User(
                **user.model_dump(include=set(UserBase.model_fields)),
                id=self.users.allocate_id(),
                password_hash=password_hash,
                created_at=utc_now(),
            )
            return self.users.put(record)

    # Catalog methods

    def create_category(self, category: CategoryCreate) -> Category:
        with self._lock:
            return self.categories.put(Category(**category.model_dump(), id=self.categories.allocate_id()))

    def create_product(self, product: ProductCreate) -> Product:
        data = product.model_dump()
        data["created_at"] = data.get("created_at") or utc_now()
        with self._lock:
            return self.products.put(Product(**data, id=self.products.allocate_id()))

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.products.get(product_id)

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[Product]:
        product_filter = product_filter or ProductFilter()
        return [_copy(p) for p in product_filter.apply(self.products.scan())]

    def count_products(self, product_filter: Optional[ProductFilter] = None) -> int:
        return (product_filter or ProductFilter()).count(self.products.scan())

    def get_category(self, category_id: int) -> Optional[Category]:
        return self.categories.get(category_id)

    def list_categories(self) -> List[Category]:
        return [_copy(c) for c in self.categories.scan()]

    # Cart methods

    def get_cart_items(self, user_id: int) -> List[CartItemWithProduct]:
        lines = [item for item in self.cart_items.scan() if item.user_id == user_id]
        return self._join_products(lines, self.get_product, CartItemWithProduct)

    def _find_cart_item(self, user_id: int, product_id: int) -> Optional[CartItem]:
        for item in self.cart_items.scan():
            if item.user_id == user_id and item.product_id == product_id:
                return item
        return None

    def get_cart_item(self, user_id: int, product_id: int) -> Optional[CartItem]:
        item = self._find_cart_item(user_id, product_id)
        return _copy(item) if item is not None else None

    def add_cart_item(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
        with self._lock:
            existing = self._find_cart_item(user_id, product_id)
            if existing is not None:
                merged = _copy(existing)
                merged.quantity = existing.quantity + quantity
                return self.cart_items.put(merged)

            item = CartItem(
                id=self.cart_items.allocate_id(),
                user_id=user_id,
                product_id=product_id,
                quantity=quantity,
            )
            return self.cart_items.put(item)

    def update_cart_item(self, cart_item_id: int, quantity: int) -> Optional[CartItem]:
        with self._lock:
            item = self.cart_items.get(cart_item_id)
            if item is None:
                return None
            item.quantity = quantity
            return self.cart_items.put(item)

    def remove_cart_item(self, cart_item_id: int) -> None:
        with self._lock:
            self.cart_items.delete(cart_item_id)

    def clear_cart(self, user_id: int) -> None:
        with self._lock:
            for item in self.cart_items.scan():
                if item.user_id == user_id:
                    self.cart_items.delete(item.id)

    # Order methods

    def create_order(self, order: OrderCreate, items: List[OrderItemCreate]) -> Order:
        self._require_items(items)

        with self._lock:
            # Build every record before storing any of them
            header = Order(**order.model_dump(), id=self.orders.allocate_id(), created_at=utc_now())
            lines = [
                OrderItem(**item.model_dump(), id=self.order_items.allocate_id(), order_id=header.id)
                for item in items
            ]

            # Lines first: once the header is visible its lines are too
            for line in lines:
                self.order_items.put(line)
            return self.orders.put(header)

    def get_orders(self, user_id: int) -> List[Order]:
        with self._lock:
            orders = [o for o in self.orders.scan() if o.user_id == user_id]
        orders.sort(key=lambda o: (o.created_at, o.id), reverse=True)
        return [_copy(o) for o in orders]

    def get_order(self, order_id: int) -> Optional[OrderWithItems]:
        with self._lock:
            order = self.orders.get(order_id)
            if order is None:
                return None
            lines = [item for item in self.order_items.scan() if item.order_id == order_id]
        items = self._join_products(lines, self.get_product, OrderItemWithProduct)
        return OrderWithItems(**order.model_dump(), items=items)
