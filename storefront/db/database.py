from typing import List, Optional

from sqlalchemy.engine import Engine
from sqlmodel import Session, select

from storefront.core.clock import utc_now
from storefront.db.session import create_db_and_tables
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


class DatabaseStorage(Storage):
    """Storage over a SQLModel engine. One session per operation."""

    def __init__(self, engine: Engine, create_tables: bool = True):
        self.engine = engine
        if create_tables:
            create_db_and_tables(engine)

    def _session(self) -> Session:
        # Records are returned after the session closes, keep them loaded
        return Session(self.engine, expire_on_commit=False)

    def _get(self, model, record_id: int):
        with self._session() as session:
            return session.get(model, record_id)

    def _add(self, record):
        with self._session() as session:
            session.add(record)
            session.commit()
            session.refresh(record)
            return record

    # User methods

    def get_user(self, user_id: int) -> Optional[User]:
        return self._get(User, user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(select(User).where(User.username == username)).first()

    def get_user_by_email(self, email: str) -> Optional[User]:
        with self._session() as session:
            return session.exec(select(User).where(User.email == email)).first()

    def create_user(self, user: UserBase, password_hash: str) -> User:
        return self._add(User(
            **user.model_dump(include=set(UserBase.model_fields)),
            password_hash=password_hash,
        ))

    # Catalog methods

    def create_category(self, category: CategoryCreate) -> Category:
        return self._add(Category(**category.model_dump()))

    def create_product(self, product: ProductCreate) -> Product:
        data = product.model_dump()
        data["created_at"] = data.get("created_at") or utc_now()
        return self._add(Product(**data))

    def get_product(self, product_id: int) -> Optional[Product]:
        return self._get(Product, product_id)

    def _candidates(self, product_filter: ProductFilter) -> List[Product]:
        """Rows narrowed by the indexed columns, in id order.

        Search, sort and paging run in ``ProductFilter.apply`` so both backends
        share one predicate; SQLite's lower() only folds ASCII.
        """
        statement = select(Product)
        if product_filter.category_id is not None:
            statement = statement.where(Product.category_id == product_filter.category_id)
        if product_filter.featured:
            statement = statement.where(Product.is_featured.is_(True))
        with self._session() as session:
            return list(session.exec(statement.order_by(Product.id)).all())

    def list_products(self, product_filter: Optional[ProductFilter] = None) -> List[Product]:
        product_filter = product_filter or ProductFilter()
        return product_filter.apply(self._candidates(product_filter))

    def count_products(self, product_filter: Optional[ProductFilter] = None) -> int:
        product_filter = product_filter or ProductFilter()
        return product_filter.count(self._candidates(product_filter))

    def get_category(self, category_id: int) -> Optional[Category]:
        return self._get(Category, category_id)

    def list_categories(self) -> List[Category]:
        with self._session() as session:
            return list(session.exec(select(Category).order_by(Category.id)).all())

    # Cart methods

    def get_cart_items(self, user_id: int) -> List[CartItemWithProduct]:
        with self._session() as session:
            lines = session.exec(
                select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.id)
            ).all()
            return self._join_products(lines, lambda pid: session.get(Product, pid), CartItemWithProduct)

    def get_cart_item(self, user_id: int, product_id: int) -> Optional[CartItem]:
        with self._session() as session:
            return session.exec(
                select(CartItem).where(
                    CartItem.user_id == user_id,
                    CartItem.product_id == product_id,
                )
            ).first()

    def add_cart_item(self, user_id: int, product_id: int, quantity: int = 1) -> CartItem:
        with self._session() as session:
            item = session.exec(
                select(CartItem).where(
                    CartItem.user_id == user_id,
                    CartItem.product_id == product_id,
                )
            ).first()
            if item:
                item.quantity = item.quantity + quantity
            else:
                item = CartItem(user_id=user_id, product_id=product_id, quantity=quantity)
            session.add(item)
            session.commit()
            session.refresh(item)
            return item

    def update_cart_item(self, cart_item_id: int, quantity: int) -> Optional[CartItem]:
        with self._session() as session:
            item = session.get(CartItem, cart_item_id)
            if not item:
                return None
            item.quantity = quantity
            session.add(item)
            session.commit()
            session.refresh(item)
            return item

    def remove_cart_item(self, cart_item_id: int) -> None:
        with self._session() as session:
            item = session.get(CartItem, cart_item_id)
            if item:
                session.delete(item)
                session.commit()

    def clear_cart(self, user_id: int) -> None:
        with self._session() as session:
            for item in session.exec(select(CartItem).where(CartItem.user_id == user_id)).all():
                session.delete(item)
            session.commit()

    # Order methods

    def create_order(self, order: OrderCreate, items: List[OrderItemCreate]) -> Order:
        self._require_items(items)

        # Header and lines commit together or not at all
        with self._session() as session:
            header = Order(**order.model_dump())
            session.add(header)
            session.flush()
            session.add_all(
                OrderItem(**item.model_dump(), order_id=header.id) for item in items
            )
            session.commit()
            session.refresh(header)
            return header

    def get_orders(self, user_id: int) -> List[Order]:
        with self._session() as session:
            return list(session.exec(
                select(Order)
                .where(Order.user_id == user_id)
                .order_by(Order.created_at.desc(), Order.id.desc())
            ).all())

    def get_order(self, order_id: int) -> Optional[OrderWithItems]:
        with self._session() as session:
            order = session.get(Order, order_id)
            if not order:
                return None
            lines = session.exec(
                select(OrderItem).where(OrderItem.order_id == order_id).order_by(OrderItem.id)
            ).all()
            items = self._join_products(lines, lambda pid: session.get(Product, pid), OrderItemWithProduct)
            return OrderWithItems(**order.model_dump(), items=items)
