from typing import List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum
from sqlmodel import Field, SQLModel
from storefront.core.clock import utc_now
from storefront.models.product import Product

class OrderStatus(str, Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderItemBase(SQLModel):
    product_id: int = Field(foreign_key="product.id")
    quantity: int = Field(ge=1)
    # Unit price captured when the order is placed
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)

class OrderItem(OrderItemBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    order_id: int = Field(foreign_key="order.id", index=True)

class OrderItemCreate(OrderItemBase):
    pass

class OrderItemWithProduct(OrderItemBase):
    id: int
    order_id: int
    product: Product


class OrderBase(SQLModel):
    user_id: int = Field(foreign_key="user.id", index=True)
    # Computed by the caller: subtotal + shipping + tax
    total: Decimal = Field(max_digits=14, decimal_places=4, ge=0)
    status: OrderStatus = Field(default=OrderStatus.PENDING)

class Order(OrderBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)

class OrderCreate(OrderBase):
    pass

class OrderWithItems(OrderBase):
    id: int
    created_at: datetime
    items: List[OrderItemWithProduct] = []
