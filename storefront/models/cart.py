from decimal import Decimal
from typing import Optional
from sqlmodel import Field, SQLModel
from storefront.models.product import Product

class CartItemBase(SQLModel):
    # References
    user_id: int = Field(foreign_key="user.id", index=True)
    product_id: int = Field(foreign_key="product.id")

    # Cart Details
    quantity: int = Field(default=1, ge=1)

class CartItem(CartItemBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

class CartItemWithProduct(CartItemBase):
    id: int
    product: Product

    @property
    def line_total(self) -> Decimal:
        return self.product.price * self.quantity
