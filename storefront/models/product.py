from typing import Iterable, List, Optional
from datetime import datetime
from decimal import Decimal
from enum import Enum
from pydantic import field_validator
from sqlmodel import Field, SQLModel
from storefront.core.clock import as_utc, utc_now


class CategoryBase(SQLModel):
    name: str
    icon: str

class Category(CategoryBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)

class CategoryCreate(CategoryBase):
    pass


class ProductBase(SQLModel):
    # Basic Info
    name: str = Field(index=True)
    description: str
    image_url: str

    # Pricing
    price: Decimal = Field(max_digits=10, decimal_places=2, ge=0)
    old_price: Optional[Decimal] = Field(default=None, max_digits=10, decimal_places=2, ge=0)

    # References
    category_id: int = Field(foreign_key="category.id", index=True)

    # Reviews
    rating: Decimal = Field(default=Decimal("0"), max_digits=3, decimal_places=1, ge=0, le=5)
    reviews: int = Field(default=0, ge=0)

    # Display flags
    in_stock: bool = Field(default=True)
    is_new: bool = Field(default=False)
    is_featured: bool = Field(default=False)
    is_popular: bool = Field(default=False)
    is_sale: bool = Field(default=False)

class Product(ProductBase, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=utc_now)

class ProductCreate(ProductBase):
    created_at: Optional[datetime] = None

    @field_validator("created_at")
    @classmethod
    def created_at_in_utc(cls, value):
        return as_utc(value) if value is not None else None


class ProductSort(str, Enum):
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    NEWEST = "newest"
    RATING = "rating"
    DEFAULT = "default"

# key, descending
_SORT_KEYS = {
    ProductSort.PRICE_ASC: (lambda p: p.price, False),
    ProductSort.PRICE_DESC: (lambda p: p.price, True),
    ProductSort.NEWEST: (lambda p: p.created_at, True),
    ProductSort.RATING: (lambda p: p.rating, True),
    ProductSort.DEFAULT: (lambda p: p.id, False),
}

class ProductFilter(SQLModel):
    """Catalog query options.

    Every field is optional. Filters narrow the result, ``sort`` orders it
    (unknown keys fall back to id order) and the page window is applied last,
    only when both ``offset`` and ``limit`` are set. Both storage backends run
    their rows through ``matches`` and ``apply``.
    """

    category_id: Optional[int] = None
    featured: bool = False
    search: Optional[str] = None
    sort: ProductSort = ProductSort.DEFAULT
    offset: Optional[int] = Field(default=None, ge=0)
    limit: Optional[int] = Field(default=None, ge=0)

    @field_validator("sort", mode="before")
    @classmethod
    def unknown_sort_is_default(cls, value):
        if value is None:
            return ProductSort.DEFAULT
        try:
            return ProductSort(value)
        except ValueError:
            return ProductSort.DEFAULT

    @property
    def paged(self) -> bool:
        return self.offset is not None and self.limit is not None

    def without_paging(self) -> "ProductFilter":
        return self.model_copy(update={"offset": None, "limit": None})

    def matches(self, product: Product) -> bool:
        if self.category_id is not None and product.category_id != self.category_id:
            return False
        if self.featured and not product.is_featured:
            return False
        if self.search:
            term = self.search.lower()
            if term not in product.name.lower() and term not in product.description.lower():
                return False
        return True

    def count(self, products: Iterable[Product]) -> int:
        return sum(1 for p in products if self.matches(p))

    def apply(self, products: Iterable[Product]) -> List[Product]:
        """Filter, sort and page ``products``, which must arrive in id order.

        sorted() is stable in both directions, so ties keep id order.
        """
        key, descending = _SORT_KEYS[self.sort]
        results = sorted((p for p in products if self.matches(p)), key=key, reverse=descending)
        if self.paged:
            results = results[self.offset:self.offset + self.limit]
        return results
