import math
from typing import List, Optional

from pydantic import BaseModel

from storefront.core.config import settings
from storefront.db.storage import Storage
from storefront.models import Category, Product, ProductFilter, ProductSort


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int


class ProductPage(BaseModel):
    products: List[Product]
    pagination: Pagination


class CatalogService:
    def __init__(self, storage: Storage):
        self.storage = storage

    def list_products(
        self,
        category_id: Optional[int] = None,
        featured: bool = False,
        page: int = 1,
        limit: Optional[int] = None,
        search: Optional[str] = None,
        sort: Optional[str] = None,
    ) -> ProductPage:
        """One page of products plus the totals needed to render a pager."""
        page = max(page, 1)
        limit = min(limit or settings.DEFAULT_PAGE_SIZE, settings.MAX_PAGE_SIZE)

        product_filter = ProductFilter(
            category_id=category_id,
            featured=featured,
            search=search,
            sort=sort or ProductSort.DEFAULT,
            offset=(page - 1) * limit,
            limit=limit,
        )
        products = self.storage.list_products(product_filter)
        total = self.storage.count_products(product_filter.without_paging())

        return ProductPage(
            products=products,
            pagination=Pagination(
                page=page,
                limit=limit,
                total=total,
                total_pages=math.ceil(total / limit),
            ),
        )

    def get_product(self, product_id: int) -> Optional[Product]:
        return self.storage.get_product(product_id)

    def list_categories(self) -> List[Category]:
        return self.storage.list_categories()
