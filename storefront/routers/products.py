from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from storefront.core.config import settings
from storefront.db.backend import get_storage
from storefront.db.storage import Storage
from storefront.models import Category, Product
from storefront.services.catalog import CatalogService, ProductPage

router = APIRouter()
categories_router = APIRouter()


def get_catalog_service(storage: Storage = Depends(get_storage)) -> CatalogService:
    return CatalogService(storage)


@router.get("/", response_model=ProductPage)
def read_products(
    category: Optional[int] = None,
    featured: bool = False,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    search: Optional[str] = None,
    sort: Optional[str] = None,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_products(
        category_id=category,
        featured=featured,
        page=page,
        limit=limit,
        search=search,
        sort=sort,
    )


@router.get("/{product_id}", response_model=Product)
def read_product(product_id: int, service: CatalogService = Depends(get_catalog_service)):
    product = service.get_product(product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product


@categories_router.get("/", response_model=List[Category])
def read_categories(service: CatalogService = Depends(get_catalog_service)):
    return service.list_categories()
