from typing import List

from fastapi import APIRouter, Depends, Response, status
from pydantic import BaseModel, Field

from storefront.db.backend import get_storage
from storefront.db.storage import Storage
from storefront.models import CartItem, CartItemWithProduct, User
from storefront.routers.auth import get_current_user
from storefront.services.cart import CartService

router = APIRouter()


class CartItemCreate(BaseModel):
    product_id: int
    quantity: int = Field(default=1, ge=1)


class CartItemUpdate(BaseModel):
    quantity: int = Field(ge=1)


def get_cart_service(storage: Storage = Depends(get_storage)) -> CartService:
    return CartService(storage)


@router.get("/", response_model=List[CartItemWithProduct])
def get_cart(current_user: User = Depends(get_current_user), service: CartService = Depends(get_cart_service)):
    """Get user's cart items"""
    return service.get_cart(current_user.id)


@router.post("/", response_model=CartItem, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    cart_item: CartItemCreate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    """Add item to cart"""
    return service.add_item(current_user.id, cart_item.product_id, cart_item.quantity)


@router.put("/{cart_item_id}", response_model=CartItem)
def update_cart_item(
    cart_item_id: int,
    cart_update: CartItemUpdate,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    """Update cart item quantity"""
    return service.update_item(current_user.id, cart_item_id, cart_update.quantity)


@router.delete("/{cart_item_id}", status_code=status.HTTP_204_NO_CONTENT)
def remove_from_cart(
    cart_item_id: int,
    current_user: User = Depends(get_current_user),
    service: CartService = Depends(get_cart_service),
):
    """Remove item from cart"""
    service.remove_item(current_user.id, cart_item_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(current_user: User = Depends(get_current_user), service: CartService = Depends(get_cart_service)):
    """Clear entire cart"""
    service.clear(current_user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
