from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from storefront.db.backend import get_storage
from storefront.db.storage import Storage
from storefront.models import Order, OrderItemCreate, OrderStatus, OrderWithItems, User
from storefront.routers.auth import get_current_user
from storefront.routers.cart import get_cart_service
from storefront.services.cart import CartService
from storefront.services.order import OrderService

router = APIRouter()


class OrderHeader(BaseModel):
    total: Decimal = Field(ge=0, max_digits=14, decimal_places=4)
    status: OrderStatus = OrderStatus.PENDING


class OrderCreateRequest(BaseModel):
    order: OrderHeader
    items: List[OrderItemCreate]


def get_order_service(storage: Storage = Depends(get_storage)) -> OrderService:
    return OrderService(storage)


@router.post("/", response_model=Order, status_code=status.HTTP_201_CREATED)
def create_order(
    order_in: OrderCreateRequest,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
    cart_service: CartService = Depends(get_cart_service),
):
    order = service.place_order(
        user_id=current_user.id,
        total=order_in.order.total,
        items=order_in.items,
        status=order_in.order.status,
    )
    # Clear the cart after successful order
    cart_service.clear(current_user.id)
    return order


@router.get("/", response_model=List[Order])
def list_orders(current_user: User = Depends(get_current_user), service: OrderService = Depends(get_order_service)):
    return service.list_orders(current_user.id)


@router.get("/{order_id}", response_model=OrderWithItems)
def get_order(
    order_id: int,
    current_user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service),
):
    return service.get_order(current_user.id, order_id)
