from fastapi import APIRouter, Depends

from storefront.models import User
from storefront.routers.auth import get_current_user
from storefront.routers.cart import get_cart_service
from storefront.services.cart import CartService
from storefront.services.pricing import OrderSummary, summarize_cart

router = APIRouter()


@router.post("/summary", response_model=OrderSummary)
def checkout_summary(
    current_user: User = Depends(get_current_user),
    cart_service: CartService = Depends(get_cart_service),
):
    """Subtotal, shipping, tax and total for the caller's current cart"""
    return summarize_cart(cart_service.get_cart(current_user.id))
