"""Checkout Routes — order placement and cart inserts for signed-in users.

Invariants:
    - One insert per request; cart lines are not merged or deduplicated
    - No stock check on cart inserts (stock is reserved only by basket adds)
"""

from fastapi import APIRouter, Depends

from storefront.api.dependencies import get_store
from storefront.core.store_protocols import ProductStore
from storefront.schemas.checkout import CartItemCreate, OrderCreate
from storefront.schemas.product import SuccessResponse

router = APIRouter(prefix="/products", tags=["checkout"])


@router.post("/order", response_model=SuccessResponse)
async def place_order(
    body: OrderCreate, store: ProductStore = Depends(get_store),
):
    await store.place_order(user_id=body.user_id, items=body.items)
    return SuccessResponse(message="Order placed successfully!")


@router.post("/cart", response_model=SuccessResponse)
async def add_to_cart(
    body: CartItemCreate, store: ProductStore = Depends(get_store),
):
    await store.add_to_cart(
        user_id=body.user_id,
        product_id=body.product_id,
        quantity=body.quantity,
    )
    return SuccessResponse(message="Product added to cart!")
