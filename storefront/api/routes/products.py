"""Product Routes — catalog listing, basket adds, and product management on /products.

Invariants:
    - GET returns rows newest first; category/search/lowStock filters intersect
    - POST body shape selects basket add ({session_id, product_id, quantity})
      or product creation ({name, quantity, category})
    - Basket add that exceeds stock → 400 "Not enough stock available", nothing written
    - DELETE/PATCH succeed whether or not the id exists
    - Any other method on /products → 405 (error_handlers.py)

Design Decisions:
    - Validation in pydantic schemas, persistence in the injected ProductStore
"""

import logging

from fastapi import APIRouter, Body, Depends, Query

from storefront.api.dependencies import get_store
from storefront.config import Settings, get_settings
from storefront.core.domain_types import ProductFilter
from storefront.core.store_protocols import ProductStore
from storefront.schemas.product import (
    BasketItemCreate,
    ProductCreate,
    ProductDelete,
    ProductQuantityUpdate,
    ProductRead,
    SuccessResponse,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductRead])
async def list_products(
    category: str | None = Query(None),
    search: str | None = Query(None),
    low_stock: str | None = Query(None, alias="lowStock"),
    store: ProductStore = Depends(get_store),
    settings: Settings = Depends(get_settings),
):
    """List products, newest first, with optional filters."""
    filters = ProductFilter.from_query(
        category, search, low_stock,
        low_stock_threshold=settings.low_stock_threshold,
    )
    return await store.list_products(filters)


@router.post("", response_model=SuccessResponse)
async def add_to_basket_or_create_product(
    body: BasketItemCreate | ProductCreate = Body(...),
    store: ProductStore = Depends(get_store),
):
    """Add a product to a session basket, or create a new product."""
    if isinstance(body, BasketItemCreate):
        await store.add_to_basket(
            session_id=body.session_id,
            product_id=body.product_id,
            quantity=body.quantity,
        )
        logger.info(
            "Product added to basket",
            extra={"operation": "add_to_basket", "product_id": body.product_id},
        )
        return SuccessResponse(message="Product added to basket!")

    await store.add_product(
        name=body.name, quantity=body.quantity, category=body.category,
    )
    return SuccessResponse(message="Product added successfully!")


@router.delete("", response_model=SuccessResponse)
async def delete_product(
    body: ProductDelete, store: ProductStore = Depends(get_store),
):
    await store.delete_product(body.id)
    return SuccessResponse(message="Product deleted successfully!")


@router.patch("", response_model=SuccessResponse)
async def update_product_quantity(
    body: ProductQuantityUpdate, store: ProductStore = Depends(get_store),
):
    await store.update_product_quantity(body.id, body.quantity)
    return SuccessResponse(message="Product updated successfully!")
