"""Product Schemas — catalog, basket, and acknowledgment payloads.

Invariants:
    - POST /products accepts either BasketItemCreate or ProductCreate; body shape picks one
    - BasketItemCreate.quantity >= 1 (the stock decrement must never add stock)
    - No other field-level business rules: empty names / negative product stock pass through

Design Decisions:
    - BasketItemCreate listed first in the union: a body carrying both shapes is a basket add
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ProductCreate(BaseModel):
    """New catalog product."""
    name: str
    quantity: int
    category: str


class BasketItemCreate(BaseModel):
    """Add a product to an anonymous session basket."""
    session_id: str
    product_id: int
    quantity: int = Field(ge=1)


class ProductDelete(BaseModel):
    id: int


class ProductQuantityUpdate(BaseModel):
    id: int
    quantity: int


class ProductRead(BaseModel):
    """Product row as returned by the listing endpoint."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    quantity: int
    category: str
    created_at: datetime


class SuccessResponse(BaseModel):
    """Acknowledgment for every write endpoint."""
    success: bool = True
    message: str
