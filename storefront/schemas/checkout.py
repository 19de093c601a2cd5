"""Checkout Schemas — orders and cart lines for authenticated users.

Invariants:
    - Clients send camelCase (userId, productId); snake_case accepted too
    - Order.items is opaque JSON, stored as-is
"""

from pydantic import BaseModel, ConfigDict, Field, JsonValue


class OrderCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    items: JsonValue


class CartItemCreate(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    user_id: str = Field(alias="userId")
    product_id: int = Field(alias="productId")
    quantity: int
