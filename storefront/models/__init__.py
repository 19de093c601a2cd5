"""ORM Models — SQLAlchemy declarative models for the storefront tables.

Invariants:
    - All models inherit from Base (db/base.py)
    - Basket, cart and order rows are insert-only from this service

Design Decisions:
    - One file per entity for locality
    - All models imported here so Base.metadata is complete before create_all/autogenerate
"""

from storefront.models.product import Product  # noqa: F401
from storefront.models.basket_item import BasketItem  # noqa: F401
from storefront.models.cart_item import CartItem  # noqa: F401
from storefront.models.order import Order  # noqa: F401
