"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - ProductId wraps the integer primary key of the products table
    - LOW_STOCK_THRESHOLD is the fixed "low stock" cut-off (quantity < 5)
    - Table names encoded as an Enum — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

ProductId = NewType("ProductId", int)


# ─── Constants ───────────────────────────────────────────────────

LOW_STOCK_THRESHOLD = 5


# ─── Enums ───────────────────────────────────────────────────────

class Table(str, Enum):
    """Tables the store capability operates on."""
    PRODUCTS = "products"
    BASKET = "basket"
    CART = "cart"
    ORDERS = "orders"


# ─── Value Objects ───────────────────────────────────────────────

@dataclass(frozen=True)
class ProductFilter:
    """Optional narrowing applied to the product listing. All set filters intersect."""
    category: str | None = None
    search: str | None = None
    low_stock: bool = False
    low_stock_threshold: int = LOW_STOCK_THRESHOLD

    @classmethod
    def from_query(
        cls,
        category: str | None,
        search: str | None,
        low_stock: str | None,
        low_stock_threshold: int = LOW_STOCK_THRESHOLD,
    ) -> "ProductFilter":
        """Build from raw query params: empty strings are ignored, lowStock counts by presence."""
        return cls(
            category=category or None,
            search=search or None,
            low_stock=low_stock is not None,
            low_stock_threshold=low_stock_threshold,
        )
