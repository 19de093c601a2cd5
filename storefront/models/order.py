"""Order ORM — placed orders with their line items stored as-is.

Invariants:
    - items is an opaque JSON payload; this service never inspects it

Design Decisions:
    - JSON column over an order_lines table: the client owns the item shape
"""

from datetime import datetime, timezone
from typing import Any

from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.domain_types import Table
from storefront.db.base import Base


class Order(Base):
    """An order placed by an authenticated user."""
    __tablename__ = Table.ORDERS.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    items: Mapped[Any] = mapped_column(JSON, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
