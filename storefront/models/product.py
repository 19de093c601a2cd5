"""Product ORM — the catalog rows listed, filtered and mutated by the API.

Invariants:
    - id is an integer primary key assigned by the database
    - quantity is the live stock level; basket inserts decrement it
    - created_at drives the default listing order (newest first)

Design Decisions:
    - No CHECK constraint on quantity: the store accepts what callers send,
      stock is only guarded by the conditional decrement in SqlProductStore
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.domain_types import Table
from storefront.db.base import Base


class Product(Base):
    """A sellable product with its current stock level."""
    __tablename__ = Table.PRODUCTS.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    category: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        index=True,
    )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity,
            "category": self.category,
            "created_at": self.created_at,
        }
