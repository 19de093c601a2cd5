"""BasketItem ORM — anonymous (session-scoped) basket lines.

Invariants:
    - Insert-only; repeated inserts for the same product are separate rows
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from storefront.core.domain_types import Table
from storefront.db.base import Base


class BasketItem(Base):
    """One product line added to a browser session's basket."""
    __tablename__ = Table.BASKET.value

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    session_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    product_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
