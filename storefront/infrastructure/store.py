"""Product Store — SQLAlchemy async implementation of the ProductStore capability.

Invariants:
    - Every session auto-rolls-back on exception (no partial commits leak)
    - Connection pool uses pool_pre_ping for stale connection detection
    - All SQLAlchemy exceptions mapped to StoreError carrying the driver message
    - Basket insert and stock decrement commit together or not at all

Design Decisions:
    - Conditional UPDATE ... WHERE quantity >= :q instead of read-then-insert:
      concurrent basket adds cannot overcommit stock
    - Store instance built once in the FastAPI lifespan and injected; no module-level singleton
    - expire_on_commit=False: prevents lazy-load issues in async context
"""

import logging
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator

from sqlalchemy import select, update, delete, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine, AsyncSession, create_async_engine, async_sessionmaker,
)
from sqlalchemy.exc import (
    IntegrityError, OperationalError, DBAPIError, SQLAlchemyError,
)

from storefront.core.domain_types import ProductFilter
from storefront.core.errors import (
    StoreError, InsufficientStockError, ErrorContext,
)
from storefront.models.product import Product
from storefront.models.basket_item import BasketItem
from storefront.models.cart_item import CartItem
from storefront.models.order import Order

logger = logging.getLogger(__name__)


def _driver_message(e: SQLAlchemyError) -> str:
    """Prefer the DBAPI's own message over SQLAlchemy's wrapped repr."""
    if isinstance(e, DBAPIError) and e.orig is not None:
        return str(e.orig)
    return str(e)


def _like_pattern(term: str) -> str:
    """Substring pattern with LIKE wildcards in the term matched literally."""
    escaped = (
        term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    )
    return f"%{escaped}%"


class SqlProductStore:
    """Products, basket, cart and orders on the hosted PostgreSQL database."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        self._session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_url(
        cls, database_url: str, pool_size: int = 20, max_overflow: int = 10,
    ) -> "SqlProductStore":
        engine = create_async_engine(
            database_url,
            pool_size=pool_size,
            max_overflow=max_overflow,
            pool_pre_ping=True,
            pool_recycle=3600,
        )
        return cls(engine)

    async def dispose(self) -> None:
        await self.engine.dispose()

    @asynccontextmanager
    async def session(
        self, operation: str = "query",
    ) -> AsyncGenerator[AsyncSession, None]:
        """Provide session with auto-rollback on exception."""
        session = self._session_factory()
        try:
            yield session
        except IntegrityError as e:
            await session.rollback()
            logger.error(f"DB integrity error: {e}", extra={"operation": operation})
            raise StoreError(_driver_message(e), operation)
        except OperationalError as e:
            await session.rollback()
            logger.error(f"DB operational error: {e}", extra={"operation": operation})
            raise StoreError(_driver_message(e), operation)
        except SQLAlchemyError as e:
            await session.rollback()
            logger.error(f"DB error: {e}", extra={"operation": operation})
            raise StoreError(_driver_message(e), operation)
        finally:
            await session.close()

    # ─── Products ───────────────────────────────────────────────

    async def list_products(self, filters: ProductFilter) -> list[dict]:
        """Newest first; category exact, name case-insensitive substring, low stock."""
        query = select(Product).order_by(Product.created_at.desc())
        if filters.category:
            query = query.where(Product.category == filters.category)
        if filters.search:
            query = query.where(
                Product.name.ilike(_like_pattern(filters.search), escape="\\"),
            )
        if filters.low_stock:
            query = query.where(Product.quantity < filters.low_stock_threshold)

        async with self.session("list_products") as db:
            result = await db.execute(query)
            return [p.to_dict() for p in result.scalars().all()]

    async def add_product(
        self, *, name: str, quantity: int, category: str,
    ) -> dict:
        async with self.session("add_product") as db:
            product = Product(name=name, quantity=quantity, category=category)
            db.add(product)
            await db.commit()
            await db.refresh(product)
            logger.info(
                f"Product created: {product.id}",
                extra={"operation": "add_product", "product_id": product.id},
            )
            return product.to_dict()

    async def delete_product(self, product_id: int) -> None:
        """Delete by id. A missing id is not an error."""
        async with self.session("delete_product") as db:
            await db.execute(delete(Product).where(Product.id == product_id))
            await db.commit()

    async def update_product_quantity(
        self, product_id: int, quantity: int,
    ) -> None:
        """Overwrite the stock level. A missing id is not an error."""
        async with self.session("update_product") as db:
            await db.execute(
                update(Product)
                .where(Product.id == product_id)
                .values(quantity=quantity),
            )
            await db.commit()

    # ─── Basket / Cart / Orders ─────────────────────────────────

    async def add_to_basket(
        self, *, session_id: str, product_id: int, quantity: int,
    ) -> None:
        """Reserve stock and insert the basket line in one transaction.

        Raises InsufficientStockError when the product holds fewer than
        `quantity` units, StoreError when it does not exist.
        Nothing is written in either case.
        """
        async with self.session("add_to_basket") as db:
            result = await db.execute(
                update(Product)
                .where(Product.id == product_id, Product.quantity >= quantity)
                .values(quantity=Product.quantity - quantity)
                .execution_options(synchronize_session=False),
            )
            if result.rowcount == 0:
                exists = await db.scalar(
                    select(Product.id).where(Product.id == product_id),
                )
                await db.rollback()
                ctx = ErrorContext(operation="add_to_basket", product_id=product_id)
                if exists is None:
                    raise StoreError(
                        f"Product '{product_id}' not found", "add_to_basket", ctx,
                    )
                raise InsufficientStockError(product_id, ctx)

            db.add(BasketItem(
                session_id=session_id, product_id=product_id, quantity=quantity,
            ))
            await db.commit()

    async def add_to_cart(
        self, *, user_id: str, product_id: int, quantity: int,
    ) -> None:
        async with self.session("add_to_cart") as db:
            db.add(CartItem(
                user_id=user_id, product_id=product_id, quantity=quantity,
            ))
            await db.commit()

    async def place_order(self, *, user_id: str, items: Any) -> None:
        async with self.session("place_order") as db:
            db.add(Order(user_id=user_id, items=items))
            await db.commit()

    async def health_check(self) -> bool:
        """Check database connectivity (for readiness probes)."""
        try:
            async with self.session("health_check") as db:
                await db.execute(text("SELECT 1"))
            return True
        except StoreError as e:
            logger.error(f"DB health check failed: {e}")
            return False
