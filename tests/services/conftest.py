"""Service test fixtures — async SQLite store, fake auth provider, FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_store / get_auth dependencies overridden with test capabilities
    - Lifespan is not run: no real database or auth provider is contacted

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for route tests
      (PostgreSQL-specific features not exercised here)
    - FakeAuthProvider records calls instead of mocking httpx at the route level;
      AuthClient itself is covered with httpx.MockTransport
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from storefront.api.dependencies import get_auth, get_store
from storefront.core.errors import AuthError
from storefront.db.base import Base
from storefront.infrastructure.store import SqlProductStore
from storefront.main import app
from storefront.models.product import Product
from storefront.schemas.auth import AuthSession

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


class FakeAuthProvider:
    """In-memory stand-in for the hosted auth provider."""

    def __init__(self):
        self.users: dict[str, str] = {}
        self.calls: list[tuple[str, str]] = []
        self.issue_session = True

    async def sign_up(self, email: str, password: str) -> dict:
        self.calls.append(("sign_up", email))
        if email in self.users:
            raise AuthError("User already registered", status_code=422)
        self.users[email] = password
        return {"id": f"user-{len(self.users)}", "email": email}

    async def sign_in_with_password(self, email: str, password: str):
        self.calls.append(("sign_in", email))
        if self.users.get(email) != password:
            raise AuthError("Invalid login credentials", status_code=400)
        if not self.issue_session:
            return None
        return AuthSession(access_token=f"token-for-{email}")


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def store(test_engine):
    return SqlProductStore(test_engine)


@pytest.fixture
def fake_auth():
    return FakeAuthProvider()


@pytest.fixture
async def client(store, fake_auth):
    """FastAPI test client with store/auth dependencies overridden."""
    app.dependency_overrides[get_store] = lambda: store
    app.dependency_overrides[get_auth] = lambda: fake_auth

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()


@pytest.fixture
async def seed_products(test_db):
    """Insert a small catalog; later entries are newer."""
    rows = [
        ("Green Apple", 10, "fruit"),
        ("Banana", 3, "fruit"),
        ("Pineapple Juice", 2, "drinks"),
        ("Sparkling Water", 50, "drinks"),
        ("apple pie", 4, "bakery"),
        ("Oat Milk", 5, "drinks"),
    ]
    products = [
        Product(
            name=name, quantity=qty, category=category,
            created_at=BASE_TIME + timedelta(minutes=i),
        )
        for i, (name, qty, category) in enumerate(rows)
    ]
    test_db.add_all(products)
    await test_db.commit()
    return {p.name: p for p in products}
