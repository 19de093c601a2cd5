"""Boundary Protocols — contracts between the HTTP layer and external capabilities.

Invariants:
    - Routes depend on these Protocols, never on a concrete client
    - All IO operations accessed through Protocol types
    - Implementations constructed once at startup and injected via FastAPI dependencies

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
    - Async methods: every implementation does network IO
"""

from typing import Any, Protocol

from storefront.core.domain_types import ProductFilter, ProductId


class AuthSessionLike(Protocol):
    """Structural contract for the session object returned by a successful login."""
    access_token: str


class ProductStore(Protocol):
    """Contract for the hosted data store — implemented by SqlProductStore."""
    async def list_products(self, filters: ProductFilter) -> list[dict]: ...
    async def add_product(
        self, *, name: str, quantity: int, category: str,
    ) -> dict: ...
    async def delete_product(self, product_id: ProductId) -> None: ...
    async def update_product_quantity(
        self, product_id: ProductId, quantity: int,
    ) -> None: ...
    async def add_to_basket(
        self, *, session_id: str, product_id: ProductId, quantity: int,
    ) -> None: ...
    async def add_to_cart(
        self, *, user_id: str, product_id: ProductId, quantity: int,
    ) -> None: ...
    async def place_order(self, *, user_id: str, items: Any) -> None: ...
    async def health_check(self) -> bool: ...


class AuthProvider(Protocol):
    """Contract for the hosted auth provider — implemented by AuthClient."""
    async def sign_up(self, email: str, password: str) -> dict: ...
    async def sign_in_with_password(
        self, email: str, password: str,
    ) -> AuthSessionLike | None: ...
