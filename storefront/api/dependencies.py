"""FastAPI Dependencies — hand the startup-built capabilities to route handlers.

Invariants:
    - Store and auth provider live on app.state, set once by the lifespan
    - Handlers never reach for a module-level client

Design Decisions:
    - Dependency functions over direct app.state access: tests swap capabilities
      through app.dependency_overrides
"""

from fastapi import Request

from storefront.core.store_protocols import AuthProvider, ProductStore


def get_store(request: Request) -> ProductStore:
    store = getattr(request.app.state, "store", None)
    if store is None:
        raise RuntimeError("Store not initialized")
    return store


def get_auth(request: Request) -> AuthProvider:
    auth = getattr(request.app.state, "auth", None)
    if auth is None:
        raise RuntimeError("Auth provider not initialized")
    return auth
