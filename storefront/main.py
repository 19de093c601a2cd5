"""Storefront API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map every failure to a {"error": ...} JSON body
    - Store and auth capabilities built once in the lifespan, attached to app.state
    - Missing required settings abort startup (pydantic ValidationError)

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Capabilities injected through Depends(get_store/get_auth), never imported as globals
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from storefront.api.error_handlers import register_error_handlers
from storefront.api.routes import accounts, checkout, health, products
from storefront.config import get_settings
from storefront.infrastructure.auth_client import AuthClient
from storefront.infrastructure.observability import setup_logging
from storefront.infrastructure.store import SqlProductStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    app.state.store = SqlProductStore.from_url(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    app.state.auth = AuthClient(
        settings.supabase_url,
        settings.supabase_service_role_key,
        timeout_seconds=settings.auth_timeout_seconds,
    )
    logger.info("Storefront API started")
    yield
    await app.state.auth.aclose()
    await app.state.store.dispose()
    logger.info("Storefront API shutting down")


app = FastAPI(
    title="Storefront API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes — explicit registration; each (method, path) owned by one handler
app.include_router(health.router)
app.include_router(products.router)
app.include_router(accounts.router)
app.include_router(checkout.router)

register_error_handlers(app)
