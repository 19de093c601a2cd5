"""Health & Readiness Probes — liveness and readiness endpoints for the hosting runtime.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from storefront.api.dependencies import get_store
from storefront.core.store_protocols import ProductStore

router = APIRouter(prefix="/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "storefront-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(store: ProductStore = Depends(get_store)):
    """Readiness probe — includes database connectivity."""
    if not await store.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
