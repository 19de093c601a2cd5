"""Error Handlers — global exception handlers for the Storefront API.

Invariants:
    - StorefrontError → exc.http_status with {"error": message}
    - RequestValidationError → 400 with field-level details; rejected input never logged
    - 405 → {"error": "Method not allowed"}; other HTTP errors → {"error": detail}
    - Exception (catch-all) → 500 with the raised message or "Unknown error"

Design Decisions:
    - Four-layer handler: domain (StorefrontError), validation (Pydantic),
      routing (Starlette HTTPException), catch-all (Exception)
    - Flat {"error": ...} body: existing clients read a single string field
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from storefront.core.errors import StorefrontError, error_message

logger = logging.getLogger(__name__)

METHOD_NOT_ALLOWED_MESSAGE = "Method not allowed"


def register_error_handlers(app: FastAPI) -> None:
    """Register all global error handlers on the FastAPI app."""
    _register_storefront_error_handler(app)
    _register_validation_error_handler(app)
    _register_http_error_handler(app)
    _register_generic_error_handler(app)


def _register_storefront_error_handler(app: FastAPI) -> None:
    """Register domain/infrastructure error handler."""

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        """Handle all Storefront domain/infrastructure errors."""
        log = logger.warning if exc.http_status < 500 else logger.error
        log(
            f"StorefrontError: {exc.message}",
            extra={
                "error_code": exc.code,
                "path": request.url.path,
                "operation": exc.context.operation,
            },
        )
        return JSONResponse(
            status_code=exc.http_status, content=exc.to_response(),
        )


def _register_validation_error_handler(app: FastAPI) -> None:
    """Register Pydantic validation error handler."""

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError,
    ):
        """Handle Pydantic validation errors."""
        logger.warning(
            f"Validation error on {request.url.path}: {_summarize_errors(exc)}",
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_build_validation_error_response(exc),
        )


def _register_http_error_handler(app: FastAPI) -> None:
    """Register routing-level HTTP error handler (404, 405)."""

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException,
    ):
        if exc.status_code == status.HTTP_405_METHOD_NOT_ALLOWED:
            message = METHOD_NOT_ALLOWED_MESSAGE
        else:
            message = str(exc.detail) if exc.detail else error_message(exc)
        logger.info(
            f"HTTP {exc.status_code} on {request.method} {request.url.path}",
            extra={"status_code": exc.status_code, "method": request.method},
        )
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": message},
            headers=getattr(exc, "headers", None),
        )


def _register_generic_error_handler(app: FastAPI) -> None:
    """Register catch-all error handler."""

    @app.exception_handler(Exception)
    async def generic_error_handler(request: Request, exc: Exception):
        """Catch-all — surfaces the raised message to the caller."""
        logger.error(
            f"Unhandled exception on {request.url.path}: {exc}",
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": error_message(exc)},
        )


def _summarize_errors(exc: RequestValidationError) -> list[dict]:
    """loc/msg/type of each error; the offending input may hold credentials."""
    return [
        {"loc": e["loc"], "msg": e["msg"], "type": e["type"]}
        for e in exc.errors()
    ]


def _build_validation_error_response(exc: RequestValidationError) -> dict:
    """Build structured validation error response."""
    return {
        "error": "Invalid request data",
        "details": [
            {
                "field": ".".join(str(loc) for loc in e["loc"]),
                "message": e["msg"],
                "type": e["type"],
            }
            for e in exc.errors()
        ],
    }
