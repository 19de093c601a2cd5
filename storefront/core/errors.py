"""Error Hierarchy — typed, categorized exceptions for all Storefront failure modes.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Only two kinds reach callers: domain rejections (400) and store/auth failures (500)
    - to_response() produces the flat {"error": message} envelope callers rely on
    - Empty messages fall back to "Unknown error"

Design Decisions:
    - Single hierarchy with StorefrontError base: FastAPI global handler catches all (ADR: uniform error shape)
    - ErrorContext as dataclass: observability fields without coupling to logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from datetime import datetime, timezone

UNKNOWN_ERROR_MESSAGE = "Unknown error"


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    BUSINESS_RULE = "business_rule"
    DATABASE = "database"
    EXTERNAL_API = "external_api"


@dataclass
class ErrorContext:
    """Context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    product_id: int | None = None


def error_message(exc: BaseException) -> str:
    """Message of any raised value, or the generic fallback."""
    message = getattr(exc, "message", None) or str(exc)
    return message or UNKNOWN_ERROR_MESSAGE


class StorefrontError(Exception):
    """Base exception for all Storefront errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to the REST error body."""
        return {"error": self.message or UNKNOWN_ERROR_MESSAGE}


# ─── Domain Errors (400-level) ──────────────────────────────────

class InsufficientStockError(StorefrontError):
    """Requested basket quantity exceeds the product's stock."""
    def __init__(self, product_id: int, context: ErrorContext | None = None):
        ctx = context or ErrorContext(operation="add_to_basket")
        ctx.product_id = product_id
        super().__init__(
            "Not enough stock available",
            "INSUFFICIENT_STOCK", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.WARNING, ctx, 400,
        )
        self.product_id = product_id


# ─── Infrastructure Errors (500-level) ──────────────────────────

class StoreError(StorefrontError):
    """Data store operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        ctx = context or ErrorContext()
        ctx.operation = operation
        super().__init__(
            message, "STORE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, ctx, 500,
        )
        self.operation = operation


class AuthError(StorefrontError):
    """Auth provider call failed or rejected the credentials."""
    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        context: ErrorContext | None = None,
    ):
        super().__init__(
            message, "AUTH_ERROR", ErrorCategory.EXTERNAL_API,
            ErrorSeverity.ERROR, context, 500,
        )
        self.status_code = status_code
