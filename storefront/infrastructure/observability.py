"""Structured Logging — JSON formatter and setup for production observability.

Invariants:
    - All logs include timestamp (of the record, not of formatting), level, logger name, and message
    - Extra fields (error_code, path, operation, product_id) surfaced when present
    - Credentials (email/password/tokens) are never passed as extra fields
    - setup_logging is idempotent: re-running it replaces, not stacks, its handler
    - httpx/httpcore request chatter capped at WARNING

Design Decisions:
    - JSONFormatter over third-party libs: zero dependencies, full control
    - setup_logging called once per lifespan; a named handler lets repeated startups
      in one process (tests, reloads) keep a single output stream
"""

import logging
import json
from datetime import datetime, timezone

HANDLER_NAME = "storefront"

_EXTRA_FIELDS = (
    "error_code", "path", "method", "operation", "product_id", "status_code",
)
_QUIET_LOGGERS = ("httpx", "httpcore")


class JSONFormatter(logging.Formatter):
    """Format logs as JSON for structured logging in production."""

    def format(self, record: logging.LogRecord) -> str:
        log = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc,
            ).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log.update({
            key: record.__dict__[key]
            for key in _EXTRA_FIELDS
            if record.__dict__.get(key) is not None
        })
        if record.exc_info:
            log["exception"] = self.formatException(record.exc_info)
        return json.dumps(log, ensure_ascii=False, default=str)


def _build_handler(fmt: str) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.set_name(HANDLER_NAME)
    if fmt == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            "%(asctime)s %(levelname)s %(name)s — %(message)s",
        ))
    return handler


def setup_logging(level: str = "INFO", fmt: str = "json") -> logging.Handler:
    """Install the storefront handler on the root logger and return it."""
    for existing in list(logging.root.handlers):
        if existing.get_name() == HANDLER_NAME:
            logging.root.removeHandler(existing)
    handler = _build_handler(fmt)
    logging.root.addHandler(handler)
    logging.root.setLevel(getattr(logging, level.upper(), logging.INFO))
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    return handler
