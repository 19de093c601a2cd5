"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - SUPABASE_URL, SUPABASE_SERVICE_ROLE_KEY and DATABASE_URL have no defaults:
      a missing value fails Settings() at startup, never per request
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

from storefront.core.domain_types import LOW_STOCK_THRESHOLD


def normalize_database_url(url: str) -> str:
    """Hosted Postgres hands out postgresql:// but asyncpg needs postgresql+asyncpg://."""
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    return url


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Hosted store / auth provider
    supabase_url: str
    supabase_service_role_key: str
    auth_timeout_seconds: float = 30.0

    # Database
    database_url: str

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        return normalize_database_url(v) if isinstance(v, str) else v

    @field_validator("supabase_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Catalog
    low_stock_threshold: int = LOW_STOCK_THRESHOLD

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
