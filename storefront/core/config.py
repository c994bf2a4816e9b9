"""Environment-driven configuration objects for the storefront."""
from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

from storefront.core.exceptions import ConfigurationException

DEFAULT_DATABASE_URL = "sqlite:///./storefront.db"
DEFAULT_CART_TTL_SECONDS = 24 * 60 * 60


def _str_to_bool(value: str | None) -> bool:
    if value is None:
        return False
    return value.strip().lower() in {"true", "1", "yes", "y"}


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigurationException(f"{name} must be an integer, got {raw!r}") from e


def normalize_database_url(url: str) -> str:
    """Point bare postgres URLs at the psycopg driver."""
    # Railway/Heroku hand out postgres:// which SQLAlchemy no longer accepts
    if url.startswith("postgres://"):
        url = url.replace("postgres://", "postgresql://", 1)
    if url.startswith("postgresql://"):
        url = url.replace("postgresql://", "postgresql+psycopg://", 1)
    return url


@dataclass(slots=True)
class ApiConfig:
    host: str
    port: int
    cors_origins: list[str] = field(default_factory=list)


@dataclass(slots=True)
class Settings:
    database_url: str
    redis_url: str | None
    environment: str
    log_level: str
    cart_ttl_seconds: int
    api: ApiConfig
    rate_limit: str = "100/minute"

    @property
    def is_dev(self) -> bool:
        return self.environment in ("development", "dev", "local", "test")


def load_settings() -> Settings:
    """Load environment variables once and expose typed settings."""
    load_dotenv()

    database_url = normalize_database_url(os.getenv("DATABASE_URL") or DEFAULT_DATABASE_URL)
    redis_url = os.getenv("REDIS_URL") or None
    environment = os.getenv("ENVIRONMENT", "production").strip().lower()

    cart_ttl = _int_env("CART_TTL_SECONDS", DEFAULT_CART_TTL_SECONDS)
    if cart_ttl <= 0:
        raise ConfigurationException("CART_TTL_SECONDS must be positive")

    cors_origins = [
        origin.strip()
        for origin in os.getenv("CORS_ALLOWED_ORIGINS", "").split(",")
        if origin.strip()
    ]

    api = ApiConfig(
        host=os.getenv("API_HOST", "0.0.0.0"),
        port=_int_env("PORT", 8000),
        cors_origins=cors_origins,
    )

    return Settings(
        database_url=database_url,
        redis_url=redis_url,
        environment=environment,
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cart_ttl_seconds=cart_ttl,
        api=api,
        rate_limit=os.getenv("RATE_LIMIT", "100/minute"),
    )


def guest_access_allowed() -> bool:
    return _str_to_bool(os.getenv("ALLOW_GUEST_ACCESS"))
