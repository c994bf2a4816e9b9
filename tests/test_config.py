from __future__ import annotations

import pytest

from storefront.core.config import (
    DEFAULT_CART_TTL_SECONDS,
    DEFAULT_DATABASE_URL,
    guest_access_allowed,
    load_settings,
    normalize_database_url,
)
from storefront.core.exceptions import ConfigurationException


@pytest.fixture(autouse=True)
def _no_dotenv(monkeypatch):
    monkeypatch.setattr("storefront.core.config.load_dotenv", lambda *args, **kwargs: False)
    for name in ("DATABASE_URL", "REDIS_URL", "CART_TTL_SECONDS", "CORS_ALLOWED_ORIGINS", "PORT"):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch) -> None:
    monkeypatch.setenv("ENVIRONMENT", "production")

    settings = load_settings()

    assert settings.database_url == DEFAULT_DATABASE_URL
    assert settings.redis_url is None
    assert settings.cart_ttl_seconds == DEFAULT_CART_TTL_SECONDS
    assert settings.api.port == 8000
    assert not settings.is_dev


def test_env_overrides(monkeypatch) -> None:
    monkeypatch.setenv("DATABASE_URL", "postgres://u:p@db:5432/shop")
    monkeypatch.setenv("REDIS_URL", "redis://cache:6379/0")
    monkeypatch.setenv("CART_TTL_SECONDS", "3600")
    monkeypatch.setenv("CORS_ALLOWED_ORIGINS", "https://shop.example, https://admin.example")
    monkeypatch.setenv("ENVIRONMENT", "Development")

    settings = load_settings()

    assert settings.database_url == "postgresql+psycopg://u:p@db:5432/shop"
    assert settings.redis_url == "redis://cache:6379/0"
    assert settings.cart_ttl_seconds == 3600
    assert settings.api.cors_origins == ["https://shop.example", "https://admin.example"]
    assert settings.is_dev


@pytest.mark.parametrize("value", ["abc", "0", "-5"])
def test_invalid_cart_ttl(monkeypatch, value: str) -> None:
    monkeypatch.setenv("CART_TTL_SECONDS", value)

    with pytest.raises(ConfigurationException):
        load_settings()


def test_normalize_database_url() -> None:
    assert normalize_database_url("postgresql://h/db") == "postgresql+psycopg://h/db"
    assert normalize_database_url("sqlite:///x.db") == "sqlite:///x.db"


def test_guest_access_flag(monkeypatch) -> None:
    monkeypatch.delenv("ALLOW_GUEST_ACCESS", raising=False)
    assert not guest_access_allowed()

    monkeypatch.setenv("ALLOW_GUEST_ACCESS", "true")
    assert guest_access_allowed()
