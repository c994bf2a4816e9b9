"""Shared pytest fixtures: in-memory catalog database and fake Redis."""
from __future__ import annotations

import os
from dataclasses import dataclass, field
from decimal import Decimal

import pytest

from storefront.domain.entities import Product
from storefront.infra.db import create_db_engine, create_session_factory, init_schema
from storefront.infra.db.seed import seed_catalog


@pytest.fixture(scope="session", autouse=True)
def _test_env_vars() -> None:
    """Keep tests independent of a developer's .env file."""
    os.environ["ENVIRONMENT"] = "test"
    os.environ.pop("REDIS_URL", None)
    os.environ.pop("SENTRY_DSN", None)
    os.environ.pop("ALLOW_GUEST_ACCESS", None)


@dataclass
class FakeRedisClient:
    data: dict[str, str] = field(default_factory=dict)
    expiry: dict[str, int] = field(default_factory=dict)
    setex_calls: list[tuple[str, int]] = field(default_factory=list)
    fail: bool = False

    def ping(self) -> bool:
        return True

    def get(self, key: str):
        if self.fail:
            raise ConnectionError("redis went away")
        return self.data.get(key)

    def setex(self, key: str, ttl: int, value: str) -> bool:
        if self.fail:
            raise ConnectionError("redis went away")
        self.data[key] = value
        self.expiry[key] = ttl
        self.setex_calls.append((key, ttl))
        return True

    def delete(self, key: str) -> int:
        existed = 1 if key in self.data else 0
        self.data.pop(key, None)
        self.expiry.pop(key, None)
        return existed


@pytest.fixture
def fake_redis(monkeypatch):
    import storefront.integrations.redis_cart as redis_cart_module

    client = FakeRedisClient()
    monkeypatch.setattr(redis_cart_module.redis, "from_url", lambda *args, **kwargs: client)
    return client


@pytest.fixture()
def engine():
    engine = create_db_engine("sqlite://")
    init_schema(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture()
def seeded_session_factory(session_factory):
    seed_catalog(session_factory)
    return session_factory


def make_product(
    product_id: int = 1,
    price: str = "10.00",
    sale_price: str | None = None,
    name: str = "Test product",
    category: str = "Accessories",
) -> Product:
    return Product(
        id=product_id,
        name=name,
        description="",
        price=Decimal(price),
        sale_price=Decimal(sale_price) if sale_price is not None else None,
        category=category,
    )


@pytest.fixture()
def product_factory():
    return make_product
