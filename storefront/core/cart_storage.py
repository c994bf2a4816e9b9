"""Shared cart storage used by the services and the API."""
from __future__ import annotations

from storefront.core.config import Settings
from storefront.integrations.redis_cart import RedisCartStorage


class CartStorage(RedisCartStorage):
    """Session cart storage configured from settings."""

    @classmethod
    def from_settings(cls, settings: Settings) -> CartStorage:
        return cls(redis_url=settings.redis_url, ttl_seconds=settings.cart_ttl_seconds)


__all__ = ["CartStorage"]
