"""Redis-backed session cart storage with TTL and in-memory fallback."""
from __future__ import annotations

import json
import os
import time
from typing import Any

import redis

from storefront.core.config import DEFAULT_CART_TTL_SECONDS
from storefront.core.logging_config import logger
from storefront.domain.cart import CartLineItem, CartStore
from storefront.domain.entities import Product


class RedisCartStorage:
    """Cart storage persisted in Redis with a sliding TTL per session.

    Every mutation loads the stored items into a ``CartStore`` whose update
    hook writes them back, so rejected operations never touch Redis.
    """

    def __init__(self, redis_url: str | None = None, ttl_seconds: int | None = None):
        self._redis_url = redis_url or os.getenv("REDIS_URL")
        self.ttl_seconds = int(ttl_seconds or DEFAULT_CART_TTL_SECONDS)
        self._client = self._init_client()
        self._memory_carts: dict[str, list[dict[str, Any]]] = {}
        self._memory_last_access: dict[str, float] = {}

    @property
    def uses_redis(self) -> bool:
        return self._client is not None

    def _switch_to_memory_fallback(self, reason: Exception | str) -> None:
        logger.warning("Redis cart fallback to memory mode: %s", reason)
        self._client = None

    def _init_client(self):
        if not self._redis_url:
            logger.warning("REDIS_URL is not set; cart uses in-memory fallback")
            return None

        try:
            client = redis.from_url(
                self._redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
            )
            client.ping()
        except Exception as exc:
            logger.warning("Redis cart init failed, fallback to in-memory: %s", exc)
            return None
        logger.info("Redis cart storage enabled")
        return client

    @staticmethod
    def _cart_key(user_id: str) -> str:
        return f"cart:{user_id}"

    def _cleanup_memory_expired(self) -> None:
        now = time.time()
        expired = [
            user_id
            for user_id, last_access in self._memory_last_access.items()
            if now - last_access > self.ttl_seconds
        ]
        for user_id in expired:
            self._memory_carts.pop(user_id, None)
            self._memory_last_access.pop(user_id, None)

    def _memory_load(self, user_id: str) -> list[dict[str, Any]]:
        self._cleanup_memory_expired()
        self._memory_last_access[user_id] = time.time()
        return list(self._memory_carts.get(user_id, []))

    def _memory_save(self, user_id: str, raw_items: list[dict[str, Any]]) -> None:
        if not raw_items:
            self._memory_carts.pop(user_id, None)
            self._memory_last_access.pop(user_id, None)
            return
        self._memory_carts[user_id] = raw_items
        self._memory_last_access[user_id] = time.time()

    def _load_raw(self, user_id: str) -> list[dict[str, Any]]:
        if not self._client:
            return self._memory_load(user_id)

        try:
            raw = self._client.get(self._cart_key(user_id))
        except Exception as exc:
            self._switch_to_memory_fallback(exc)
            return self._memory_load(user_id)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except ValueError:
            logger.warning("Discarding unreadable cart payload for %s", user_id)
            return []
        items = payload.get("items") if isinstance(payload, dict) else None
        return items if isinstance(items, list) else []

    def _save_items(self, user_id: str, items: list[CartLineItem]) -> None:
        raw_items = [item.to_dict() for item in items]
        if self._client:
            try:
                if raw_items:
                    payload = {"items": raw_items, "updated_at": int(time.time())}
                    self._client.setex(
                        self._cart_key(user_id),
                        self.ttl_seconds,
                        json.dumps(payload, ensure_ascii=False),
                    )
                else:
                    self._client.delete(self._cart_key(user_id))
                return
            except Exception as exc:
                self._switch_to_memory_fallback(exc)
        self._memory_save(user_id, raw_items)

    def open_cart(self, user_id: str) -> CartStore:
        """Cart store for one session; changes are written back on update."""
        return CartStore(
            self.get_cart(user_id),
            on_update=lambda items: self._save_items(user_id, items),
        )

    def get_cart(self, user_id: str) -> list[CartLineItem]:
        items: list[CartLineItem] = []
        for raw in self._load_raw(user_id):
            try:
                items.append(CartLineItem.from_dict(raw))
            except (TypeError, ValueError) as exc:
                logger.warning("Skipping malformed cart line for %s: %s", user_id, exc)
        return items

    def add_item(self, user_id: str, product: Product, quantity: int = 1) -> CartLineItem | None:
        return self.open_cart(user_id).add(product, quantity)

    def update_quantity(self, user_id: str, product_id: int, quantity: int) -> bool:
        return self.open_cart(user_id).update_quantity(product_id, quantity)

    def remove_item(self, user_id: str, product_id: int) -> bool:
        return self.open_cart(user_id).remove(product_id)

    def clear_cart(self, user_id: str) -> None:
        self.open_cart(user_id).clear()

