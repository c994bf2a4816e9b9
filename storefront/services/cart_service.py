"""Cart operations by product ID and cart summaries."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal

from storefront.core.logging_config import logger
from storefront.core.money import to_money
from storefront.domain.cart import (
    CartLineItem,
    calculate_cart_savings,
    calculate_cart_total,
    count_cart_quantity,
)
from storefront.integrations.redis_cart import RedisCartStorage
from storefront.services.catalog_service import CatalogService


@dataclass(slots=True)
class CartSummary:
    items: list[CartLineItem]
    items_count: int
    quantity: int
    subtotal: Decimal
    savings: Decimal

    @property
    def is_empty(self) -> bool:
        return not self.items


def summarize_cart(items: list[CartLineItem]) -> CartSummary:
    return CartSummary(
        items=list(items),
        items_count=len(items),
        quantity=count_cart_quantity(items),
        subtotal=to_money(calculate_cart_total(items)),
        savings=to_money(calculate_cart_savings(items)),
    )


class CartService:
    """Glue between the session cart storage and the catalog."""

    def __init__(self, storage: RedisCartStorage, catalog: CatalogService):
        self._storage = storage
        self._catalog = catalog

    def add_product(self, user_id: str, product_id: int, quantity: int = 1) -> CartSummary:
        product = self._catalog.get_product(product_id)
        added = self._storage.add_item(user_id, product, quantity)
        if added is None:
            logger.info("Rejected add of product %s (quantity=%s)", product_id, quantity)
        return self.summary(user_id)

    def update_quantity(self, user_id: str, product_id: int, quantity: int) -> CartSummary:
        self._storage.update_quantity(user_id, product_id, quantity)
        return self.summary(user_id)

    def remove_item(self, user_id: str, product_id: int) -> CartSummary:
        self._storage.remove_item(user_id, product_id)
        return self.summary(user_id)

    def clear(self, user_id: str) -> CartSummary:
        self._storage.clear_cart(user_id)
        return self.summary(user_id)

    def summary(self, user_id: str) -> CartSummary:
        return summarize_cart(self._storage.get_cart(user_id))
