"""Cart line items and the operations over them.

The module-level functions never mutate their input and always return a new
list, so a cart can be recomputed from any snapshot. ``CartStore`` wraps them
for callers that keep a cart in memory and need a re-render hook.

Line items are snapshots: display fields and prices are copied from the
product when it is first added, and later catalog changes do not reach an
existing line.
"""
from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any

from storefront.core.money import ZERO, to_decimal
from storefront.domain.entities import Product

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CartLineItem:
    """Single product in cart."""

    product_id: int
    name: str
    price: Decimal
    quantity: int
    sale_price: Decimal | None = None
    image_url: str = ""
    category: str = ""
    added_at: float = field(default_factory=time.time)

    @property
    def id(self) -> int:
        """Line items are keyed by product: one line per product."""
        return self.product_id

    @property
    def unit_price(self) -> Decimal:
        return self.sale_price if self.sale_price is not None else self.price

    @property
    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    @property
    def original_line_total(self) -> Decimal:
        return self.price * self.quantity

    @classmethod
    def from_product(cls, product: Product, quantity: int = 1) -> CartLineItem:
        if product.id is None:
            raise ValueError("Cannot add an unsaved product to the cart")
        return cls(
            product_id=int(product.id),
            name=product.name,
            price=product.price,
            quantity=int(quantity),
            sale_price=product.sale_price,
            image_url=product.image_url,
            category=product.category,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "product_id": int(self.product_id),
            "name": self.name,
            "price": str(self.price),
            "quantity": int(self.quantity),
            "sale_price": str(self.sale_price) if self.sale_price is not None else None,
            "image_url": self.image_url,
            "category": self.category,
            "added_at": float(self.added_at),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> CartLineItem:
        sale_price = data.get("sale_price")
        return cls(
            product_id=int(data.get("product_id", 0)),
            name=str(data.get("name", "")),
            price=to_decimal(data.get("price", 0)),
            quantity=max(1, int(data.get("quantity", 1))),
            sale_price=to_decimal(sale_price) if sale_price is not None else None,
            image_url=str(data.get("image_url", "")),
            category=str(data.get("category", "")),
            added_at=float(data.get("added_at", time.time())),
        )


def add_to_cart(
    items: list[CartLineItem], product: Product, quantity: int = 1
) -> list[CartLineItem]:
    """Add ``quantity`` of ``product``, merging into an existing line."""
    if quantity < 1:
        logger.debug("Ignored add of product %s with quantity %s", product.id, quantity)
        return list(items)

    result = list(items)
    for idx, item in enumerate(result):
        if item.product_id == product.id:
            result[idx] = replace(item, quantity=item.quantity + quantity)
            return result

    result.append(CartLineItem.from_product(product, quantity))
    return result


def update_cart_item_quantity(
    items: list[CartLineItem], item_id: int, new_quantity: int
) -> list[CartLineItem]:
    """Set the quantity of one line; quantities below 1 are ignored."""
    if new_quantity < 1:
        logger.debug("Ignored quantity %s for cart item %s", new_quantity, item_id)
        return list(items)
    return [
        replace(item, quantity=new_quantity) if item.id == item_id else item for item in items
    ]


def remove_from_cart(items: list[CartLineItem], item_id: int) -> list[CartLineItem]:
    return [item for item in items if item.id != item_id]


def calculate_cart_total(items: Iterable[CartLineItem]) -> Decimal:
    return sum((item.line_total for item in items), ZERO)


def calculate_cart_savings(items: Iterable[CartLineItem]) -> Decimal:
    """Difference between base-price and sale-price totals."""
    return sum((item.original_line_total - item.line_total for item in items), ZERO)


def count_cart_quantity(items: Iterable[CartLineItem]) -> int:
    return sum(item.quantity for item in items)


class CartStore:
    """In-memory cart for a single shopper.

    ``on_update`` receives the new item list after every mutation that changed
    the cart. Rejected or no-op operations do not call it.
    """

    def __init__(
        self,
        items: Iterable[CartLineItem] | None = None,
        on_update: Callable[[list[CartLineItem]], None] | None = None,
    ) -> None:
        self._items: list[CartLineItem] = list(items or [])
        self._on_update = on_update

    @property
    def items(self) -> list[CartLineItem]:
        return list(self._items)

    @property
    def total(self) -> Decimal:
        return calculate_cart_total(self._items)

    @property
    def count(self) -> int:
        """Number of line items."""
        return len(self._items)

    @property
    def quantity(self) -> int:
        return count_cart_quantity(self._items)

    def get(self, item_id: int) -> CartLineItem | None:
        for item in self._items:
            if item.id == item_id:
                return item
        return None

    def _commit(self, items: list[CartLineItem]) -> bool:
        if items == self._items:
            return False
        self._items = items
        if self._on_update is not None:
            self._on_update(self.items)
        return True

    def add(self, product: Product, quantity: int = 1) -> CartLineItem | None:
        """Add a product; returns the resulting line or None if rejected."""
        if not self._commit(add_to_cart(self._items, product, quantity)):
            return None
        return self.get(int(product.id))

    def update_quantity(self, item_id: int, new_quantity: int) -> bool:
        return self._commit(update_cart_item_quantity(self._items, item_id, new_quantity))

    def remove(self, item_id: int) -> bool:
        return self._commit(remove_from_cart(self._items, item_id))

    def clear(self) -> bool:
        return self._commit([])
