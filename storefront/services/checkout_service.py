"""Checkout: validate the form, hand the order off, empty the cart."""
from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from storefront.core.logging_config import logger
from storefront.core.money import to_money
from storefront.domain.cart import CartLineItem, calculate_cart_total
from storefront.domain.checkout import (
    CheckoutForm,
    CheckoutResult,
    CreditCardPayment,
    validate_checkout,
)
from storefront.integrations.redis_cart import RedisCartStorage

EMPTY_CART_MESSAGE = "Your cart is empty"


@dataclass(frozen=True)
class OrderSubmission:
    """Everything the order collaborator needs; nothing is persisted here."""

    user_id: str
    form: CheckoutForm
    items: list[CartLineItem]
    total: Decimal


class CheckoutService:
    """Run the checkout form against a session cart.

    ``on_complete`` is the order-submission collaborator. It is called once
    per successful checkout, before the cart is cleared; if it raises, the
    cart is left intact.
    """

    def __init__(
        self,
        storage: RedisCartStorage,
        on_complete: Callable[[OrderSubmission], None] | None = None,
    ):
        self._storage = storage
        self._on_complete = on_complete

    def submit(self, user_id: str, fields: Mapping[str, Any]) -> CheckoutResult:
        result = validate_checkout(fields)
        items = self._storage.get_cart(user_id)

        errors = dict(result.errors)
        if not items:
            errors["cart"] = EMPTY_CART_MESSAGE
        if errors:
            logger.info("Checkout rejected for %s: %s", user_id, ", ".join(sorted(errors)))
            return CheckoutResult(errors=errors)

        submission = OrderSubmission(
            user_id=user_id,
            form=result.form,
            items=items,
            total=to_money(calculate_cart_total(items)),
        )
        if self._on_complete is not None:
            self._on_complete(submission)

        self._storage.clear_cart(user_id)
        logger.info(
            "Checkout completed for %s: %s items, total %s, payment %s",
            user_id,
            len(items),
            submission.total,
            describe_payment(result.form),
        )
        return result


def describe_payment(form: CheckoutForm) -> str:
    """Payment label safe for logs."""
    if isinstance(form.payment, CreditCardPayment):
        return f"{form.payment.method} {form.payment.masked_card_number}"
    return form.payment.method
