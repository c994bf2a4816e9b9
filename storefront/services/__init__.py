"""Application services used by the API."""
from __future__ import annotations

from .cart_service import CartService, CartSummary, summarize_cart
from .catalog_service import CatalogService
from .checkout_service import CheckoutService, OrderSubmission

__all__ = [
    "CartService",
    "CartSummary",
    "CatalogService",
    "CheckoutService",
    "OrderSubmission",
    "summarize_cart",
]
