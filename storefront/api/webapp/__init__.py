from __future__ import annotations

from fastapi import APIRouter

from . import routes_cart, routes_checkout, routes_products
from .common import set_services

router = APIRouter(prefix="/api/v1", tags=["storefront"])

router.include_router(routes_products.router)
router.include_router(routes_cart.router)
router.include_router(routes_checkout.router)

__all__ = ["router", "set_services"]
