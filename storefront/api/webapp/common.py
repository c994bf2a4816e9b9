from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import Header, HTTPException
from pydantic import BaseModel, Field

from storefront.core.config import guest_access_allowed
from storefront.core.money import format_price
from storefront.domain.cart import CartLineItem
from storefront.domain.entities import Category, Product
from storefront.services import CartService, CartSummary, CatalogService, CheckoutService

logger = logging.getLogger(__name__)

SESSION_HEADER = "X-Session-Id"
GUEST_SESSION_ID = "guest"


# =============================================================================
# Pydantic Models
# =============================================================================


class ProductResponse(BaseModel):
    id: int
    name: str
    description: str
    price: Decimal
    sale_price: Decimal | None = None
    effective_price: Decimal
    discount_percent: int = 0
    image_url: str
    category: str
    rating: float
    reviews: int
    in_stock: bool
    featured: bool

    @classmethod
    def from_entity(cls, product: Product) -> ProductResponse:
        return cls(
            id=int(product.id or 0),
            name=product.name,
            description=product.description,
            price=product.price,
            sale_price=product.sale_price,
            effective_price=product.effective_price,
            discount_percent=product.discount_percent,
            image_url=product.image_url,
            category=product.category,
            rating=product.rating,
            reviews=product.reviews,
            in_stock=product.in_stock,
            featured=product.featured,
        )


class CategoryResponse(BaseModel):
    id: int
    name: str
    image_url: str

    @classmethod
    def from_entity(cls, category: Category) -> CategoryResponse:
        return cls(id=int(category.id or 0), name=category.name, image_url=category.image_url)


class CartItemResponse(BaseModel):
    id: int
    product_id: int
    name: str
    price: Decimal
    sale_price: Decimal | None = None
    unit_price: Decimal
    quantity: int
    line_total: Decimal
    original_line_total: Decimal
    image_url: str
    category: str

    @classmethod
    def from_line(cls, item: CartLineItem) -> CartItemResponse:
        return cls(
            id=item.id,
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            sale_price=item.sale_price,
            unit_price=item.unit_price,
            quantity=item.quantity,
            line_total=item.line_total,
            original_line_total=item.original_line_total,
            image_url=item.image_url,
            category=item.category,
        )


class CartResponse(BaseModel):
    items: list[CartItemResponse]
    items_count: int
    quantity: int
    subtotal: Decimal
    subtotal_display: str
    savings: Decimal

    @classmethod
    def from_summary(cls, summary: CartSummary) -> CartResponse:
        return cls(
            items=[CartItemResponse.from_line(item) for item in summary.items],
            items_count=summary.items_count,
            quantity=summary.quantity,
            subtotal=summary.subtotal,
            subtotal_display=format_price(summary.subtotal),
            savings=summary.savings,
        )


class AddToCartRequest(BaseModel):
    product_id: int
    quantity: int = Field(1, description="Quantities below 1 are ignored")


class UpdateQuantityRequest(BaseModel):
    quantity: int


class CheckoutResponse(BaseModel):
    success: bool
    total: Decimal
    items_count: int
    payment_method: str


# =============================================================================
# Session
# =============================================================================


async def get_session_id(
    x_session_id: str = Header(None, alias=SESSION_HEADER),
) -> str:
    """Dependency resolving the shopper session that owns the cart.

    Guest access only allowed in development mode.
    """
    session_id = (x_session_id or "").strip()
    if session_id:
        return session_id[:128]
    if guest_access_allowed():
        logger.warning("Guest session used - DEVELOPMENT MODE ONLY")
        return GUEST_SESSION_ID
    raise HTTPException(status_code=401, detail=f"{SESSION_HEADER} header is required")


# =============================================================================
# Service dependencies (injected from the app factory)
# =============================================================================

_catalog: CatalogService | None = None
_cart_service: CartService | None = None
_checkout_service: CheckoutService | None = None


def set_services(
    catalog: CatalogService, cart_service: CartService, checkout_service: CheckoutService
) -> None:
    """Set service instances for API routes."""
    global _catalog, _cart_service, _checkout_service
    _catalog = catalog
    _cart_service = cart_service
    _checkout_service = checkout_service


def get_catalog() -> CatalogService:
    if _catalog is None:
        raise HTTPException(status_code=500, detail="Catalog not initialized")
    return _catalog


def get_cart_service() -> CartService:
    if _cart_service is None:
        raise HTTPException(status_code=500, detail="Cart not initialized")
    return _cart_service


def get_checkout_service() -> CheckoutService:
    if _checkout_service is None:
        raise HTTPException(status_code=500, detail="Checkout not initialized")
    return _checkout_service


__all__ = [
    "logger",
    "ProductResponse",
    "CategoryResponse",
    "CartItemResponse",
    "CartResponse",
    "AddToCartRequest",
    "UpdateQuantityRequest",
    "CheckoutResponse",
    "SESSION_HEADER",
    "get_session_id",
    "set_services",
    "get_catalog",
    "get_cart_service",
    "get_checkout_service",
]
