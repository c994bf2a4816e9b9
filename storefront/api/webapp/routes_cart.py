from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from storefront.core.exceptions import ProductNotFoundException

from .common import (
    AddToCartRequest,
    CartResponse,
    UpdateQuantityRequest,
    get_cart_service,
    get_session_id,
    logger,
)

router = APIRouter()


@router.get("/cart", response_model=CartResponse)
async def get_cart(session_id: str = Depends(get_session_id), cart=Depends(get_cart_service)):
    """Cart summary for the sidebar and the full cart page."""
    return CartResponse.from_summary(cart.summary(session_id))


@router.post("/cart/items", response_model=CartResponse)
async def add_cart_item(
    payload: AddToCartRequest,
    session_id: str = Depends(get_session_id),
    cart=Depends(get_cart_service),
):
    try:
        summary = cart.add_product(session_id, payload.product_id, payload.quantity)
    except ProductNotFoundException as e:
        logger.info(f"Add to cart for unknown product {payload.product_id}")
        raise HTTPException(status_code=404, detail=e.message) from e
    return CartResponse.from_summary(summary)


@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_cart_item(
    product_id: int,
    payload: UpdateQuantityRequest,
    session_id: str = Depends(get_session_id),
    cart=Depends(get_cart_service),
):
    """Quantities below 1 and unknown items leave the cart unchanged."""
    return CartResponse.from_summary(cart.update_quantity(session_id, product_id, payload.quantity))


@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_cart_item(
    product_id: int,
    session_id: str = Depends(get_session_id),
    cart=Depends(get_cart_service),
):
    return CartResponse.from_summary(cart.remove_item(session_id, product_id))


@router.delete("/cart", response_model=CartResponse)
async def clear_cart(session_id: str = Depends(get_session_id), cart=Depends(get_cart_service)):
    return CartResponse.from_summary(cart.clear(session_id))
