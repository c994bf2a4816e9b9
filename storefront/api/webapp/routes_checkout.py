from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from fastapi.responses import JSONResponse

from storefront.core.exceptions import CheckoutValidationException

from .common import CheckoutResponse, get_cart_service, get_checkout_service, get_session_id

router = APIRouter()


@router.post("/checkout", response_model=CheckoutResponse)
async def checkout(
    fields: dict[str, Any] = Body(..., description="Flat checkout form, camelCase or snake_case"),
    session_id: str = Depends(get_session_id),
    checkout_service=Depends(get_checkout_service),
    cart=Depends(get_cart_service),
):
    """Validate the checkout form and submit the session's cart.

    Responds 422 with ``{"errors": {field: message}}`` when anything fails;
    nothing is submitted in that case.
    """
    summary = cart.summary(session_id)
    result = checkout_service.submit(session_id, fields)
    try:
        form = result.raise_for_errors()
    except CheckoutValidationException as e:
        return JSONResponse(status_code=422, content={"errors": e.errors})

    return CheckoutResponse(
        success=True,
        total=summary.subtotal,
        items_count=summary.items_count,
        payment_method=form.payment_method.value,
    )
