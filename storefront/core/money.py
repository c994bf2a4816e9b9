"""Shared helpers for prices and totals."""
from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")
ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """Coerce stored or user-supplied amounts to Decimal.

    Floats go through ``str`` so 19.99 stays 19.99 instead of its binary
    approximation.
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        value = str(value)
    try:
        return Decimal(value)
    except (InvalidOperation, TypeError, ValueError):
        return ZERO


def to_money(value: Any) -> Decimal:
    """Round an amount to cents."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def format_price(value: Any, currency: str = "$") -> str:
    """Format an amount the way the storefront displays it.

    Example:
        >>> format_price(Decimal("31"))
        '$31.00'
    """
    return f"{currency}{to_money(value)}"
