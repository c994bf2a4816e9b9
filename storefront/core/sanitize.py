"""Normalisation helpers for checkout input."""
from __future__ import annotations

import re

_NON_DIGITS = re.compile(r"\D")
_WHITESPACE = re.compile(r"\s+")

CARD_NUMBER_DIGITS = 16


def strip_whitespace(value: str | None) -> str:
    """Remove every whitespace character.

    Example:
        >>> strip_whitespace("4242 4242 4242 4242")
        '4242424242424242'
    """
    if not value:
        return ""
    return _WHITESPACE.sub("", str(value))


def digits_only(value: str | None) -> str:
    if not value:
        return ""
    return _NON_DIGITS.sub("", str(value))


def format_card_number(value: str | None) -> str:
    """Group card digits by four, dropping anything past 16 digits.

    Example:
        >>> format_card_number("4242-4242-4242-4242-99")
        '4242 4242 4242 4242'
    """
    digits = digits_only(value)[:CARD_NUMBER_DIGITS]
    return " ".join(digits[i : i + 4] for i in range(0, len(digits), 4))


def format_expiry_date(value: str | None) -> str:
    """Format typed expiry digits as MM/YY.

    Example:
        >>> format_expiry_date("1227")
        '12/27'
        >>> format_expiry_date("1")
        '1'
    """
    digits = digits_only(value)
    if len(digits) > 2:
        return f"{digits[:2]}/{digits[2:4]}"
    return digits


def mask_card_number(value: str | None) -> str:
    """Keep only the last four digits for logs and receipts."""
    digits = digits_only(value)
    if len(digits) < 4:
        return "****"
    return f"**** **** **** {digits[-4:]}"
