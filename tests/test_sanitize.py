from __future__ import annotations

from storefront.core.sanitize import (
    digits_only,
    format_card_number,
    format_expiry_date,
    mask_card_number,
    strip_whitespace,
)


def test_strip_whitespace() -> None:
    assert strip_whitespace(" 4242 4242\t4242 4242 ") == "4242424242424242"
    assert strip_whitespace(None) == ""


def test_digits_only() -> None:
    assert digits_only("(555) 123-4567") == "5551234567"


def test_format_card_number() -> None:
    assert format_card_number("4242424242424242") == "4242 4242 4242 4242"
    assert format_card_number("42424") == "4242 4"
    assert format_card_number("") == ""


def test_format_expiry_date() -> None:
    assert format_expiry_date("1227") == "12/27"
    assert format_expiry_date("12/27") == "12/27"
    assert format_expiry_date("1") == "1"


def test_mask_card_number() -> None:
    assert mask_card_number("4242 4242 4242 1234") == "**** **** **** 1234"
    assert mask_card_number("12") == "****"
