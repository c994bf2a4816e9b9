from __future__ import annotations

from decimal import Decimal

from storefront.core.money import format_price, to_decimal, to_money


def test_to_decimal_keeps_float_digits() -> None:
    assert to_decimal(19.99) == Decimal("19.99")
    assert to_decimal("5.50") == Decimal("5.50")
    assert to_decimal(None) == Decimal("0")
    assert to_decimal("abc") == Decimal("0")


def test_to_money_rounds_half_up() -> None:
    assert to_money("2.345") == Decimal("2.35")
    assert to_money(31) == Decimal("31.00")


def test_format_price() -> None:
    assert format_price(Decimal("31")) == "$31.00"
    assert format_price("5.5", currency="€") == "€5.50"
