from __future__ import annotations

from decimal import Decimal

import pytest

from storefront.core.exceptions import ProductNotFoundException
from storefront.domain.cart import count_cart_quantity
from storefront.integrations.redis_cart import RedisCartStorage
from storefront.repositories import CategoryRepository, ProductRepository
from storefront.services import CartService, CatalogService, CheckoutService
from storefront.services.checkout_service import EMPTY_CART_MESSAGE, describe_payment


def _checkout_fields(**overrides) -> dict:
    fields = {
        "firstName": "Jane",
        "lastName": "Doe",
        "email": "jane.doe@gmail.com",
        "phone": "5551234567",
        "address": "12 Market Street",
        "city": "Springfield",
        "state": "IL",
        "zip": "62701",
        "country": "US",
        "paymentMethod": "credit-card",
        "cardNumber": "4242424242424242",
        "expiryDate": "12/27",
        "cvc": "123",
        "cardName": "Jane Doe",
        "terms": True,
    }
    fields.update(overrides)
    return fields


@pytest.fixture()
def catalog(seeded_session_factory) -> CatalogService:
    return CatalogService(
        ProductRepository(seeded_session_factory), CategoryRepository(seeded_session_factory)
    )


@pytest.fixture()
def storage() -> RedisCartStorage:
    return RedisCartStorage(redis_url=None)


def _product_id(catalog: CatalogService, name: str) -> int:
    return next(p.id for p in catalog.list_products() if p.name == name)


def test_catalog_featured_product(catalog) -> None:
    featured = catalog.get_featured_product()

    assert featured is not None
    assert featured.name == "Wireless Noise-Cancelling Headphones"
    assert len(catalog.list_categories()) == 4


def test_catalog_unknown_product(catalog) -> None:
    with pytest.raises(ProductNotFoundException):
        catalog.get_product(12345)


def test_cart_service_summary(catalog, storage) -> None:
    cart = CartService(storage, catalog)
    headphones = _product_id(catalog, "Wireless Noise-Cancelling Headphones")
    cable = _product_id(catalog, "Braided USB-C Cable")

    cart.add_product("s1", headphones, 1)
    summary = cart.add_product("s1", cable, 2)

    assert summary.items_count == 2
    assert summary.quantity == 3
    assert summary.subtotal == Decimal("237.99")
    assert summary.savings == Decimal("50.00")


def test_cart_service_update_remove_clear(catalog, storage) -> None:
    cart = CartService(storage, catalog)
    cable = _product_id(catalog, "Braided USB-C Cable")
    cart.add_product("s2", cable, 1)

    assert cart.update_quantity("s2", cable, 4).quantity == 4
    assert cart.update_quantity("s2", cable, 0).quantity == 4
    assert cart.remove_item("s2", cable).is_empty

    cart.add_product("s2", cable, 1)
    assert cart.clear("s2").is_empty


def test_cart_service_unknown_product(catalog, storage) -> None:
    cart = CartService(storage, catalog)

    with pytest.raises(ProductNotFoundException):
        cart.add_product("s3", 9999, 1)
    assert cart.summary("s3").is_empty


def test_checkout_submits_and_clears_cart(catalog, storage) -> None:
    submissions = []
    cart = CartService(storage, catalog)
    checkout = CheckoutService(storage, on_complete=submissions.append)
    cart.add_product("s4", _product_id(catalog, "Sport Earbuds"), 2)

    result = checkout.submit("s4", _checkout_fields())

    assert result.is_valid
    assert len(submissions) == 1
    assert submissions[0].total == Decimal("178.00")
    assert submissions[0].user_id == "s4"
    assert storage.get_cart("s4") == []


def test_checkout_with_empty_cart(storage) -> None:
    submissions = []
    checkout = CheckoutService(storage, on_complete=submissions.append)

    result = checkout.submit("nobody", _checkout_fields())

    assert result.errors == {"cart": EMPTY_CART_MESSAGE}
    assert submissions == []


def test_invalid_checkout_keeps_cart(catalog, storage) -> None:
    submissions = []
    cart = CartService(storage, catalog)
    checkout = CheckoutService(storage, on_complete=submissions.append)
    cart.add_product("s5", _product_id(catalog, "Sport Earbuds"), 1)

    result = checkout.submit("s5", _checkout_fields(cardNumber="123"))

    assert result.errors == {"card_number": "Card number must be 16 digits"}
    assert submissions == []
    assert count_cart_quantity(storage.get_cart("s5")) == 1


def test_failed_hand_off_keeps_cart(catalog, storage) -> None:
    def _fail(_submission):
        raise RuntimeError("order backend down")

    cart = CartService(storage, catalog)
    checkout = CheckoutService(storage, on_complete=_fail)
    cart.add_product("s6", _product_id(catalog, "Sport Earbuds"), 1)

    with pytest.raises(RuntimeError):
        checkout.submit("s6", _checkout_fields())
    assert count_cart_quantity(storage.get_cart("s6")) == 1


def test_describe_payment_masks_card(storage) -> None:
    from storefront.domain.checkout import validate_checkout

    form = validate_checkout(_checkout_fields()).form

    assert describe_payment(form) == "credit-card **** **** **** 4242"
