from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, OperationalError

from storefront.core.exceptions import DatabaseException, ProductNotFoundException
from storefront.domain.entities import Category, Product
from storefront.infra.db import CartItemRow, session_scope
from storefront.infra.db.seed import CATEGORIES, PRODUCTS, seed_catalog
from storefront.repositories import CategoryRepository, ProductRepository


def test_add_and_get_product(session_factory) -> None:
    repo = ProductRepository(session_factory)

    saved = repo.add_product(
        Product(name="Desk lamp", price=Decimal("24.90"), sale_price=Decimal("19.90"), category="Home")
    )

    assert saved.id is not None
    fetched = repo.get_product(saved.id)
    assert fetched is not None
    assert fetched.name == "Desk lamp"
    assert fetched.price == Decimal("24.90")
    assert fetched.sale_price == Decimal("19.90")


def test_get_missing_product(session_factory) -> None:
    repo = ProductRepository(session_factory)

    assert repo.get_product(999) is None
    with pytest.raises(ProductNotFoundException) as exc:
        repo.get_product_or_raise(999)
    assert exc.value.product_id == 999


def test_list_products_filters(seeded_session_factory) -> None:
    repo = ProductRepository(seeded_session_factory)

    assert len(repo.list_products()) == len(PRODUCTS)
    watches = repo.list_products(category="Watches")
    assert {p.name for p in watches} == {"Classic Leather Watch", "Smart Fitness Watch"}
    featured = repo.list_products(featured=True)
    assert [p.name for p in featured] == ["Wireless Noise-Cancelling Headphones"]


def test_seed_is_idempotent(seeded_session_factory) -> None:
    assert seed_catalog(seeded_session_factory) == 0
    assert ProductRepository(seeded_session_factory).count_products() == len(PRODUCTS)


def test_categories(seeded_session_factory) -> None:
    repo = CategoryRepository(seeded_session_factory)

    names = [c.name for c in repo.list_categories()]

    assert names == [name for name, _ in CATEGORIES]
    assert repo.get_by_name("Cameras") is not None
    assert repo.get_by_name("Shoes") is None


def test_duplicate_category_raises_database_exception(session_factory) -> None:
    repo = CategoryRepository(session_factory)
    repo.add_category(Category(name="Audio"))

    with pytest.raises(DatabaseException):
        repo.add_category(Category(name="Audio"))


def test_driver_errors_are_wrapped(session_factory, monkeypatch) -> None:
    repo = ProductRepository(session_factory)

    def _broken(*args, **kwargs):
        raise OperationalError("SELECT 1", {}, Exception("connection lost"))

    monkeypatch.setattr("sqlalchemy.orm.Session.get", _broken)

    with pytest.raises(DatabaseException) as exc:
        repo.get_product(1)
    assert "get_product" in exc.value.message


def test_cart_item_rows_round_trip(session_factory) -> None:
    with session_scope(session_factory) as session:
        session.add(CartItemRow(product_id=3, user_id="session-1"))

    with session_scope(session_factory) as session:
        row = session.scalars(select(CartItemRow).where(CartItemRow.user_id == "session-1")).one()
        assert row.product_id == 3
        assert row.quantity == 1


def test_cart_item_quantity_must_be_positive(session_factory) -> None:
    with pytest.raises(IntegrityError):
        with session_scope(session_factory) as session:
            session.add(CartItemRow(product_id=3, quantity=0, user_id="session-1"))

    with session_scope(session_factory) as session:
        assert session.scalars(select(CartItemRow)).all() == []
