"""Application bootstrap wiring database, cart storage and services."""
from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

from sqlalchemy.engine import Engine

from storefront.core.cart_storage import CartStorage
from storefront.core.config import Settings
from storefront.core.logging_config import logger
from storefront.infra.db import create_db_engine, create_session_factory, init_schema
from storefront.repositories import CategoryRepository, ProductRepository
from storefront.services import CartService, CatalogService, CheckoutService, OrderSubmission


@dataclass(slots=True)
class Application:
    engine: Engine
    catalog: CatalogService
    cart_service: CartService
    checkout_service: CheckoutService
    cart_storage: CartStorage


def log_order_submission(submission: OrderSubmission) -> None:
    """Default order hand-off until an order backend is wired in."""
    logger.info(
        "Order ready for %s (%s): %s items, total %s",
        submission.form.full_name,
        submission.form.email,
        len(submission.items),
        submission.total,
    )


def build_application(
    settings: Settings,
    on_complete: Callable[[OrderSubmission], None] | None = None,
    cart_storage: CartStorage | None = None,
    engine: Engine | None = None,
) -> Application:
    """Create runtime components from configuration."""
    engine = engine or create_db_engine(settings.database_url)
    if engine.dialect.name == "sqlite":
        # Local dev runs without Alembic
        init_schema(engine)
        logger.info("Using SQLite database at %s", engine.url)
    session_factory = create_session_factory(engine)

    catalog = CatalogService(ProductRepository(session_factory), CategoryRepository(session_factory))

    if cart_storage is None:
        cart_storage = CartStorage.from_settings(settings)

    return Application(
        engine=engine,
        catalog=catalog,
        cart_service=CartService(cart_storage, catalog),
        checkout_service=CheckoutService(cart_storage, on_complete or log_order_submission),
        cart_storage=cart_storage,
    )
