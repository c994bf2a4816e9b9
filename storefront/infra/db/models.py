"""
SQLAlchemy models for the storefront schema.

Used by the repositories at runtime and by Alembic for migrations.
"""
from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    Float,
    Index,
    Integer,
    Numeric,
    Text,
)
from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class ProductRow(Base):
    """Product model."""

    __tablename__ = "products"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False)
    description = Column(Text, nullable=False)
    price = Column(Numeric(10, 2), nullable=False)
    sale_price = Column(Numeric(10, 2), nullable=True)
    image_url = Column(Text, nullable=False)
    category = Column(Text, nullable=False)
    rating = Column(Float, nullable=False)
    reviews = Column(Integer, nullable=False)
    in_stock = Column(Boolean, nullable=False, default=True)
    featured = Column(Boolean, nullable=False, default=False)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint(
            "sale_price IS NULL OR (sale_price >= 0 AND sale_price <= price)",
            name="ck_products_sale_price_range",
        ),
        Index("ix_products_category", "category"),
        Index("ix_products_featured", "featured"),
    )


class CategoryRow(Base):
    """Category model."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, unique=True)
    image_url = Column(Text, nullable=False)


class CartItemRow(Base):
    """Cart item model, keyed by shopper session."""

    __tablename__ = "cart_items"

    id = Column(Integer, primary_key=True, autoincrement=True)
    product_id = Column(Integer, nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    user_id = Column(Text, nullable=False)

    __table_args__ = (
        CheckConstraint("quantity >= 1", name="ck_cart_items_quantity_positive"),
        Index("ix_cart_items_user_id", "user_id"),
    )
