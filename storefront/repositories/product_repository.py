"""Product repository for catalog database operations."""
from __future__ import annotations

from sqlalchemy import func, select

from storefront.core.exceptions import ProductNotFoundException
from storefront.domain.entities import Product
from storefront.infra.db.models import ProductRow

from .base import BaseRepository


class ProductRepository(BaseRepository):
    """Repository for product-related database operations."""

    def get_product(self, product_id: int) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Product ID

        Returns:
            Product or None if not found

        Raises:
            DatabaseException: If database operation fails
        """
        with self._session("get_product") as session:
            row = session.get(ProductRow, product_id)
            return Product.model_validate(row) if row else None

    def get_product_or_raise(self, product_id: int) -> Product:
        """Get product by ID or raise exception.

        Raises:
            ProductNotFoundException: If product not found
            DatabaseException: If database operation fails
        """
        product = self.get_product(product_id)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product

    def list_products(
        self, category: str | None = None, featured: bool | None = None
    ) -> list[Product]:
        """List products, optionally filtered by category label or featured flag."""
        stmt = select(ProductRow).order_by(ProductRow.id)
        if category:
            stmt = stmt.where(ProductRow.category == category)
        if featured is not None:
            stmt = stmt.where(ProductRow.featured.is_(featured))
        with self._session("list_products") as session:
            return [Product.model_validate(row) for row in session.scalars(stmt)]

    def add_product(self, product: Product) -> Product:
        """Insert a product and return it with its generated ID."""
        with self._session("add_product") as session:
            row = ProductRow(**product.model_dump(exclude={"id"}))
            session.add(row)
            session.flush()
            return Product.model_validate(row)

    def count_products(self) -> int:
        with self._session("count_products") as session:
            return int(session.scalar(select(func.count()).select_from(ProductRow)) or 0)
