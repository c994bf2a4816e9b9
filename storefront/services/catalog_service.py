"""Read-only catalog lookups for the storefront pages."""
from __future__ import annotations

from storefront.domain.entities import Category, Product
from storefront.repositories import CategoryRepository, ProductRepository


class CatalogService:
    """Products and categories as the storefront shows them."""

    def __init__(self, product_repo: ProductRepository, category_repo: CategoryRepository):
        self._product_repo = product_repo
        self._category_repo = category_repo

    def list_products(
        self, category: str | None = None, featured: bool | None = None
    ) -> list[Product]:
        return self._product_repo.list_products(category=category, featured=featured)

    def get_product(self, product_id: int) -> Product:
        """Raises ProductNotFoundException for unknown IDs."""
        return self._product_repo.get_product_or_raise(product_id)

    def get_featured_product(self) -> Product | None:
        """Product for the home page hero, if any is flagged as featured."""
        featured = self._product_repo.list_products(featured=True)
        return featured[0] if featured else None

    def list_categories(self) -> list[Category]:
        return self._category_repo.list_categories()
