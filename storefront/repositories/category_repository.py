"""Category repository."""
from __future__ import annotations

from sqlalchemy import select

from storefront.domain.entities import Category
from storefront.infra.db.models import CategoryRow

from .base import BaseRepository


class CategoryRepository(BaseRepository):
    """Repository for category lookups."""

    def list_categories(self) -> list[Category]:
        with self._session("list_categories") as session:
            rows = session.scalars(select(CategoryRow).order_by(CategoryRow.id))
            return [Category.model_validate(row) for row in rows]

    def get_by_name(self, name: str) -> Category | None:
        with self._session("get_category_by_name") as session:
            row = session.scalars(select(CategoryRow).where(CategoryRow.name == name)).first()
            return Category.model_validate(row) if row else None

    def add_category(self, category: Category) -> Category:
        """Insert a category; names are unique, duplicates raise DatabaseException."""
        with self._session("add_category") as session:
            row = CategoryRow(name=category.name, image_url=category.image_url)
            session.add(row)
            session.flush()
            return Category.model_validate(row)
