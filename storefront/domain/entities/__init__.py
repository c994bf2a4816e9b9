"""Domain entities - pydantic models for catalog data."""
from __future__ import annotations

from storefront.domain.entities.category import Category
from storefront.domain.entities.product import Product

__all__ = ["Category", "Product"]
