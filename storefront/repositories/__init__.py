"""Repository layer for data access abstraction."""
from __future__ import annotations

from .base import BaseRepository
from .category_repository import CategoryRepository
from .product_repository import ProductRepository

__all__ = [
    "BaseRepository",
    "CategoryRepository",
    "ProductRepository",
]
