"""Database access: ORM models, engine and session helpers."""
from __future__ import annotations

from .models import Base, CartItemRow, CategoryRow, ProductRow
from .session import create_db_engine, create_session_factory, init_schema, session_scope

__all__ = [
    "Base",
    "CartItemRow",
    "CategoryRow",
    "ProductRow",
    "create_db_engine",
    "create_session_factory",
    "init_schema",
    "session_scope",
]
