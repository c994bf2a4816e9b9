"""Base repository with common database operations."""
from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NoReturn

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from storefront.core.exceptions import DatabaseException
from storefront.infra.db.session import session_scope


class BaseRepository:
    """Base repository class with common CRUD operations."""

    def __init__(self, session_factory: sessionmaker) -> None:
        """Initialize repository with a session factory.

        Args:
            session_factory: SQLAlchemy sessionmaker bound to an engine
        """
        self._session_factory = session_factory

    @contextmanager
    def _session(self, operation: str) -> Iterator[Session]:
        """Open a transactional session and wrap driver errors."""
        try:
            with session_scope(self._session_factory) as session:
                yield session
        except SQLAlchemyError as e:
            self._handle_db_error(operation, e)

    def _handle_db_error(self, operation: str, error: Exception) -> NoReturn:
        """Handle database errors consistently.

        Args:
            operation: Name of the operation that failed
            error: Original exception

        Raises:
            DatabaseException: Wrapped database error
        """
        raise DatabaseException(f"Database operation '{operation}' failed: {str(error)}") from error
