"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy import Executable, Result
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from tavern.persistence.error import StoreError


def like_pattern(text: str) -> str:
    """Build a substring ILIKE pattern with wildcards in ``text`` escaped."""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PostgresRepository:
    """Base class holding the request session."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Executable, operation: str, **context: Any) -> Result:
        """Execute a statement, translating driver failures into StoreError.

        Args:
            stmt: Statement to execute
            operation: Name of the repository operation (for logs)
            **context: Extra attributes logged on failure

        Raises:
            StoreError: If the database rejects the statement
        """
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error(
                "Database operation failed",
                operation=operation,
                error=str(e),
                **context,
            )
            raise StoreError(operation, e) from e

    async def _flush(self, operation: str) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error("Database flush failed", operation=operation, error=str(e))
            raise StoreError(operation, e) from e
