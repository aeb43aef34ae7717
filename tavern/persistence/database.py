"""Async PostgreSQL engine and sessions."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tavern.config import SERVICE_NAME, DatabaseSettings


def create_engine(database: DatabaseSettings) -> AsyncEngine:
    """Create the pooled engine.

    Connections are pinned to UTC so ``timestamptz`` values come back in
    the zone the domain writes them in.

    Args:
        database: Connection and pool settings

    Returns:
        Async engine over asyncpg
    """
    return create_async_engine(
        database.url,
        echo=database.echo,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        connect_args={
            "server_settings": {"application_name": SERVICE_NAME, "timezone": "UTC"}
        },
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    # Repositories run Core statements, so nothing needs refreshing after commit
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)


class Transaction:
    """Commit decision for one request's session.

    Routes answer failures with an HTTP error response instead of letting
    the exception escape the request, so the error handler flags the
    transaction here and the session rolls back instead of committing.
    """

    def __init__(self) -> None:
        self.rollback_only = False

    def mark_rollback_only(self) -> None:
        self.rollback_only = True
