"""PostgreSQL providers."""

from collections.abc import AsyncIterator

import logfire
from dishka import Scope, provide
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tavern.config import DatabaseSettings
from tavern.domain.repository import (
    ArticleRepository,
    CharacterRepository,
    CommentRepository,
)
from tavern.persistence.database import (
    Transaction,
    create_engine,
    create_session_factory,
)
from tavern.persistence.error import StoreError
from tavern.persistence.repository import (
    PostgresArticleRepository,
    PostgresCharacterRepository,
    PostgresCommentRepository,
)
from tavern.util.di.base import ProviderBase
from tavern.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Repositories for articles, characters and comments."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Repositories backed by PostgreSQL, one transaction per request."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    async def get_engine(self, database: DatabaseSettings) -> AsyncIterator[AsyncEngine]:
        """Provide the engine, disposed when the container closes."""
        engine = create_engine(database)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()
        logfire.info("Database engine disposed")

    @provide(scope=Scope.APP)
    def get_session_factory(self, engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        transaction: Transaction,
    ) -> AsyncIterator[AsyncSession]:
        """Provide the request's session.

        Everything a request wrote commits together when it finishes, so a
        thread deletion and the matching counter update land atomically.
        The session rolls back instead when an exception escapes the request
        or when the request was answered with an HTTP error and the error
        handler marked ``transaction`` rollback-only.
        """
        async with session_factory() as session:
            # The container sends back the exception that ended the request
            error = yield session
            if error is not None or transaction.rollback_only:
                await session.rollback()
                logfire.info("Request failed, transaction rolled back")
                return

            try:
                await session.commit()
            except SQLAlchemyError as e:
                await session.rollback()
                logfire.error("Request transaction failed", error=str(e))
                raise StoreError("commit", e) from e

    articles = provide(
        PostgresArticleRepository, provides=ArticleRepository, scope=Scope.REQUEST
    )
    characters = provide(
        PostgresCharacterRepository, provides=CharacterRepository, scope=Scope.REQUEST
    )
    comments = provide(
        PostgresCommentRepository, provides=CommentRepository, scope=Scope.REQUEST
    )
