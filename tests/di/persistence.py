"""In-memory persistence for tests."""

from dishka import Scope, provide

from tavern.domain.repository import (
    ArticleRepository,
    CharacterRepository,
    CommentRepository,
)
from tavern.persistence.repository.inmemory import (
    InMemoryArticleRepository,
    InMemoryCharacterRepository,
    InMemoryCommentRepository,
)
from tavern.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Dict-backed repositories.

    APP scope keeps records across the several requests an API test makes
    against one container. Each test builds its own container.
    """

    __is_mock__ = True

    scope = Scope.APP

    articles = provide(InMemoryArticleRepository, provides=ArticleRepository)
    characters = provide(InMemoryCharacterRepository, provides=CharacterRepository)
    comments = provide(InMemoryCommentRepository, provides=CommentRepository)
