"""PostgreSQL repository implementations."""

from tavern.persistence.repository.article import PostgresArticleRepository
from tavern.persistence.repository.character import PostgresCharacterRepository
from tavern.persistence.repository.comment import PostgresCommentRepository

__all__ = [
    "PostgresArticleRepository",
    "PostgresCharacterRepository",
    "PostgresCommentRepository",
]
