"""In-memory repository implementations for testing."""

from .article import InMemoryArticleRepository
from .character import InMemoryCharacterRepository
from .comment import InMemoryCommentRepository

__all__ = [
    "InMemoryArticleRepository",
    "InMemoryCharacterRepository",
    "InMemoryCommentRepository",
]
