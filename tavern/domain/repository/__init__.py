"""Repository interfaces.

Repository interfaces are defined in the domain layer (dependency inversion).
Implementations live in the infrastructure layer.
"""

from tavern.domain.repository.article import ArticleRepository
from tavern.domain.repository.character import CharacterRepository
from tavern.domain.repository.comment import CommentRepository

__all__ = [
    "ArticleRepository",
    "CharacterRepository",
    "CommentRepository",
]
