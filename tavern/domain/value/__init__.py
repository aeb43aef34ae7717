"""Domain value objects."""

from tavern.domain.value.identifiers import ArticleId, CharacterId, CommentId, new_id
from tavern.domain.value.types import (
    DEFAULT_CATEGORY,
    FORUM_CATEGORIES,
    Author,
    CardFormat,
    ForumCategory,
    StorageBucket,
    TargetType,
)

__all__ = [
    # Identifiers
    "ArticleId",
    "CharacterId",
    "CommentId",
    "new_id",
    # Types
    "Author",
    "CardFormat",
    "DEFAULT_CATEGORY",
    "FORUM_CATEGORIES",
    "ForumCategory",
    "StorageBucket",
    "TargetType",
]
