"""Domain model entities."""

from tavern.domain.model.article import Article
from tavern.domain.model.character import Character
from tavern.domain.model.comment import Comment
from tavern.domain.model.principal import Principal

__all__ = [
    "Article",
    "Character",
    "Comment",
    "Principal",
]
