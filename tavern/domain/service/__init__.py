"""Domain services.

Domain services contain business logic that spans multiple entities
or doesn't naturally belong to a single entity.
"""

from .article_service import ArticleService
from .card import CardCodec
from .character_service import CharacterService
from .comment_service import CommentService
from .comment_tree import CommentNode, build_comment_tree
from .jwt_service import JWTService
from .storage import FileStorage, UserLibrary, sanitize_filename

__all__ = [
    "ArticleService",
    "CardCodec",
    "CharacterService",
    "CommentNode",
    "CommentService",
    "FileStorage",
    "JWTService",
    "UserLibrary",
    "build_comment_tree",
    "sanitize_filename",
]
