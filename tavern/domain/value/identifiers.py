"""Strongly typed identifiers for domain entities.

Identifiers are opaque strings so records created by the previous
document-store backend keep their ids.
"""

from typing import NewType
from uuid import uuid4

ArticleId = NewType("ArticleId", str)
CharacterId = NewType("CharacterId", str)
CommentId = NewType("CommentId", str)


def new_id() -> str:
    """Generate a fresh identifier (32 lowercase hex characters)."""
    return uuid4().hex
