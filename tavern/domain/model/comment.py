"""Comment entity.

Comments are threaded discussions attached to an article or a character
with unlimited depth. Threading is a plain ``parent_id`` reference; the
nested view is materialized on read.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from tavern.domain.model.common import DomainModel, utc_now
from tavern.domain.value import Author, CommentId, TargetType


class Comment(DomainModel):
    """Comment entity.

    - target_id/target_type: the article or character the comment belongs to
    - parent_id: direct parent comment (None for top-level)
    """

    id: CommentId
    target_id: str
    target_type: TargetType
    parent_id: Optional[CommentId] = None
    content: str = Field(min_length=1, max_length=10000)
    author: Author
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)
