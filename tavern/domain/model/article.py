"""Article aggregate root.

Articles are forum posts. They carry a denormalized ``comments_count``
that is adjusted by signed deltas as comments come and go.
"""

from datetime import datetime

from pydantic import Field

from tavern.domain.model.common import DomainModel, utc_now
from tavern.domain.value import DEFAULT_CATEGORY, ArticleId, Author


class Article(DomainModel):
    """Forum article."""

    id: ArticleId
    title: str = Field(min_length=1, max_length=300)
    content: str = Field(min_length=1)
    category: str = DEFAULT_CATEGORY
    tags: list[str] = Field(default_factory=list)
    author: Author
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    liked_by: list[str] = Field(default_factory=list)
    comments_count: int = 0
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    def is_liked_by(self, handle: str) -> bool:
        """Whether the given handle has liked this article."""
        return handle in self.liked_by
