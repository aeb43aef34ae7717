"""In-memory comment repository for testing."""

from typing import Optional, Sequence

from tavern.domain.model.comment import Comment
from tavern.domain.repository.comment import CommentRepository
from tavern.domain.value import CommentId, TargetType


class InMemoryCommentRepository(CommentRepository):
    """In-memory implementation of CommentRepository for testing."""

    def __init__(self) -> None:
        self._comments: dict[CommentId, Comment] = {}

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        return self._comments.get(comment_id)

    async def find_by_target(
        self, target_type: TargetType, target_id: str
    ) -> list[Comment]:
        """Find all comments attached to a target, oldest first."""
        comments = [
            c
            for c in self._comments.values()
            if c.target_type == target_type and c.target_id == target_id
        ]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def find_children_of(self, parent_ids: Sequence[CommentId]) -> list[Comment]:
        """Find direct children of any of the given comments."""
        wanted = set(parent_ids)
        comments = [c for c in self._comments.values() if c.parent_id in wanted]
        comments.sort(key=lambda c: c.created_at)
        return comments

    async def save(self, comment: Comment) -> Comment:
        """Save a comment."""
        self._comments[comment.id] = comment
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments."""
        removed = 0
        for comment_id in set(comment_ids):
            if self._comments.pop(comment_id, None) is not None:
                removed += 1
        return removed

    async def delete_by_target(self, target_type: TargetType, target_id: str) -> int:
        """Delete every comment attached to a target."""
        doomed = [
            c.id
            for c in self._comments.values()
            if c.target_type == target_type and c.target_id == target_id
        ]
        return await self.delete_many(doomed)
