"""PostgreSQL implementation of Comment repository."""

from typing import List, Optional, Sequence

from sqlalchemy import delete, insert, select

from tavern.domain.model import Comment
from tavern.domain.repository import CommentRepository
from tavern.domain.value import CommentId, TargetType
from tavern.persistence.mappers import comment_to_dict, row_to_comment
from tavern.persistence.repository.base import PostgresRepository
from tavern.persistence.tables import comments_table


class PostgresCommentRepository(PostgresRepository, CommentRepository):
    """PostgreSQL implementation of CommentRepository."""

    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID."""
        stmt = select(comments_table).where(comments_table.c.id == comment_id)
        result = await self._execute(stmt, "comment.find_by_id", comment_id=comment_id)
        row = result.fetchone()
        return row_to_comment(row._asdict()) if row else None

    async def find_by_target(
        self, target_type: TargetType, target_id: str
    ) -> List[Comment]:
        """Find all comments attached to a target, flat, oldest first."""
        stmt = (
            select(comments_table)
            .where(comments_table.c.target_type == target_type.value)
            .where(comments_table.c.target_id == target_id)
            .order_by(comments_table.c.created_at)
        )
        result = await self._execute(stmt, "comment.find_by_target", target_id=target_id)
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def find_children_of(
        self, parent_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find direct children of any of the given comments in one query."""
        if not parent_ids:
            return []

        stmt = (
            select(comments_table)
            .where(comments_table.c.parent_id.in_(list(parent_ids)))
            .order_by(comments_table.c.created_at)
        )
        result = await self._execute(
            stmt, "comment.find_children_of", parent_count=len(parent_ids)
        )
        return [row_to_comment(row._asdict()) for row in result.fetchall()]

    async def save(self, comment: Comment) -> Comment:
        """Insert a comment. Comments are never edited."""
        stmt = insert(comments_table).values(**comment_to_dict(comment))
        await self._execute(stmt, "comment.save", comment_id=comment.id)
        await self._flush("comment.save")
        return comment

    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments in one bulk operation."""
        if not comment_ids:
            return 0

        stmt = delete(comments_table).where(comments_table.c.id.in_(list(comment_ids)))
        result = await self._execute(
            stmt, "comment.delete_many", comment_count=len(comment_ids)
        )
        await self._flush("comment.delete_many")
        return result.rowcount or 0

    async def delete_by_target(self, target_type: TargetType, target_id: str) -> int:
        """Delete every comment attached to a target."""
        stmt = (
            delete(comments_table)
            .where(comments_table.c.target_type == target_type.value)
            .where(comments_table.c.target_id == target_id)
        )
        result = await self._execute(
            stmt, "comment.delete_by_target", target_id=target_id
        )
        await self._flush("comment.delete_by_target")
        return result.rowcount or 0
