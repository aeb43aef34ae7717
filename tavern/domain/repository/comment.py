"""Comment repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from tavern.domain.model.comment import Comment
from tavern.domain.value import CommentId, TargetType


class CommentRepository(ABC):
    """Repository for Comment entity.

    Defines the contract for comment persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, comment_id: CommentId) -> Optional[Comment]:
        """Find a comment by ID.

        Args:
            comment_id: The comment's unique identifier

        Returns:
            The comment if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_by_target(
        self, target_type: TargetType, target_id: str
    ) -> List[Comment]:
        """Find all comments attached to a target, flat, oldest first.

        Args:
            target_type: Kind of target entity
            target_id: Target entity ID

        Returns:
            Flat list of comments for the target
        """
        pass

    @abstractmethod
    async def find_children_of(
        self, parent_ids: Sequence[CommentId]
    ) -> List[Comment]:
        """Find direct children of any of the given comments in one query.

        Args:
            parent_ids: Parent comment IDs (one tree level)

        Returns:
            Comments whose parent_id is in ``parent_ids``
        """
        pass

    @abstractmethod
    async def save(self, comment: Comment) -> Comment:
        """Insert a comment.

        Args:
            comment: The comment to save

        Returns:
            The saved comment
        """
        pass

    @abstractmethod
    async def delete_many(self, comment_ids: Sequence[CommentId]) -> int:
        """Delete the given comments in one bulk operation.

        Args:
            comment_ids: IDs to delete

        Returns:
            Number of comments actually removed
        """
        pass

    @abstractmethod
    async def delete_by_target(self, target_type: TargetType, target_id: str) -> int:
        """Delete every comment attached to a target.

        Args:
            target_type: Kind of target entity
            target_id: Target entity ID

        Returns:
            Number of comments removed
        """
        pass
