"""Comment domain service."""

import logfire

from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.model import Comment
from tavern.domain.repository import CommentRepository
from tavern.domain.value import Author, CommentId, TargetType, new_id

from .comment_tree import CommentNode, build_comment_tree


class CommentService:
    """Domain service for comment operations.

    Shared by forum articles and public characters; the target is always
    named by ``(target_type, target_id)``.
    """

    def __init__(self, comment_repository: CommentRepository) -> None:
        """Initialize comment service.

        Args:
            comment_repository: Comment repository
        """
        self.comment_repository = comment_repository

    async def create_comment(
        self,
        target_type: TargetType,
        target_id: str,
        author: Author,
        content: str,
        parent_id: CommentId | None = None,
    ) -> Comment:
        """Create a comment on a target or reply to another comment.

        Args:
            target_type: Kind of target entity
            target_id: Target entity ID
            author: Comment author
            content: Comment text (trimmed)
            parent_id: Parent comment ID for replies (None for top-level)

        Returns:
            Created comment

        Raises:
            ValidationError: If content is empty or the parent is invalid
        """
        with logfire.span(
            "comment_service.create_comment",
            target_type=target_type.value,
            target_id=target_id,
            author_handle=author.handle,
            parent_id=parent_id,
        ):
            content = content.strip()
            if not content:
                raise ValidationError("Comment content is required")

            if parent_id:
                parent = await self.comment_repository.find_by_id(parent_id)
                if not parent:
                    logfire.warn(
                        "Parent comment not found",
                        parent_id=parent_id,
                        target_id=target_id,
                    )
                    raise ValidationError("Parent comment not found")
                if parent.target_type != target_type or parent.target_id != target_id:
                    logfire.warn(
                        "Parent comment belongs to another target",
                        parent_id=parent_id,
                        parent_target_id=parent.target_id,
                        target_id=target_id,
                    )
                    raise ValidationError("Parent comment does not belong to this target")

            comment = Comment(
                id=CommentId(new_id()),
                target_id=target_id,
                target_type=target_type,
                parent_id=parent_id,
                content=content,
                author=author,
            )

            saved = await self.comment_repository.save(comment)
            logfire.info(
                "Comment created",
                comment_id=saved.id,
                target_type=target_type.value,
                target_id=target_id,
                author_handle=author.handle,
            )
            return saved

    async def get_comment(self, comment_id: CommentId) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: If comment not found
        """
        with logfire.span("comment_service.get_comment", comment_id=comment_id):
            comment = await self.comment_repository.find_by_id(comment_id)
            if not comment:
                logfire.warn("Comment not found", comment_id=comment_id)
                raise NotFoundError("Comment", comment_id)
            return comment

    async def get_comment_tree(
        self, target_type: TargetType, target_id: str
    ) -> list[CommentNode]:
        """Get the comments of a target as a reply tree.

        Args:
            target_type: Kind of target entity
            target_id: Target entity ID

        Returns:
            Root comment nodes, oldest first, replies nested to full depth
        """
        with logfire.span(
            "comment_service.get_comment_tree",
            target_type=target_type.value,
            target_id=target_id,
        ):
            comments = await self.comment_repository.find_by_target(
                target_type, target_id
            )
            tree = build_comment_tree(comments)
            logfire.info(
                "Comment tree built",
                target_id=target_id,
                count=len(comments),
                root_count=len(tree),
            )
            return tree

    async def collect_thread(self, root_id: CommentId) -> list[CommentId]:
        """Collect a comment and all of its descendants.

        Walks the tree one level at a time: each iteration issues a single
        children query for the whole frontier.

        Args:
            root_id: Comment at the top of the thread

        Returns:
            IDs of the root and every descendant, root first
        """
        thread = [root_id]
        seen = {root_id}
        frontier = [root_id]
        depth = 0

        while frontier:
            children = await self.comment_repository.find_children_of(frontier)
            frontier = []
            for child in children:
                if child.id in seen:
                    continue
                seen.add(child.id)
                thread.append(child.id)
                frontier.append(child.id)
            if frontier:
                depth += 1

        logfire.debug(
            "Comment thread collected", root_id=root_id, size=len(thread), depth=depth
        )
        return thread

    async def delete_thread(self, comment: Comment) -> int:
        """Delete a comment together with its entire reply subtree.

        Args:
            comment: Comment at the top of the thread

        Returns:
            Number of comments removed
        """
        with logfire.span(
            "comment_service.delete_thread",
            comment_id=comment.id,
            target_type=comment.target_type.value,
            target_id=comment.target_id,
        ):
            thread = await self.collect_thread(comment.id)
            deleted = await self.comment_repository.delete_many(thread)
            logfire.info(
                "Comment thread deleted",
                comment_id=comment.id,
                deleted_count=deleted,
            )
            return deleted

    async def delete_for_target(self, target_type: TargetType, target_id: str) -> int:
        """Delete every comment attached to a target.

        Returns:
            Number of comments removed
        """
        with logfire.span(
            "comment_service.delete_for_target",
            target_type=target_type.value,
            target_id=target_id,
        ):
            deleted = await self.comment_repository.delete_by_target(
                target_type, target_id
            )
            logfire.info(
                "Target comments deleted", target_id=target_id, deleted_count=deleted
            )
            return deleted
