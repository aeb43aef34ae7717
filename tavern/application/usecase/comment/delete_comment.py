"""Delete comment use case."""

import logfire
from pydantic import BaseModel, Field

from tavern.application.usecase.base import require_owner
from tavern.domain.error import NotFoundError
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService, CommentService
from tavern.domain.value import ArticleId, CommentId, TargetType


class DeleteCommentRequest(BaseModel):
    """Delete comment request.

    ``target_type``/``target_id`` are set when the route is scoped to a
    target; the comment must then belong to it.
    """

    comment_id: str
    principal: Principal | None = None
    target_type: TargetType | None = None
    target_id: str | None = None


class DeleteCommentResponse(BaseModel):
    """Delete comment response."""

    success: bool = True
    deleted_count: int = Field(serialization_alias="deletedCount")


class DeleteCommentUseCase:
    """Use case for deleting a comment together with all of its replies."""

    def __init__(
        self, comment_service: CommentService, article_service: ArticleService
    ) -> None:
        """Initialize delete comment use case.

        Args:
            comment_service: Comment domain service
            article_service: Article domain service
        """
        self.comment_service = comment_service
        self.article_service = article_service

    async def execute(self, request: DeleteCommentRequest) -> DeleteCommentResponse:
        """Execute delete comment flow.

        Steps:
        1. Load the comment (and check it belongs to the scoped target)
        2. Require the author or an administrator
        3. Cascade delete the comment subtree
        4. Decrease the article's comment counter by the removed count

        Args:
            request: Delete comment request

        Returns:
            Number of comments removed

        Raises:
            NotFoundError: If the comment doesn't exist (or not on this target)
            NotAuthenticatedError: If the request is anonymous
            PermissionDeniedError: If the caller is neither author nor admin
        """
        comment = await self.comment_service.get_comment(CommentId(request.comment_id))

        if request.target_id is not None and (
            comment.target_type != request.target_type
            or comment.target_id != request.target_id
        ):
            raise NotFoundError("Comment", request.comment_id)

        principal = require_owner(
            request.principal, comment.author.handle, "Comment", comment.id
        )

        deleted = await self.comment_service.delete_thread(comment)

        if comment.target_type == TargetType.ARTICLE:
            await self.article_service.adjust_comment_count(
                ArticleId(comment.target_id), -deleted
            )

        logfire.info(
            "Comment deleted by user",
            comment_id=comment.id,
            handle=principal.handle,
            deleted_count=deleted,
        )
        return DeleteCommentResponse(deleted_count=deleted)
