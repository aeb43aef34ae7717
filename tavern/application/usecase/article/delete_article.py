"""Delete article use case."""

import logfire
from pydantic import BaseModel

from tavern.application.usecase.base import require_owner
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService, CommentService
from tavern.domain.value import ArticleId, TargetType


class DeleteArticleRequest(BaseModel):
    """Delete article request."""

    article_id: str
    principal: Principal | None = None


class DeleteArticleResponse(BaseModel):
    """Delete article response."""

    success: bool = True


class DeleteArticleUseCase:
    """Use case for deleting an article together with its comments."""

    def __init__(
        self, article_service: ArticleService, comment_service: CommentService
    ) -> None:
        """Initialize delete article use case.

        Args:
            article_service: Article domain service
            comment_service: Comment domain service
        """
        self.article_service = article_service
        self.comment_service = comment_service

    async def execute(self, request: DeleteArticleRequest) -> DeleteArticleResponse:
        """Execute delete article flow.

        Raises:
            NotFoundError: If article not found
            NotAuthenticatedError: If the request is anonymous
            PermissionDeniedError: If the caller is neither author nor admin
        """
        article = await self.article_service.get_article(ArticleId(request.article_id))
        principal = require_owner(
            request.principal, article.author.handle, "Article", article.id
        )

        await self.article_service.delete_article(article.id)
        removed = await self.comment_service.delete_for_target(
            TargetType.ARTICLE, article.id
        )

        logfire.info(
            "Article deleted by user",
            article_id=article.id,
            handle=principal.handle,
            comments_removed=removed,
        )
        return DeleteArticleResponse()
