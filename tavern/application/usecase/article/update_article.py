"""Update article use case."""

from pydantic import BaseModel

from tavern.application.usecase.base import require_owner
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService
from tavern.domain.value import ArticleId

from .list_articles import ArticleItem


class UpdateArticleRequest(BaseModel):
    """Update article request. Omitted fields are left unchanged."""

    article_id: str
    title: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] | None = None
    principal: Principal | None = None


class UpdateArticleUseCase:
    """Use case for editing an article."""

    def __init__(self, article_service: ArticleService) -> None:
        """Initialize update article use case.

        Args:
            article_service: Article domain service
        """
        self.article_service = article_service

    async def execute(self, request: UpdateArticleRequest) -> ArticleItem:
        """Execute update article flow.

        Steps:
        1. Load the article
        2. Require the author or an administrator
        3. Apply the partial update

        Raises:
            NotFoundError: If article not found
            NotAuthenticatedError: If the request is anonymous
            PermissionDeniedError: If the caller is neither author nor admin
            ValidationError: If title or content is set to an empty value
        """
        article = await self.article_service.get_article(ArticleId(request.article_id))
        require_owner(request.principal, article.author.handle, "Article", article.id)

        updated = await self.article_service.update_article(
            article,
            title=request.title,
            content=request.content,
            category=request.category,
            tags=request.tags,
        )
        return ArticleItem.from_domain(updated)
