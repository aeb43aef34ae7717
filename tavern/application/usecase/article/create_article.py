"""Create article use case."""

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService

from .list_articles import ArticleItem


class CreateArticleRequest(BaseModel):
    """Create article request."""

    title: str
    content: str
    category: str | None = None
    tags: list[str] = []
    principal: Principal | None = None


class CreateArticleUseCase:
    """Use case for publishing a forum article."""

    def __init__(self, article_service: ArticleService) -> None:
        """Initialize create article use case.

        Args:
            article_service: Article domain service
        """
        self.article_service = article_service

    async def execute(self, request: CreateArticleRequest) -> ArticleItem:
        """Execute create article flow.

        Raises:
            NotAuthenticatedError: If the request is anonymous
            ValidationError: If title or content is empty
        """
        principal = require_principal(request.principal, "create an article")
        article = await self.article_service.create_article(
            author=principal.as_author(),
            title=request.title,
            content=request.content,
            category=request.category,
            tags=request.tags,
        )
        return ArticleItem.from_domain(article)
