"""List articles use case."""

from datetime import datetime

from pydantic import BaseModel, Field

from tavern.config import StorageSettings
from tavern.domain.model import Article
from tavern.domain.service import ArticleService
from tavern.domain.value import Author


class ArticleItem(BaseModel):
    """Article in a response."""

    id: str
    title: str
    content: str
    category: str
    tags: list[str]
    author: Author
    views: int
    likes: int
    liked_by: list[str]
    comments_count: int
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, article: Article) -> "ArticleItem":
        """Convert a domain article."""
        return cls(**article.model_dump())


class ListArticlesRequest(BaseModel):
    """List articles request."""

    query: str | None = None
    category: str | None = None
    author: str | None = None
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ListArticlesResponse(BaseModel):
    """List articles response."""

    articles: list[ArticleItem]


class ListArticlesUseCase:
    """Use case for searching and paging through forum articles."""

    def __init__(
        self, article_service: ArticleService, storage_settings: StorageSettings
    ) -> None:
        """Initialize list articles use case.

        Args:
            article_service: Article domain service
            storage_settings: Provides the default page size
        """
        self.article_service = article_service
        self.storage_settings = storage_settings

    async def execute(self, request: ListArticlesRequest) -> ListArticlesResponse:
        """Execute list articles flow.

        Args:
            request: Search filters and page

        Returns:
            Matching articles, newest first
        """
        limit = request.limit or self.storage_settings.article_page_size
        articles = await self.article_service.list_articles(
            query=request.query,
            category=request.category,
            author_handle=request.author,
            limit=limit,
            offset=(request.page - 1) * limit,
        )
        return ListArticlesResponse(
            articles=[ArticleItem.from_domain(article) for article in articles]
        )
