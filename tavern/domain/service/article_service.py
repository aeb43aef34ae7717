"""Article domain service."""

from typing import Sequence

import logfire

from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.model import Article
from tavern.domain.model.common import utc_now
from tavern.domain.repository import ArticleRepository
from tavern.domain.value import DEFAULT_CATEGORY, ArticleId, Author, new_id


def _clean_tags(tags: Sequence[str] | None) -> list[str]:
    return [tag.strip() for tag in tags or () if tag and tag.strip()]


class ArticleService:
    """Domain service for forum article operations."""

    def __init__(self, article_repository: ArticleRepository) -> None:
        """Initialize article service.

        Args:
            article_repository: Article repository
        """
        self.article_repository = article_repository

    async def list_articles(
        self,
        query: str | None = None,
        category: str | None = None,
        author_handle: str | None = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Article]:
        """List articles, newest first.

        Args:
            query: Free-text search over title, content and tags
            category: Category filter
            author_handle: Author filter
            limit: Page size
            offset: Number of articles to skip

        Returns:
            Matching articles
        """
        with logfire.span(
            "article_service.list_articles",
            query=query,
            category=category,
            author_handle=author_handle,
            limit=limit,
            offset=offset,
        ):
            articles = await self.article_repository.find_all(
                query=query.strip() if query else None,
                category=category or None,
                author_handle=author_handle or None,
                limit=limit,
                offset=offset,
            )
            logfire.info("Articles listed", count=len(articles))
            return articles

    async def get_article(self, article_id: ArticleId) -> Article:
        """Get an article by ID.

        Raises:
            NotFoundError: If article not found
        """
        with logfire.span("article_service.get_article", article_id=article_id):
            article = await self.article_repository.find_by_id(article_id)
            if not article:
                logfire.warn("Article not found", article_id=article_id)
                raise NotFoundError("Article", article_id)
            return article

    async def view_article(self, article_id: ArticleId) -> Article:
        """Record a view and return the article.

        Raises:
            NotFoundError: If article not found
        """
        with logfire.span("article_service.view_article", article_id=article_id):
            article = await self.article_repository.increment_views(article_id)
            if not article:
                logfire.warn("Article not found", article_id=article_id)
                raise NotFoundError("Article", article_id)
            return article

    async def create_article(
        self,
        author: Author,
        title: str,
        content: str,
        category: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> Article:
        """Create a new article.

        Args:
            author: Article author
            title: Article title (trimmed, required)
            content: Article body (trimmed, required)
            category: Category id, defaults to discussion
            tags: Free-form tags

        Returns:
            Created article

        Raises:
            ValidationError: If title or content is empty
        """
        with logfire.span(
            "article_service.create_article", author_handle=author.handle
        ):
            title = (title or "").strip()
            content = (content or "").strip()
            if not title or not content:
                raise ValidationError("Title and content are required")

            article = Article(
                id=ArticleId(new_id()),
                title=title,
                content=content,
                category=category or DEFAULT_CATEGORY,
                tags=_clean_tags(tags),
                author=author,
            )
            saved = await self.article_repository.save(article)
            logfire.info(
                "Article created", article_id=saved.id, author_handle=author.handle
            )
            return saved

    async def update_article(
        self,
        article: Article,
        title: str | None = None,
        content: str | None = None,
        category: str | None = None,
        tags: Sequence[str] | None = None,
    ) -> Article:
        """Apply a partial update to an article.

        Only the fields that are provided change.

        Raises:
            ValidationError: If title or content is updated to an empty value
        """
        with logfire.span("article_service.update_article", article_id=article.id):
            updates: dict = {"updated_at": utc_now()}
            if title is not None:
                title = title.strip()
                if not title:
                    raise ValidationError("Title cannot be empty")
                updates["title"] = title
            if content is not None:
                content = content.strip()
                if not content:
                    raise ValidationError("Content cannot be empty")
                updates["content"] = content
            if category:
                updates["category"] = category
            if tags is not None:
                updates["tags"] = _clean_tags(tags)

            saved = await self.article_repository.save(article.model_copy(update=updates))
            logfire.info(
                "Article updated", article_id=article.id, fields=sorted(updates)
            )
            return saved

    async def delete_article(self, article_id: ArticleId) -> None:
        """Delete an article record.

        Raises:
            NotFoundError: If article not found
        """
        with logfire.span("article_service.delete_article", article_id=article_id):
            if not await self.article_repository.delete(article_id):
                raise NotFoundError("Article", article_id)
            logfire.info("Article deleted", article_id=article_id)

    async def adjust_comment_count(self, article_id: ArticleId, delta: int) -> None:
        """Atomically add a signed delta to an article's comment counter.

        Uses a SQL-level increment; the counter is never recomputed.

        Args:
            article_id: Article ID
            delta: +1 on comment creation, -N after a cascade delete
        """
        with logfire.span(
            "article_service.adjust_comment_count", article_id=article_id, delta=delta
        ):
            if delta == 0:
                return
            updated = await self.article_repository.adjust_comment_count(
                article_id, delta
            )
            if updated is None:
                logfire.warn(
                    "Article not found for comment count adjustment",
                    article_id=article_id,
                    delta=delta,
                )
                return
            logfire.info(
                "Comment count adjusted",
                article_id=article_id,
                delta=delta,
                new_count=updated.comments_count,
            )

    async def toggle_like(self, article: Article, handle: str) -> Article:
        """Like the article, or remove the like if ``handle`` already liked it.

        Returns:
            Updated article

        Raises:
            NotFoundError: If the article disappeared in the meantime
        """
        with logfire.span(
            "article_service.toggle_like", article_id=article.id, handle=handle
        ):
            liked = not article.is_liked_by(handle)
            updated = await self.article_repository.set_liked(article.id, handle, liked)
            if not updated:
                raise NotFoundError("Article", article.id)
            logfire.info(
                "Article like toggled",
                article_id=article.id,
                handle=handle,
                liked=liked,
                likes=updated.likes,
            )
            return updated
