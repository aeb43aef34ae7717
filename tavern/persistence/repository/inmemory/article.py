"""In-memory article repository for testing."""

from typing import Optional

from tavern.domain.model.article import Article
from tavern.domain.model.common import utc_now
from tavern.domain.repository.article import ArticleRepository
from tavern.domain.value import ArticleId


class InMemoryArticleRepository(ArticleRepository):
    """In-memory implementation of ArticleRepository for testing."""

    def __init__(self) -> None:
        self._articles: dict[ArticleId, Article] = {}

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        return self._articles.get(article_id)

    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        author_handle: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> list[Article]:
        """Find articles, newest first."""
        articles = list(self._articles.values())

        if query:
            needle = query.lower()
            articles = [
                a
                for a in articles
                if needle in a.title.lower()
                or needle in a.content.lower()
                or any(needle in tag.lower() for tag in a.tags)
            ]
        if category:
            articles = [a for a in articles if a.category == category]
        if author_handle:
            articles = [a for a in articles if a.author.handle == author_handle]

        articles.sort(key=lambda a: a.created_at, reverse=True)
        return articles[offset : offset + limit]

    async def save(self, article: Article) -> Article:
        """Save or update an article, keeping stored counters on update."""
        existing = self._articles.get(article.id)
        if existing:
            article = article.model_copy(
                update={
                    "views": existing.views,
                    "likes": existing.likes,
                    "liked_by": existing.liked_by,
                    "comments_count": existing.comments_count,
                }
            )
        self._articles[article.id] = article
        return article

    async def delete(self, article_id: ArticleId) -> bool:
        """Delete an article."""
        return self._articles.pop(article_id, None) is not None

    def _update(self, article_id: ArticleId, **changes) -> Optional[Article]:
        article = self._articles.get(article_id)
        if not article:
            return None
        updated = article.model_copy(update=changes)
        self._articles[article_id] = updated
        return updated

    async def increment_views(self, article_id: ArticleId) -> Optional[Article]:
        """Increment views by 1."""
        article = self._articles.get(article_id)
        if not article:
            return None
        return self._update(article_id, views=article.views + 1)

    async def adjust_comment_count(
        self, article_id: ArticleId, delta: int
    ) -> Optional[Article]:
        """Add a signed delta to comments_count."""
        article = self._articles.get(article_id)
        if not article:
            return None
        return self._update(article_id, comments_count=article.comments_count + delta)

    async def set_liked(
        self, article_id: ArticleId, handle: str, liked: bool
    ) -> Optional[Article]:
        """Add or remove a like by ``handle``."""
        article = self._articles.get(article_id)
        if not article or article.is_liked_by(handle) == liked:
            return article

        if liked:
            return self._update(
                article_id,
                liked_by=[*article.liked_by, handle],
                likes=article.likes + 1,
                updated_at=utc_now(),
            )
        return self._update(
            article_id,
            liked_by=[h for h in article.liked_by if h != handle],
            likes=max(article.likes - 1, 0),
            updated_at=utc_now(),
        )
