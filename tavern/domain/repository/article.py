"""Article repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional

from tavern.domain.model.article import Article
from tavern.domain.value import ArticleId


class ArticleRepository(ABC):
    """Repository for Article aggregate.

    Defines the contract for article persistence operations.
    Implementations live in the infrastructure layer.
    """

    @abstractmethod
    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID.

        Args:
            article_id: The article's unique identifier

        Returns:
            The article if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        author_handle: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Article]:
        """Find articles, newest first.

        Args:
            query: Case-insensitive substring matched against title, content and tags
            category: Exact category filter
            author_handle: Exact author handle filter
            limit: Maximum number of articles to return
            offset: Number of articles to skip

        Returns:
            List of articles matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, article: Article) -> Article:
        """Save an article (create or update).

        Counters (views, likes, comments_count) are left untouched on update;
        they only change through the atomic methods below.

        Args:
            article: The article to save

        Returns:
            The saved article
        """
        pass

    @abstractmethod
    async def delete(self, article_id: ArticleId) -> bool:
        """Delete an article.

        Args:
            article_id: The article ID to delete

        Returns:
            True if an article was removed
        """
        pass

    @abstractmethod
    async def increment_views(self, article_id: ArticleId) -> Optional[Article]:
        """Atomically increment views by 1 and return the updated article.

        Args:
            article_id: The article ID

        Returns:
            Updated article, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def adjust_comment_count(
        self, article_id: ArticleId, delta: int
    ) -> Optional[Article]:
        """Atomically add a signed delta to comments_count.

        Args:
            article_id: The article ID
            delta: Signed change (+1 on create, -N on cascade delete)

        Returns:
            Updated article, or None if it doesn't exist
        """
        pass

    @abstractmethod
    async def set_liked(
        self, article_id: ArticleId, handle: str, liked: bool
    ) -> Optional[Article]:
        """Atomically add or remove a like by ``handle``.

        A no-op when the like state already matches.

        Args:
            article_id: The article ID
            handle: Handle of the liking user
            liked: True to like, False to unlike

        Returns:
            Updated article, or None if it doesn't exist
        """
        pass
