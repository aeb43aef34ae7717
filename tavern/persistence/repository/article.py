"""PostgreSQL implementation of Article repository."""

from typing import List, Optional

import logfire
from sqlalchemy import delete, desc, func, insert, or_, select, update

from tavern.domain.model import Article
from tavern.domain.model.common import utc_now
from tavern.domain.repository import ArticleRepository
from tavern.domain.value import ArticleId
from tavern.persistence.mappers import article_to_dict, row_to_article
from tavern.persistence.repository.base import PostgresRepository, like_pattern
from tavern.persistence.tables import articles_table

# Counters only change through the atomic update methods
_COUNTER_FIELDS = {"views", "likes", "liked_by", "comments_count"}


class PostgresArticleRepository(PostgresRepository, ArticleRepository):
    """PostgreSQL implementation of ArticleRepository."""

    async def find_by_id(self, article_id: ArticleId) -> Optional[Article]:
        """Find an article by ID."""
        stmt = select(articles_table).where(articles_table.c.id == article_id)
        result = await self._execute(stmt, "article.find_by_id", article_id=article_id)
        row = result.fetchone()
        return row_to_article(row._asdict()) if row else None

    async def find_all(
        self,
        query: Optional[str] = None,
        category: Optional[str] = None,
        author_handle: Optional[str] = None,
        limit: int = 100,
        offset: int = 0,
    ) -> List[Article]:
        """Find articles with filtering and pagination, newest first."""
        with logfire.span(
            "article_repository.find_all",
            query=query,
            category=category,
            author_handle=author_handle,
            limit=limit,
            offset=offset,
        ):
            stmt = select(articles_table)

            if query:
                pattern = like_pattern(query)
                stmt = stmt.where(
                    or_(
                        articles_table.c.title.ilike(pattern, escape="\\"),
                        articles_table.c.content.ilike(pattern, escape="\\"),
                        func.array_to_string(articles_table.c.tags, " ").ilike(
                            pattern, escape="\\"
                        ),
                    )
                )
            if category:
                stmt = stmt.where(articles_table.c.category == category)
            if author_handle:
                stmt = stmt.where(articles_table.c.author_handle == author_handle)

            stmt = (
                stmt.order_by(desc(articles_table.c.created_at))
                .limit(limit)
                .offset(offset)
            )

            result = await self._execute(stmt, "article.find_all")
            articles = [row_to_article(row._asdict()) for row in result.fetchall()]
            logfire.info("Found articles", count=len(articles))
            return articles

    async def save(self, article: Article) -> Article:
        """Save an article (create or update)."""
        existing = await self.find_by_id(article.id)

        if existing:
            values = {
                k: v
                for k, v in article_to_dict(article).items()
                if k not in _COUNTER_FIELDS and k != "id"
            }
            stmt = (
                update(articles_table)
                .where(articles_table.c.id == article.id)
                .values(**values)
                .returning(articles_table)
            )
        else:
            stmt = (
                insert(articles_table)
                .values(**article_to_dict(article))
                .returning(articles_table)
            )

        result = await self._execute(stmt, "article.save", article_id=article.id)
        row = result.fetchone()
        await self._flush("article.save")
        return row_to_article(row._asdict()) if row else article

    async def delete(self, article_id: ArticleId) -> bool:
        """Delete an article (hard delete)."""
        stmt = delete(articles_table).where(articles_table.c.id == article_id)
        result = await self._execute(stmt, "article.delete", article_id=article_id)
        await self._flush("article.delete")
        return (result.rowcount or 0) > 0

    async def _update_returning(
        self, article_id: ArticleId, operation: str, *criteria, **values
    ) -> Optional[Article]:
        stmt = (
            update(articles_table)
            .where(articles_table.c.id == article_id, *criteria)
            .values(**values)
            .returning(articles_table)
        )
        result = await self._execute(stmt, operation, article_id=article_id)
        row = result.fetchone()
        await self._flush(operation)
        return row_to_article(row._asdict()) if row else None

    async def increment_views(self, article_id: ArticleId) -> Optional[Article]:
        """Atomically increment views by 1."""
        return await self._update_returning(
            article_id,
            "article.increment_views",
            views=articles_table.c.views + 1,
        )

    async def adjust_comment_count(
        self, article_id: ArticleId, delta: int
    ) -> Optional[Article]:
        """Atomically add a signed delta to comments_count."""
        return await self._update_returning(
            article_id,
            "article.adjust_comment_count",
            comments_count=articles_table.c.comments_count + delta,
        )

    async def set_liked(
        self, article_id: ArticleId, handle: str, liked: bool
    ) -> Optional[Article]:
        """Atomically add or remove a like by ``handle``."""
        has_liked = articles_table.c.liked_by.contains([handle])

        if liked:
            updated = await self._update_returning(
                article_id,
                "article.set_liked",
                ~has_liked,
                liked_by=func.array_append(articles_table.c.liked_by, handle),
                likes=articles_table.c.likes + 1,
                updated_at=utc_now(),
            )
        else:
            updated = await self._update_returning(
                article_id,
                "article.set_liked",
                has_liked,
                liked_by=func.array_remove(articles_table.c.liked_by, handle),
                likes=func.greatest(articles_table.c.likes - 1, 0),
                updated_at=utc_now(),
            )

        # No row matched: either the article is gone or the state already matched
        return updated or await self.find_by_id(article_id)
