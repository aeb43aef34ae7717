"""Unit tests for ArticleService."""

import pytest

from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.repository import ArticleRepository
from tavern.domain.service import ArticleService
from tavern.domain.value import ArticleId, Author
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

ALICE = Author(handle="alice", name="Alice")


class TestCreateArticle:
    """Tests for create_article method."""

    @pytest.mark.asyncio
    async def test_defaults_and_trimming(self, unit_env):
        """Missing category should default and tags should be cleaned."""
        article_service = await unit_env.get(ArticleService)

        article = await article_service.create_article(
            author=ALICE,
            title="  First post ",
            content=" Body ",
            tags=["lore", " ", " tips "],
        )

        assert article.title == "First post"
        assert article.content == "Body"
        assert article.category == "discussion"
        assert article.tags == ["lore", "tips"]
        assert article.comments_count == 0
        assert article.views == 0

    @pytest.mark.asyncio
    async def test_requires_title_and_content(self, unit_env):
        article_service = await unit_env.get(ArticleService)

        with pytest.raises(ValidationError, match="Title and content are required"):
            await article_service.create_article(author=ALICE, title="", content="x")


class TestUpdateArticle:
    """Tests for update_article method."""

    @pytest.mark.asyncio
    async def test_partial_update_keeps_other_fields(self, unit_env):
        article_service = await unit_env.get(ArticleService)
        article = await article_service.create_article(
            author=ALICE, title="Title", content="Body", category="tutorial"
        )

        updated = await article_service.update_article(article, title="New title")

        assert updated.title == "New title"
        assert updated.content == "Body"
        assert updated.category == "tutorial"
        assert updated.updated_at >= article.updated_at

    @pytest.mark.asyncio
    async def test_update_does_not_reset_counters(self, unit_env):
        """Stale copies must not overwrite counters changed meanwhile."""
        article_service = await unit_env.get(ArticleService)
        article = await article_service.create_article(
            author=ALICE, title="Title", content="Body"
        )
        await article_service.adjust_comment_count(article.id, 3)

        updated = await article_service.update_article(article, content="Edited")

        assert updated.comments_count == 3


class TestAdjustCommentCount:
    """Tests for adjust_comment_count method."""

    @pytest.mark.asyncio
    async def test_signed_deltas_accumulate(self, unit_env):
        article_service = await unit_env.get(ArticleService)
        article_repo = await unit_env.get(ArticleRepository)
        article = await article_service.create_article(
            author=ALICE, title="Title", content="Body"
        )

        await article_service.adjust_comment_count(article.id, 1)
        await article_service.adjust_comment_count(article.id, 4)
        await article_service.adjust_comment_count(article.id, -3)

        stored = await article_repo.find_by_id(article.id)
        assert stored.comments_count == 2

    @pytest.mark.asyncio
    async def test_missing_article_is_ignored(self, unit_env):
        article_service = await unit_env.get(ArticleService)

        await article_service.adjust_comment_count(ArticleId("gone"), -2)


class TestToggleLike:
    """Tests for toggle_like method."""

    @pytest.mark.asyncio
    async def test_like_then_unlike(self, unit_env):
        article_service = await unit_env.get(ArticleService)
        article = await article_service.create_article(
            author=ALICE, title="Title", content="Body"
        )

        liked = await article_service.toggle_like(article, "bob")
        assert liked.likes == 1
        assert liked.liked_by == ["bob"]

        unliked = await article_service.toggle_like(liked, "bob")
        assert unliked.likes == 0
        assert unliked.liked_by == []


class TestViewArticle:
    """Tests for view_article method."""

    @pytest.mark.asyncio
    async def test_counts_views(self, unit_env):
        article_service = await unit_env.get(ArticleService)
        article = await article_service.create_article(
            author=ALICE, title="Title", content="Body"
        )

        await article_service.view_article(article.id)
        viewed = await article_service.view_article(article.id)

        assert viewed.views == 2

    @pytest.mark.asyncio
    async def test_missing_article_raises_not_found(self, unit_env):
        article_service = await unit_env.get(ArticleService)

        with pytest.raises(NotFoundError):
            await article_service.view_article(ArticleId("missing"))
