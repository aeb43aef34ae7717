"""Integration tests for the PostgreSQL comment and article repositories.

Require a migrated PostgreSQL reachable through DATABASE__URL.
"""

import os

import pytest

from tavern.domain.model import Article
from tavern.domain.repository import ArticleRepository, CommentRepository
from tavern.domain.service import CommentService
from tavern.domain.value import ArticleId, Author, CommentId, TargetType, new_id
from tests.conftest import make_comment
from tests.harness import create_env_fixture

pytestmark = [
    pytest.mark.integration,
    pytest.mark.skipif(
        not os.environ.get("DATABASE__URL"), reason="DATABASE__URL not set"
    ),
]

integration_env = create_env_fixture(unmock={"persistence"})


class TestPostgresCommentRepository:
    """Tests for PostgresCommentRepository."""

    @pytest.mark.asyncio
    async def test_cascade_delete_by_levels(self, integration_env):
        # Arrange
        repo = await integration_env.get(CommentRepository)
        service = await integration_env.get(CommentService)
        target_id = new_id()
        ids = {name: new_id() for name in ("c1", "c2", "c3", "c4", "c5")}
        comments = [
            make_comment(ids["c1"], target_id=target_id, minutes=0),
            make_comment(ids["c2"], parent_id=ids["c1"], target_id=target_id, minutes=1),
            make_comment(ids["c3"], parent_id=ids["c2"], target_id=target_id, minutes=2),
            make_comment(ids["c4"], parent_id=ids["c1"], target_id=target_id, minutes=3),
            make_comment(ids["c5"], target_id=target_id, minutes=4),
        ]
        for comment in comments:
            await repo.save(comment)

        # Act
        children = await repo.find_children_of([CommentId(ids["c1"])])
        deleted = await service.delete_thread(comments[0])

        # Assert
        assert [c.id for c in children] == [ids["c2"], ids["c4"]]
        assert deleted == 4
        remaining = await repo.find_by_target(TargetType.ARTICLE, target_id)
        assert [c.id for c in remaining] == [ids["c5"]]

        await repo.delete_by_target(TargetType.ARTICLE, target_id)


class TestPostgresArticleRepository:
    """Tests for the atomic counter updates of PostgresArticleRepository."""

    @pytest.mark.asyncio
    async def test_counters(self, integration_env):
        repo = await integration_env.get(ArticleRepository)
        article = await repo.save(
            Article(
                id=ArticleId(new_id()),
                title="Integration",
                content="Body",
                tags=["100%_real"],
                author=Author(handle="alice", name="Alice"),
            )
        )

        await repo.adjust_comment_count(article.id, 3)
        updated = await repo.adjust_comment_count(article.id, -2)
        liked = await repo.set_liked(article.id, "bob", True)
        liked_again = await repo.set_liked(article.id, "bob", True)
        found = await repo.find_all(query="100%_")

        assert updated.comments_count == 1
        assert liked.likes == 1
        assert liked_again.likes == 1
        assert article.id in [a.id for a in found]

        await repo.delete(article.id)
