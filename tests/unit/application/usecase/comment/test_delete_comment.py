"""Unit tests for DeleteCommentUseCase."""

import pytest

from tavern.application.usecase.comment import (
    DeleteCommentRequest,
    DeleteCommentUseCase,
)
from tavern.domain.error import (
    NotAuthenticatedError,
    NotFoundError,
    PermissionDeniedError,
)
from tavern.domain.repository import ArticleRepository, CommentRepository
from tavern.domain.service import ArticleService
from tavern.domain.value import Author, CommentId, TargetType
from tests.conftest import make_comment, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()


async def seed_thread(unit_env):
    """Article with C1 -> (C2 -> C3, C4) and a separate root C5."""
    article_service = await unit_env.get(ArticleService)
    comment_repo = await unit_env.get(CommentRepository)
    article = await article_service.create_article(
        author=Author(handle="bob", name="Bob"), title="Title", content="Body"
    )
    comments = [
        make_comment("c1", target_id=article.id, author="alice"),
        make_comment("c2", parent_id="c1", minutes=1, target_id=article.id, author="bob"),
        make_comment("c3", parent_id="c2", minutes=2, target_id=article.id, author="carol"),
        make_comment("c4", parent_id="c1", minutes=3, target_id=article.id, author="bob"),
        make_comment("c5", minutes=4, target_id=article.id, author="alice"),
    ]
    for comment in comments:
        await comment_repo.save(comment)
    await article_service.adjust_comment_count(article.id, len(comments))
    return article


class TestDeleteComment:
    """Tests for the cascade delete flow."""

    @pytest.mark.asyncio
    async def test_author_deletes_subtree_and_counter_drops(self, unit_env):
        # Arrange
        use_case = await unit_env.get(DeleteCommentUseCase)
        article_repo = await unit_env.get(ArticleRepository)
        comment_repo = await unit_env.get(CommentRepository)
        article = await seed_thread(unit_env)

        # Act
        response = await use_case.execute(
            DeleteCommentRequest(comment_id="c1", principal=make_principal("alice"))
        )

        # Assert
        assert response.success is True
        assert response.deleted_count == 4
        assert response.model_dump(by_alias=True)["deletedCount"] == 4
        stored = await article_repo.find_by_id(article.id)
        assert stored.comments_count == 1
        assert await comment_repo.find_by_id(CommentId("c5")) is not None

    @pytest.mark.asyncio
    async def test_leaf_delete_counts_one(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        article_repo = await unit_env.get(ArticleRepository)
        article = await seed_thread(unit_env)

        response = await use_case.execute(
            DeleteCommentRequest(comment_id="c3", principal=make_principal("carol"))
        )

        assert response.deleted_count == 1
        stored = await article_repo.find_by_id(article.id)
        assert stored.comments_count == 4

    @pytest.mark.asyncio
    async def test_admin_may_delete_any_comment(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        await seed_thread(unit_env)

        response = await use_case.execute(
            DeleteCommentRequest(
                comment_id="c2", principal=make_principal("mod", admin=True)
            )
        )

        assert response.deleted_count == 2

    @pytest.mark.asyncio
    async def test_other_user_forbidden(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        await seed_thread(unit_env)

        with pytest.raises(PermissionDeniedError):
            await use_case.execute(
                DeleteCommentRequest(comment_id="c1", principal=make_principal("bob"))
            )

        assert await comment_repo.find_by_id(CommentId("c1")) is not None

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        await seed_thread(unit_env)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(DeleteCommentRequest(comment_id="c1"))

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(comment_id="nope", principal=make_principal())
            )

    @pytest.mark.asyncio
    async def test_target_scoped_delete_checks_target(self, unit_env):
        """A character-scoped delete must not remove an article comment."""
        use_case = await unit_env.get(DeleteCommentUseCase)
        article = await seed_thread(unit_env)

        with pytest.raises(NotFoundError):
            await use_case.execute(
                DeleteCommentRequest(
                    comment_id="c5",
                    principal=make_principal("alice"),
                    target_type=TargetType.CHARACTER,
                    target_id=article.id,
                )
            )

    @pytest.mark.asyncio
    async def test_character_comment_delete_leaves_articles_alone(self, unit_env):
        use_case = await unit_env.get(DeleteCommentUseCase)
        comment_repo = await unit_env.get(CommentRepository)
        await comment_repo.save(
            make_comment(
                "k1", target_id="char-1", target_type=TargetType.CHARACTER
            )
        )
        await comment_repo.save(
            make_comment(
                "k2",
                parent_id="k1",
                minutes=1,
                target_id="char-1",
                target_type=TargetType.CHARACTER,
            )
        )

        response = await use_case.execute(
            DeleteCommentRequest(
                comment_id="k1",
                principal=make_principal("alice"),
                target_type=TargetType.CHARACTER,
                target_id="char-1",
            )
        )

        assert response.deleted_count == 2
