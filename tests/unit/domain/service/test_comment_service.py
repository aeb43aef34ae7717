"""Unit tests for CommentService."""

import pytest

from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.repository import CommentRepository
from tavern.domain.service import CommentService
from tavern.domain.value import Author, CommentId, TargetType
from tests.conftest import make_comment
from tests.harness import create_env_fixture

# Unit test fixture - everything mocked
unit_env = create_env_fixture()

ALICE = Author(handle="alice", name="Alice")


async def seed(repo: CommentRepository, *comments) -> None:
    for comment in comments:
        await repo.save(comment)


class TestCreateComment:
    """Tests for create_comment method."""

    @pytest.mark.asyncio
    async def test_create_top_level_comment(self, unit_env):
        """Top-level comment should be saved with trimmed content."""
        # Arrange
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)

        # Act
        result = await comment_service.create_comment(
            target_type=TargetType.ARTICLE,
            target_id="article-1",
            author=ALICE,
            content="  Hello there  ",
        )

        # Assert
        assert result.parent_id is None
        assert result.content == "Hello there"
        assert result.author == ALICE
        assert await comment_repo.find_by_id(result.id) == result

    @pytest.mark.asyncio
    async def test_create_reply_on_same_target(self, unit_env):
        """Reply should reference its parent."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await seed(comment_repo, make_comment("parent"))

        result = await comment_service.create_comment(
            target_type=TargetType.ARTICLE,
            target_id="article-1",
            author=ALICE,
            content="Reply",
            parent_id=CommentId("parent"),
        )

        assert result.parent_id == "parent"

    @pytest.mark.asyncio
    async def test_blank_content_rejected(self, unit_env):
        """Whitespace-only content should be rejected."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                target_type=TargetType.ARTICLE,
                target_id="article-1",
                author=ALICE,
                content="   ",
            )

    @pytest.mark.asyncio
    async def test_missing_parent_rejected(self, unit_env):
        """Replying to a nonexistent comment should fail."""
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(ValidationError, match="Parent comment not found"):
            await comment_service.create_comment(
                target_type=TargetType.ARTICLE,
                target_id="article-1",
                author=ALICE,
                content="Reply",
                parent_id=CommentId("nope"),
            )

    @pytest.mark.asyncio
    async def test_parent_on_other_target_rejected(self, unit_env):
        """A reply must stay on its parent's target."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await seed(comment_repo, make_comment("parent", target_id="article-2"))

        with pytest.raises(ValidationError):
            await comment_service.create_comment(
                target_type=TargetType.ARTICLE,
                target_id="article-1",
                author=ALICE,
                content="Reply",
                parent_id=CommentId("parent"),
            )


class TestGetComment:
    """Tests for get_comment method."""

    @pytest.mark.asyncio
    async def test_missing_comment_raises_not_found(self, unit_env):
        comment_service = await unit_env.get(CommentService)

        with pytest.raises(NotFoundError):
            await comment_service.get_comment(CommentId("missing"))


class TestGetCommentTree:
    """Tests for get_comment_tree method."""

    @pytest.mark.asyncio
    async def test_only_target_comments_included(self, unit_env):
        """Comments on other targets should not leak into the tree."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await seed(
            comment_repo,
            make_comment("c1", minutes=0),
            make_comment("c2", parent_id="c1", minutes=1),
            make_comment("other", target_id="article-2", minutes=2),
            make_comment(
                "char", target_id="article-1", target_type=TargetType.CHARACTER
            ),
        )

        tree = await comment_service.get_comment_tree(TargetType.ARTICLE, "article-1")

        assert [node.comment.id for node in tree] == ["c1"]
        assert [reply.comment.id for reply in tree[0].replies] == ["c2"]


class TestDeleteThread:
    """Tests for cascade deletion."""

    @pytest.mark.asyncio
    async def test_leaf_delete_removes_one(self, unit_env):
        """Deleting a comment without replies removes exactly that comment."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        leaf = make_comment("leaf")
        await seed(comment_repo, leaf, make_comment("sibling", minutes=1))

        deleted = await comment_service.delete_thread(leaf)

        assert deleted == 1
        assert await comment_repo.find_by_id(CommentId("leaf")) is None
        assert await comment_repo.find_by_id(CommentId("sibling")) is not None

    @pytest.mark.asyncio
    async def test_delete_removes_whole_subtree_only(self, unit_env):
        """C1 -> (C2 -> C3, C4) with a separate root C5: deleting C1 removes 4."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        c1 = make_comment("c1", minutes=0)
        await seed(
            comment_repo,
            c1,
            make_comment("c2", parent_id="c1", minutes=1),
            make_comment("c3", parent_id="c2", minutes=2),
            make_comment("c4", parent_id="c1", minutes=3),
            make_comment("c5", minutes=4),
        )

        deleted = await comment_service.delete_thread(c1)

        assert deleted == 4
        remaining = await comment_repo.find_by_target(TargetType.ARTICLE, "article-1")
        assert [c.id for c in remaining] == ["c5"]

    @pytest.mark.asyncio
    async def test_collect_thread_terminates_on_cycles(self, unit_env):
        """A parent cycle under the root should be collected once."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await seed(
            comment_repo,
            make_comment("root", parent_id="child"),
            make_comment("child", parent_id="root", minutes=1),
        )

        thread = await comment_service.collect_thread(CommentId("root"))

        assert thread == ["root", "child"]

    @pytest.mark.asyncio
    async def test_delete_for_target(self, unit_env):
        """All comments of one target should go, others stay."""
        comment_service = await unit_env.get(CommentService)
        comment_repo = await unit_env.get(CommentRepository)
        await seed(
            comment_repo,
            make_comment("c1"),
            make_comment("c2", parent_id="c1", minutes=1),
            make_comment("keep", target_id="article-2"),
        )

        deleted = await comment_service.delete_for_target(
            TargetType.ARTICLE, "article-1"
        )

        assert deleted == 2
        assert await comment_repo.find_by_id(CommentId("keep")) is not None
