"""Unit tests for build_comment_tree."""

from tavern.domain.service import CommentNode, build_comment_tree
from tests.conftest import make_comment


def collect_ids(nodes: list[CommentNode]) -> list[str]:
    """Flatten a forest depth-first into a list of comment ids."""
    ids: list[str] = []
    stack = list(reversed(nodes))
    while stack:
        node = stack.pop()
        ids.append(node.comment.id)
        stack.extend(reversed(node.replies))
    return ids


class TestBuildCommentTree:
    """Tests for build_comment_tree."""

    def test_empty_input_returns_empty_forest(self):
        """No comments should give no roots."""
        assert build_comment_tree([]) == []

    def test_nests_replies_under_parents(self):
        """Replies should appear under their parent at any depth."""
        # Arrange
        comments = [
            make_comment("c1", minutes=0),
            make_comment("c2", parent_id="c1", minutes=1),
            make_comment("c3", parent_id="c2", minutes=2),
            make_comment("c4", minutes=3),
        ]

        # Act
        tree = build_comment_tree(comments)

        # Assert
        assert [node.comment.id for node in tree] == ["c1", "c4"]
        assert [reply.comment.id for reply in tree[0].replies] == ["c2"]
        assert [reply.comment.id for reply in tree[0].replies[0].replies] == ["c3"]
        assert tree[1].replies == []

    def test_every_comment_appears_exactly_once(self):
        """The forest should contain each input id once."""
        comments = [
            make_comment("c1", minutes=0),
            make_comment("c2", parent_id="c1", minutes=1),
            make_comment("c3", parent_id="c1", minutes=2),
            make_comment("c4", parent_id="c3", minutes=3),
            make_comment("c5", parent_id="missing", minutes=4),
        ]

        ids = collect_ids(build_comment_tree(comments))

        assert sorted(ids) == ["c1", "c2", "c3", "c4", "c5"]
        assert len(ids) == len(set(ids))

    def test_siblings_sorted_by_created_at_regardless_of_input_order(self):
        """Roots and replies should be oldest first."""
        comments = [
            make_comment("late-reply", parent_id="root", minutes=10),
            make_comment("root-2", minutes=5),
            make_comment("early-reply", parent_id="root", minutes=2),
            make_comment("root", minutes=0),
        ]

        tree = build_comment_tree(comments)

        assert [node.comment.id for node in tree] == ["root", "root-2"]
        assert [reply.comment.id for reply in tree[0].replies] == [
            "early-reply",
            "late-reply",
        ]

    def test_orphan_reply_becomes_root(self):
        """A reply whose parent is gone should be shown as a root."""
        comments = [
            make_comment("c1", minutes=0),
            make_comment("orphan", parent_id="deleted", minutes=1),
        ]

        tree = build_comment_tree(comments)

        assert [node.comment.id for node in tree] == ["c1", "orphan"]

    def test_parent_cycle_does_not_loop_or_drop_comments(self):
        """Comments that only reach each other should still be placed once."""
        comments = [
            make_comment("a", parent_id="b", minutes=0),
            make_comment("b", parent_id="a", minutes=1),
            make_comment("c", parent_id="b", minutes=2),
        ]

        tree = build_comment_tree(comments)
        ids = collect_ids(tree)

        assert sorted(ids) == ["a", "b", "c"]
        assert len(ids) == 3
        # The oldest stranded comment is promoted to root
        assert tree[0].comment.id == "a"

    def test_self_parent_is_treated_as_root(self):
        """A comment naming itself as parent should not disappear."""
        comments = [make_comment("loop", parent_id="loop")]

        tree = build_comment_tree(comments)

        assert [node.comment.id for node in tree] == ["loop"]
        assert tree[0].replies == []

    def test_duplicate_ids_keep_first_occurrence(self):
        """Duplicate ids should collapse onto the first record seen."""
        first = make_comment("dup", minutes=0)
        second = make_comment("dup", minutes=5)

        tree = build_comment_tree([first, second])

        assert len(tree) == 1
        assert tree[0].comment.created_at == first.created_at
