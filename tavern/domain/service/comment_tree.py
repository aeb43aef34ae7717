"""Materialize flat comment records into reply trees."""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Iterable

from tavern.domain.model import Comment
from tavern.domain.value import CommentId


@dataclass
class CommentNode:
    """Node in a comment reply tree.

    Represents a comment and its direct replies, each a node of its own.
    """

    comment: Comment
    replies: list["CommentNode"] = field(default_factory=list)


def build_comment_tree(comments: Iterable[Comment]) -> list[CommentNode]:
    """Build the reply forest for one target's comments.

    Algorithm:
    1. Index comments by id (first occurrence wins on duplicate ids)
    2. Group comments under their parent when the parent is present;
       comments whose parent is missing (deleted, other target) are roots
    3. Walk down from the roots with an explicit stack, placing each id once
    4. Anything still unplaced only hangs off a parent cycle; the oldest such
       comment is promoted to a root and its cycle's back edge is dropped
    5. Sort roots and every replies list by created_at (stable)

    Args:
        comments: Flat comments for a single target, in any order

    Returns:
        Root nodes sorted oldest first, replies populated to full depth.
        Every input id appears exactly once.
    """
    nodes: dict[CommentId, CommentNode] = {}
    for comment in comments:
        nodes.setdefault(comment.id, CommentNode(comment=comment))

    children: dict[CommentId, list[CommentNode]] = defaultdict(list)
    roots: list[CommentNode] = []
    for node in nodes.values():
        parent_id = node.comment.parent_id
        if parent_id is not None and parent_id in nodes:
            children[parent_id].append(node)
        else:
            roots.append(node)

    placed: set[CommentId] = set()

    def attach(root: CommentNode) -> None:
        placed.add(root.comment.id)
        stack = [root]
        while stack:
            node = stack.pop()
            for child in children.get(node.comment.id, ()):
                if child.comment.id in placed:
                    continue
                placed.add(child.comment.id)
                node.replies.append(child)
                stack.append(child)

    for root in roots:
        attach(root)

    if len(placed) < len(nodes):
        stranded = sorted(
            (node for node in nodes.values() if node.comment.id not in placed),
            key=lambda node: node.comment.created_at,
        )
        for node in stranded:
            if node.comment.id not in placed:
                roots.append(node)
                attach(node)

    for node in nodes.values():
        node.replies.sort(key=lambda reply: reply.comment.created_at)
    roots.sort(key=lambda node: node.comment.created_at)

    return roots
