"""Get comments use case."""

from collections.abc import Sequence
from datetime import datetime

from pydantic import BaseModel

from tavern.domain.model import Comment
from tavern.domain.service import CommentNode, CommentService
from tavern.domain.value import Author, TargetType


class CommentItem(BaseModel):
    """Comment in a response.

    Describes the shape of tree nodes for the API schema. Trees themselves
    are rendered by ``render_comment_tree``; flat records (such as a freshly
    created comment) carry an empty ``replies`` list.
    """

    id: str
    target_id: str
    target_type: TargetType
    parent_id: str | None
    content: str
    author: Author
    likes: int
    created_at: datetime
    updated_at: datetime
    replies: list["CommentItem"] = []

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentItem":
        """Convert a flat domain comment."""
        return cls(
            id=comment.id,
            target_id=comment.target_id,
            target_type=comment.target_type,
            parent_id=comment.parent_id,
            content=comment.content,
            author=comment.author,
            likes=comment.likes,
            created_at=comment.created_at,
            updated_at=comment.updated_at,
        )


def _push_siblings(stack: list, nodes: Sequence[CommentNode]) -> None:
    # Reversed so the oldest sibling is popped first; commas go between them
    for index in range(len(nodes) - 1, -1, -1):
        stack.append(nodes[index])
        if index:
            stack.append(",")


def render_comment_tree(nodes: Sequence[CommentNode]) -> str:
    """Render a reply forest as a JSON array of nested ``CommentItem`` objects.

    Reply chains have no depth limit, so the output is assembled with an
    explicit stack. Only one flat record at a time goes through pydantic.

    Args:
        nodes: Root nodes, already ordered

    Returns:
        JSON text
    """
    parts = ["["]
    stack: list[CommentNode | str] = ["]"]
    _push_siblings(stack, nodes)

    while stack:
        item = stack.pop()
        if isinstance(item, str):
            parts.append(item)
            continue

        record = CommentItem.from_comment(item.comment).model_dump_json(
            exclude={"replies"}
        )
        parts.append(record[:-1] + ',"replies":[')
        stack.append("]}")
        _push_siblings(stack, item.replies)

    return "".join(parts)


class GetCommentsRequest(BaseModel):
    """Get comments request."""

    target_type: TargetType
    target_id: str


class GetCommentsResponse(BaseModel):
    """Get comments response.

    ``comments_json`` is the rendered reply tree, ready to send.
    """

    comments_json: str


class GetCommentsUseCase:
    """Use case for getting a target's comments as a reply tree."""

    def __init__(self, comment_service: CommentService) -> None:
        self.comment_service = comment_service

    async def execute(self, request: GetCommentsRequest) -> GetCommentsResponse:
        """Execute get comments flow.

        Args:
            request: Target to fetch comments for

        Returns:
            Root comments oldest first, with nested replies
        """
        tree = await self.comment_service.get_comment_tree(
            request.target_type, request.target_id
        )
        return GetCommentsResponse(comments_json=render_comment_tree(tree))
