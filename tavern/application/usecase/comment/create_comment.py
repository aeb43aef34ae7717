"""Create comment use case."""

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService, CharacterService, CommentService
from tavern.domain.value import ArticleId, CharacterId, CommentId, TargetType

from .get_comments import CommentItem


class CreateCommentRequest(BaseModel):
    """Create comment request."""

    target_type: TargetType
    target_id: str
    content: str
    parent_id: str | None = None  # Parent comment ID for replies
    principal: Principal | None = None


class CreateCommentUseCase:
    """Use case for commenting on an article or character, or replying."""

    def __init__(
        self,
        comment_service: CommentService,
        article_service: ArticleService,
        character_service: CharacterService,
    ) -> None:
        """Initialize create comment use case.

        Args:
            comment_service: Comment domain service
            article_service: Article domain service
            character_service: Character domain service
        """
        self.comment_service = comment_service
        self.article_service = article_service
        self.character_service = character_service

    async def execute(self, request: CreateCommentRequest) -> CommentItem:
        """Execute create comment flow.

        Steps:
        1. Require an authenticated caller
        2. Verify the target exists
        3. Create comment via comment service (validates parent if replying)
        4. Bump the article's comment counter (articles only)

        Args:
            request: Create comment request

        Returns:
            The created comment (flat)

        Raises:
            NotAuthenticatedError: If the request is anonymous
            NotFoundError: If the target doesn't exist
            ValidationError: If content is empty or the parent is invalid
        """
        principal = require_principal(request.principal, "comment")

        if request.target_type == TargetType.ARTICLE:
            await self.article_service.get_article(ArticleId(request.target_id))
        else:
            await self.character_service.get_character(CharacterId(request.target_id))

        comment = await self.comment_service.create_comment(
            target_type=request.target_type,
            target_id=request.target_id,
            author=principal.as_author(),
            content=request.content,
            parent_id=CommentId(request.parent_id) if request.parent_id else None,
        )

        if request.target_type == TargetType.ARTICLE:
            await self.article_service.adjust_comment_count(
                ArticleId(request.target_id), 1
            )

        return CommentItem.from_comment(comment)
