"""Toggle article like use case."""

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService
from tavern.domain.value import ArticleId


class ToggleLikeRequest(BaseModel):
    """Toggle like request."""

    article_id: str
    principal: Principal | None = None


class ToggleLikeResponse(BaseModel):
    """Toggle like response."""

    success: bool = True
    likes: int
    liked: bool
    message: str


class ToggleLikeUseCase:
    """Use case for liking an article, or taking the like back."""

    def __init__(self, article_service: ArticleService) -> None:
        """Initialize toggle like use case.

        Args:
            article_service: Article domain service
        """
        self.article_service = article_service

    async def execute(self, request: ToggleLikeRequest) -> ToggleLikeResponse:
        """Execute toggle like flow.

        Raises:
            NotAuthenticatedError: If the request is anonymous
            NotFoundError: If article not found
        """
        principal = require_principal(request.principal, "like an article")
        article = await self.article_service.get_article(ArticleId(request.article_id))

        updated = await self.article_service.toggle_like(article, principal.handle)
        liked = updated.is_liked_by(principal.handle)

        return ToggleLikeResponse(
            likes=updated.likes,
            liked=liked,
            message="点赞成功" if liked else "取消点赞",
        )
