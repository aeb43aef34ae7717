"""Get article use case."""

from pydantic import BaseModel

from tavern.application.usecase.comment import CommentItem, render_comment_tree
from tavern.domain.model import Principal
from tavern.domain.service import ArticleService, CommentService
from tavern.domain.value import ArticleId, TargetType

from .list_articles import ArticleItem


class GetArticleRequest(BaseModel):
    """Get article request."""

    article_id: str
    principal: Principal | None = None


class ArticleDetail(ArticleItem):
    """Schema of the article detail body."""

    comments: list[CommentItem]
    user_liked: bool


class GetArticleResponse(BaseModel):
    """Article, the caller's like state and the rendered comment tree."""

    article: ArticleItem
    user_liked: bool
    comments_json: str

    def to_json(self) -> str:
        """Render as an ``ArticleDetail`` JSON object."""
        head = self.article.model_dump_json()
        liked = "true" if self.user_liked else "false"
        return f'{head[:-1]},"comments":{self.comments_json},"user_liked":{liked}}}'


class GetArticleUseCase:
    """Use case for opening an article.

    Counts a view, then loads the comment tree.
    """

    def __init__(
        self, article_service: ArticleService, comment_service: CommentService
    ) -> None:
        """Initialize get article use case.

        Args:
            article_service: Article domain service
            comment_service: Comment domain service
        """
        self.article_service = article_service
        self.comment_service = comment_service

    async def execute(self, request: GetArticleRequest) -> GetArticleResponse:
        """Execute get article flow.

        Args:
            request: Article ID and optional caller

        Returns:
            Article with its comment tree and the caller's like state

        Raises:
            NotFoundError: If article not found
        """
        article = await self.article_service.view_article(ArticleId(request.article_id))
        tree = await self.comment_service.get_comment_tree(
            TargetType.ARTICLE, article.id
        )

        user_liked = request.principal is not None and article.is_liked_by(
            request.principal.handle
        )

        return GetArticleResponse(
            article=ArticleItem.from_domain(article),
            user_liked=user_liked,
            comments_json=render_comment_tree(tree),
        )
