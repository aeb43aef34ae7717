"""Forum routes: articles, their comments, likes and images."""

import mimetypes
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, File, HTTPException, Query, UploadFile, status
from fastapi.responses import RedirectResponse, Response
from pydantic import AliasChoices, BaseModel, Field

from tavern.application.usecase.article import (
    ArticleDetail,
    ArticleItem,
    CreateArticleRequest,
    CreateArticleUseCase,
    DeleteArticleRequest,
    DeleteArticleResponse,
    DeleteArticleUseCase,
    GetArticleRequest,
    GetArticleUseCase,
    GetImageUseCase,
    ListArticlesRequest,
    ListArticlesUseCase,
    ToggleLikeRequest,
    ToggleLikeResponse,
    ToggleLikeUseCase,
    UpdateArticleRequest,
    UpdateArticleUseCase,
    UploadImageRequest,
    UploadImageResponse,
    UploadImageUseCase,
)
from tavern.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
)
from tavern.domain.service import JWTService
from tavern.domain.value import FORUM_CATEGORIES, ForumCategory, TargetType
from tavern.interface.api.errors import to_http_exception

router = APIRouter(prefix="/api/forum", tags=["forum"], route_class=DishkaRoute)

IMAGE_CACHE_CONTROL = "public, max-age=31536000"


class CreateArticleAPIRequest(BaseModel):
    """API request for creating an article."""

    title: str = Field(default="", max_length=300)
    content: str = ""
    category: str | None = None
    tags: list[str] = Field(default_factory=list)


class UpdateArticleAPIRequest(BaseModel):
    """API request for updating an article. Omitted fields stay unchanged."""

    title: str | None = Field(default=None, max_length=300)
    content: str | None = None
    category: str | None = None
    tags: list[str] | None = None


class CreateCommentAPIRequest(BaseModel):
    """API request for creating a comment."""

    content: str = Field(default="", max_length=10000)
    parent_id: str | None = Field(
        default=None, validation_alias=AliasChoices("parent_id", "parentId")
    )


@router.get("/articles", response_model=list[ArticleItem])
async def list_articles(
    list_articles_use_case: FromDishka[ListArticlesUseCase],
    q: str | None = None,
    category: str | None = None,
    author: str | None = None,
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> list[ArticleItem]:
    """List articles, newest first.

    Args:
        list_articles_use_case: List articles use case from DI
        q: Case-insensitive search over title, content and tags
        category: Category filter
        author: Author handle filter
        page: Page number (1-based)
        limit: Page size

    Returns:
        Matching articles
    """
    try:
        response = await list_articles_use_case.execute(
            ListArticlesRequest(
                query=q, category=category, author=author, page=page, limit=limit
            )
        )
    except Exception as e:
        raise to_http_exception(e, "get articles") from e
    return response.articles


@router.get("/articles/{article_id}", response_model=ArticleDetail)
async def get_article(
    article_id: str,
    get_article_use_case: FromDishka[GetArticleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> Response:
    """Get an article with its comment tree.

    Counts a view. Authentication is optional; when present the response
    says whether the caller liked the article.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        response = await get_article_use_case.execute(
            GetArticleRequest(article_id=article_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "get article") from e
    return Response(content=response.to_json(), media_type="application/json")


@router.post(
    "/articles", response_model=ArticleItem, status_code=status.HTTP_201_CREATED
)
async def create_article(
    request: CreateArticleAPIRequest,
    create_article_use_case: FromDishka[CreateArticleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ArticleItem:
    """Create a new article.

    Requires authentication.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await create_article_use_case.execute(
            CreateArticleRequest(
                title=request.title,
                content=request.content,
                category=request.category,
                tags=request.tags,
                principal=principal,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "create article") from e


@router.put("/articles/{article_id}", response_model=ArticleItem)
async def update_article(
    article_id: str,
    request: UpdateArticleAPIRequest,
    update_article_use_case: FromDishka[UpdateArticleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ArticleItem:
    """Update an article.

    Only the author or an administrator may edit.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await update_article_use_case.execute(
            UpdateArticleRequest(
                article_id=article_id,
                title=request.title,
                content=request.content,
                category=request.category,
                tags=request.tags,
                principal=principal,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "update article") from e


@router.delete("/articles/{article_id}", response_model=DeleteArticleResponse)
async def delete_article(
    article_id: str,
    delete_article_use_case: FromDishka[DeleteArticleUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteArticleResponse:
    """Delete an article and all of its comments.

    Only the author or an administrator may delete.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await delete_article_use_case.execute(
            DeleteArticleRequest(article_id=article_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "delete article") from e


@router.post(
    "/articles/{article_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_article_comment(
    article_id: str,
    request: CreateCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Comment on an article or reply to one of its comments.

    Requires authentication. Increments the article's comment count.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=TargetType.ARTICLE,
                target_id=article_id,
                content=request.content,
                parent_id=request.parent_id,
                principal=principal,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "add comment") from e


@router.delete("/comments/{comment_id}", response_model=DeleteCommentResponse)
async def delete_comment(
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a comment and every reply beneath it.

    Only the author or an administrator may delete.

    Returns:
        ``{"success": true, "deletedCount": n}``
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(comment_id=comment_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "delete comment") from e


@router.post("/articles/{article_id}/like", response_model=ToggleLikeResponse)
async def toggle_like(
    article_id: str,
    toggle_like_use_case: FromDishka[ToggleLikeUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ToggleLikeResponse:
    """Like an article, or remove the caller's like.

    Requires authentication.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await toggle_like_use_case.execute(
            ToggleLikeRequest(article_id=article_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "toggle like") from e


@router.get("/categories", response_model=list[ForumCategory])
async def list_categories() -> list[ForumCategory]:
    """List forum categories."""
    return list(FORUM_CATEGORIES)


@router.get("/search")
async def search_articles(
    q: str | None = None,
    category: str | None = None,
    author: str | None = None,
) -> RedirectResponse:
    """Search articles (redirects to the article listing)."""
    query = urlencode({"q": q or "", "category": category or "", "author": author or ""})
    return RedirectResponse(
        url=f"{router.prefix}/articles?{query}", status_code=status.HTTP_302_FOUND
    )


@router.post("/upload-image", response_model=UploadImageResponse)
async def upload_image(
    upload_image_use_case: FromDishka[UploadImageUseCase],
    jwt_service: FromDishka[JWTService],
    image: UploadFile | None = File(default=None),
    auth_token: str | None = Cookie(default=None),
) -> UploadImageResponse:
    """Upload an image to embed in an article.

    Requires authentication.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    if principal is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
        )
    if image is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="No image file uploaded"
        )

    try:
        content = await image.read()
        return await upload_image_use_case.execute(
            UploadImageRequest(
                filename=image.filename, content=content, principal=principal
            )
        )
    except Exception as e:
        raise to_http_exception(e, "upload image") from e


@router.get("/images/{filename}")
async def get_image(
    filename: str,
    get_image_use_case: FromDishka[GetImageUseCase],
) -> Response:
    """Serve an uploaded image."""
    try:
        name, content = await get_image_use_case.execute(filename)
    except Exception as e:
        raise to_http_exception(e, "serve image") from e

    return Response(
        content=content,
        media_type=guess_media_type(name),
        headers={"Cache-Control": IMAGE_CACHE_CONTROL},
    )


def guess_media_type(filename: str) -> str:
    """Media type for a stored image, by extension."""
    media_type, _ = mimetypes.guess_type(filename)
    return media_type or "application/octet-stream"
