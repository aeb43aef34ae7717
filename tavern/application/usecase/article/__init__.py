"""Forum article use cases."""

from .create_article import CreateArticleRequest, CreateArticleUseCase
from .delete_article import (
    DeleteArticleRequest,
    DeleteArticleResponse,
    DeleteArticleUseCase,
)
from .get_article import (
    ArticleDetail,
    GetArticleRequest,
    GetArticleResponse,
    GetArticleUseCase,
)
from .images import (
    GetImageUseCase,
    UploadImageRequest,
    UploadImageResponse,
    UploadImageUseCase,
)
from .list_articles import (
    ArticleItem,
    ListArticlesRequest,
    ListArticlesResponse,
    ListArticlesUseCase,
)
from .toggle_like import ToggleLikeRequest, ToggleLikeResponse, ToggleLikeUseCase
from .update_article import UpdateArticleRequest, UpdateArticleUseCase

__all__ = [
    "ArticleDetail",
    "ArticleItem",
    "CreateArticleRequest",
    "CreateArticleUseCase",
    "DeleteArticleRequest",
    "DeleteArticleResponse",
    "DeleteArticleUseCase",
    "GetArticleRequest",
    "GetArticleResponse",
    "GetArticleUseCase",
    "GetImageUseCase",
    "ListArticlesRequest",
    "ListArticlesResponse",
    "ListArticlesUseCase",
    "ToggleLikeRequest",
    "ToggleLikeResponse",
    "ToggleLikeUseCase",
    "UpdateArticleRequest",
    "UpdateArticleUseCase",
    "UploadImageRequest",
    "UploadImageResponse",
    "UploadImageUseCase",
]
