"""Use case providers.

Use cases only take domain services and settings, so dishka builds them
straight from their constructor annotations.
"""

from dishka import Scope, provide

from tavern.application.usecase.article import (
    CreateArticleUseCase,
    DeleteArticleUseCase,
    GetArticleUseCase,
    GetImageUseCase,
    ListArticlesUseCase,
    ToggleLikeUseCase,
    UpdateArticleUseCase,
    UploadImageUseCase,
)
from tavern.application.usecase.character import (
    DeleteCharacterUseCase,
    DownloadCharacterUseCase,
    GetAvatarUseCase,
    GetCharacterUseCase,
    ImportCharacterUseCase,
    ListCharactersUseCase,
    UploadCharacterUseCase,
)
from tavern.application.usecase.comment import (
    CreateCommentUseCase,
    DeleteCommentUseCase,
    GetCommentsUseCase,
)
from tavern.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """All use cases, created per request."""

    scope = Scope.REQUEST

    # Forum
    list_articles = provide(ListArticlesUseCase)
    get_article = provide(GetArticleUseCase)
    create_article = provide(CreateArticleUseCase)
    update_article = provide(UpdateArticleUseCase)
    delete_article = provide(DeleteArticleUseCase)
    toggle_like = provide(ToggleLikeUseCase)
    upload_image = provide(UploadImageUseCase)
    get_image = provide(GetImageUseCase)

    # Comments on either target
    create_comment = provide(CreateCommentUseCase)
    get_comments = provide(GetCommentsUseCase)
    delete_comment = provide(DeleteCommentUseCase)

    # Character gallery
    list_characters = provide(ListCharactersUseCase)
    get_character = provide(GetCharacterUseCase)
    upload_character = provide(UploadCharacterUseCase)
    delete_character = provide(DeleteCharacterUseCase)
    download_character = provide(DownloadCharacterUseCase)
    import_character = provide(ImportCharacterUseCase)
    get_avatar = provide(GetAvatarUseCase)
