"""Domain service providers."""

from dishka import Scope, provide

from tavern.domain.service import (
    ArticleService,
    CharacterService,
    CommentService,
    JWTService,
)
from tavern.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Domain services.

    Services holding a repository are per request so they share the
    request's session. Token verification needs only settings.
    """

    scope = Scope.REQUEST

    jwt_service = provide(JWTService, scope=Scope.APP)
    comment_service = provide(CommentService)
    article_service = provide(ArticleService)
    character_service = provide(CharacterService)
