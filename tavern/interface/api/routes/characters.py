"""Public character gallery routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import (
    APIRouter,
    Cookie,
    File,
    Form,
    Query,
    Request,
    UploadFile,
    status,
)
from fastapi.responses import RedirectResponse, Response
from pydantic import AliasChoices, BaseModel, Field

from tavern.application.usecase.character import (
    CharacterItem,
    CharacterSummary,
    DeleteCharacterRequest,
    DeleteCharacterResponse,
    DeleteCharacterUseCase,
    DownloadCharacterResponse,
    DownloadCharacterUseCase,
    GetAvatarUseCase,
    GetCharacterUseCase,
    ImportCharacterRequest,
    ImportCharacterResponse,
    ImportCharacterUseCase,
    ListCharactersRequest,
    ListCharactersUseCase,
    UploadCharacterRequest,
    UploadCharacterUseCase,
)
from tavern.application.usecase.comment import (
    CommentItem,
    CreateCommentRequest,
    CreateCommentUseCase,
    DeleteCommentRequest,
    DeleteCommentResponse,
    DeleteCommentUseCase,
    GetCommentsRequest,
    GetCommentsUseCase,
)
from tavern.domain.service import JWTService
from tavern.domain.value import TargetType
from tavern.interface.api.errors import to_http_exception

router = APIRouter(
    prefix="/api/public-characters", tags=["characters"], route_class=DishkaRoute
)

AVATAR_CACHE_CONTROL = "public, max-age=31536000"


class CreateCharacterCommentAPIRequest(BaseModel):
    """API request for commenting on a character.

    The gallery front-end sends ``parentId``; ``parent_id`` is accepted too.
    """

    content: str = Field(default="", max_length=10000)
    parent_id: str | None = Field(
        default=None, validation_alias=AliasChoices("parentId", "parent_id")
    )


@router.get("/", response_model=list[CharacterSummary])
async def list_characters(
    list_characters_use_case: FromDishka[ListCharactersUseCase],
    q: str | None = None,
    uploader: str | None = None,
    tags: list[str] = Query(default=[]),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
) -> list[CharacterSummary]:
    """List public characters, most recent upload first.

    Card data is omitted from listings.

    Args:
        list_characters_use_case: List characters use case from DI
        q: Case-insensitive search over name, description and tags
        uploader: Uploader handle filter
        tags: Tags that must all be present (repeatable)
        page: Page number (1-based)
        limit: Page size
    """
    try:
        response = await list_characters_use_case.execute(
            ListCharactersRequest(
                query=q, uploader=uploader, tags=tags, page=page, limit=limit
            )
        )
    except Exception as e:
        raise to_http_exception(e, "get public characters") from e
    return response.characters


@router.get("/search")
async def search_characters(request: Request) -> RedirectResponse:
    """Search characters (redirects to the listing with the same query)."""
    query = request.url.query
    url = f"{router.prefix}/" + (f"?{query}" if query else "")
    return RedirectResponse(url=url, status_code=status.HTTP_302_FOUND)


@router.get("/avatar/{filename}")
async def get_avatar(
    filename: str,
    get_avatar_use_case: FromDishka[GetAvatarUseCase],
) -> Response:
    """Serve a character's stored card file."""
    try:
        content_type, content = await get_avatar_use_case.execute(filename)
    except Exception as e:
        raise to_http_exception(e, "serve avatar") from e

    return Response(
        content=content,
        media_type=content_type,
        headers={"Cache-Control": AVATAR_CACHE_CONTROL},
    )


@router.post("/upload", response_model=CharacterItem, status_code=status.HTTP_201_CREATED)
async def upload_character(
    upload_character_use_case: FromDishka[UploadCharacterUseCase],
    jwt_service: FromDishka[JWTService],
    file: UploadFile | None = File(default=None),
    name: str | None = Form(default=None),
    description: str | None = Form(default=None),
    tags: str | None = Form(default=None),
    auth_token: str | None = Cookie(default=None),
) -> CharacterItem:
    """Upload a character card (PNG, JSON or YAML, at most 10 MiB).

    Requires authentication. ``tags`` is a JSON array or a comma
    separated list.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await upload_character_use_case.execute(
            UploadCharacterRequest(
                name=name,
                description=description,
                tags=tags,
                filename=file.filename if file else None,
                content_type=file.content_type if file else None,
                content=await file.read() if file else None,
                principal=principal,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "upload character") from e


@router.get("/{character_id}", response_model=CharacterItem)
async def get_character(
    character_id: str,
    get_character_use_case: FromDishka[GetCharacterUseCase],
) -> CharacterItem:
    """Get a character including its card data. Counts a view."""
    try:
        return await get_character_use_case.execute(character_id)
    except Exception as e:
        raise to_http_exception(e, "get character") from e


@router.delete("/{character_id}", response_model=DeleteCharacterResponse)
async def delete_character(
    character_id: str,
    delete_character_use_case: FromDishka[DeleteCharacterUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCharacterResponse:
    """Delete a character with its comments and stored file.

    Only the uploader or an administrator may delete.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await delete_character_use_case.execute(
            DeleteCharacterRequest(character_id=character_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "delete character") from e


@router.post("/{character_id}/download", response_model=DownloadCharacterResponse)
async def download_character(
    character_id: str,
    download_character_use_case: FromDishka[DownloadCharacterUseCase],
) -> DownloadCharacterResponse:
    """Download a character's card data. Counts a download."""
    try:
        return await download_character_use_case.execute(character_id)
    except Exception as e:
        raise to_http_exception(e, "download character") from e


@router.post("/{character_id}/import", response_model=ImportCharacterResponse)
async def import_character(
    character_id: str,
    import_character_use_case: FromDishka[ImportCharacterUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> ImportCharacterResponse:
    """Import a character into the caller's own character library.

    Requires authentication. Counts a download.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await import_character_use_case.execute(
            ImportCharacterRequest(character_id=character_id, principal=principal)
        )
    except Exception as e:
        raise to_http_exception(e, "import character") from e


@router.get("/{character_id}/comments", response_model=list[CommentItem])
async def get_character_comments(
    character_id: str,
    get_comments_use_case: FromDishka[GetCommentsUseCase],
) -> Response:
    """Get a character's comments as a reply tree."""
    try:
        response = await get_comments_use_case.execute(
            GetCommentsRequest(
                target_type=TargetType.CHARACTER, target_id=character_id
            )
        )
    except Exception as e:
        raise to_http_exception(e, "get comments") from e
    return Response(content=response.comments_json, media_type="application/json")


@router.post(
    "/{character_id}/comments",
    response_model=CommentItem,
    status_code=status.HTTP_201_CREATED,
)
async def create_character_comment(
    character_id: str,
    request: CreateCharacterCommentAPIRequest,
    create_comment_use_case: FromDishka[CreateCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> CommentItem:
    """Comment on a character or reply to one of its comments.

    Requires authentication.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await create_comment_use_case.execute(
            CreateCommentRequest(
                target_type=TargetType.CHARACTER,
                target_id=character_id,
                content=request.content,
                parent_id=request.parent_id,
                principal=principal,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "add comment") from e


@router.delete(
    "/{character_id}/comments/{comment_id}", response_model=DeleteCommentResponse
)
async def delete_character_comment(
    character_id: str,
    comment_id: str,
    delete_comment_use_case: FromDishka[DeleteCommentUseCase],
    jwt_service: FromDishka[JWTService],
    auth_token: str | None = Cookie(default=None),
) -> DeleteCommentResponse:
    """Delete a character comment and every reply beneath it.

    Only the author or an administrator may delete.
    """
    principal = jwt_service.get_principal_from_token(auth_token)
    try:
        return await delete_comment_use_case.execute(
            DeleteCommentRequest(
                comment_id=comment_id,
                principal=principal,
                target_type=TargetType.CHARACTER,
                target_id=character_id,
            )
        )
    except Exception as e:
        raise to_http_exception(e, "delete comment") from e
