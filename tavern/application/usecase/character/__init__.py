"""Public character use cases."""

from .delete_character import (
    DeleteCharacterRequest,
    DeleteCharacterResponse,
    DeleteCharacterUseCase,
)
from .download_character import (
    DownloadCharacterResponse,
    DownloadCharacterUseCase,
    ImportCharacterRequest,
    ImportCharacterResponse,
    ImportCharacterUseCase,
)
from .get_avatar import GetAvatarUseCase
from .get_character import GetCharacterUseCase
from .list_characters import (
    CharacterItem,
    CharacterSummary,
    ListCharactersRequest,
    ListCharactersResponse,
    ListCharactersUseCase,
)
from .upload_character import (
    UploadCharacterRequest,
    UploadCharacterUseCase,
    parse_tags,
)

__all__ = [
    "CharacterItem",
    "CharacterSummary",
    "DeleteCharacterRequest",
    "DeleteCharacterResponse",
    "DeleteCharacterUseCase",
    "DownloadCharacterResponse",
    "DownloadCharacterUseCase",
    "GetAvatarUseCase",
    "GetCharacterUseCase",
    "ImportCharacterRequest",
    "ImportCharacterResponse",
    "ImportCharacterUseCase",
    "ListCharactersRequest",
    "ListCharactersResponse",
    "ListCharactersUseCase",
    "UploadCharacterRequest",
    "UploadCharacterUseCase",
    "parse_tags",
]
