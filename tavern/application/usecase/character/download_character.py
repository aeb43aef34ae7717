"""Download and import public character use cases."""

from typing import Any

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.domain.model import Principal
from tavern.domain.service import CharacterService
from tavern.domain.value import CharacterId


class DownloadCharacterResponse(BaseModel):
    """Download character response."""

    success: bool = True
    character_data: dict[str, Any]


class DownloadCharacterUseCase:
    """Use case for downloading a character's card data."""

    def __init__(self, character_service: CharacterService) -> None:
        """Initialize download character use case.

        Args:
            character_service: Character domain service
        """
        self.character_service = character_service

    async def execute(self, character_id: str) -> DownloadCharacterResponse:
        """Count the download and return the card data.

        Raises:
            NotFoundError: If character not found
        """
        character = await self.character_service.record_download(
            CharacterId(character_id)
        )
        return DownloadCharacterResponse(character_data=character.character_data)


class ImportCharacterRequest(BaseModel):
    """Import character request."""

    character_id: str
    principal: Principal | None = None


class ImportCharacterResponse(BaseModel):
    """Import character response."""

    success: bool = True
    message: str
    file_name: str


class ImportCharacterUseCase:
    """Use case for copying a public character into the caller's library."""

    def __init__(self, character_service: CharacterService) -> None:
        """Initialize import character use case.

        Args:
            character_service: Character domain service
        """
        self.character_service = character_service

    async def execute(self, request: ImportCharacterRequest) -> ImportCharacterResponse:
        """Execute import flow.

        Counts as a download.

        Raises:
            NotAuthenticatedError: If the request is anonymous
            NotFoundError: If the character or its stored file is missing
        """
        principal = require_principal(request.principal, "import characters")
        character = await self.character_service.record_download(
            CharacterId(request.character_id)
        )
        file_name = await self.character_service.import_to_library(
            character, principal.handle
        )
        return ImportCharacterResponse(message="角色卡导入成功", file_name=file_name)
