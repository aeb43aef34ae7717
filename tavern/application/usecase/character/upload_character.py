"""Upload public character use case."""

import json

from pydantic import BaseModel

from tavern.application.usecase.base import require_principal
from tavern.config import StorageSettings
from tavern.domain.error import ValidationError
from tavern.domain.model import Principal
from tavern.domain.service import CharacterService
from tavern.domain.value import CardFormat

from .list_characters import CharacterItem


def parse_tags(raw: str | None) -> list[str]:
    """Parse tags sent as a JSON array or a comma separated list."""
    if not raw:
        return []
    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        parsed = None
    if isinstance(parsed, list):
        return [str(tag).strip() for tag in parsed if str(tag).strip()]
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


class UploadCharacterRequest(BaseModel):
    """Upload character request."""

    name: str | None = None
    description: str | None = None
    tags: str | None = None  # JSON array or comma separated
    filename: str | None = None
    content_type: str | None = None
    content: bytes | None = None
    principal: Principal | None = None


class UploadCharacterUseCase:
    """Use case for sharing a character card in the public gallery."""

    def __init__(
        self, character_service: CharacterService, storage_settings: StorageSettings
    ) -> None:
        """Initialize upload character use case.

        Args:
            character_service: Character domain service
            storage_settings: Provides the upload size limit
        """
        self.character_service = character_service
        self.storage_settings = storage_settings

    async def execute(self, request: UploadCharacterRequest) -> CharacterItem:
        """Execute upload character flow.

        Steps:
        1. Require an authenticated caller
        2. Check a file was sent, its size and its type
        3. Parse the card, store the file and create the record

        Raises:
            NotAuthenticatedError: If the request is anonymous
            ValidationError: If the file is missing, too large, of an
                unsupported type or not a valid card, or the name is empty
        """
        principal = require_principal(request.principal, "upload characters")

        if not request.content:
            raise ValidationError("Please choose a character card file")
        if len(request.content) > self.storage_settings.max_upload_bytes:
            raise ValidationError("File size cannot exceed 10MB")

        card_format = CardFormat.detect(request.content_type, request.filename)
        if card_format is None:
            raise ValidationError("Unsupported file type: only PNG, JSON and YAML")

        character = await self.character_service.create_character(
            uploader=principal.as_author(),
            name=request.name or "",
            content=request.content,
            card_format=card_format,
            description=request.description,
            tags=parse_tags(request.tags),
        )
        return CharacterItem.from_domain(character)
