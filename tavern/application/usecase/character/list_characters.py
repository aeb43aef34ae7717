"""List public characters use case."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from tavern.config import StorageSettings
from tavern.domain.model import Character
from tavern.domain.service import CharacterService
from tavern.domain.value import Author


class CharacterSummary(BaseModel):
    """Character in a listing (no card data)."""

    id: str
    name: str
    description: str
    tags: list[str]
    uploader: Author
    avatar: str
    downloads: int
    views: int
    likes: int
    uploaded_at: datetime
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_domain(cls, character: Character) -> "CharacterSummary":
        """Convert a domain character, dropping its card data."""
        return cls(**character.model_dump(exclude={"character_data"}))


class CharacterItem(CharacterSummary):
    """Character detail including the parsed card."""

    character_data: dict[str, Any]

    @classmethod
    def from_domain(cls, character: Character) -> "CharacterItem":
        """Convert a domain character."""
        return cls(**character.model_dump())


class ListCharactersRequest(BaseModel):
    """List characters request."""

    query: str | None = None
    uploader: str | None = None
    tags: list[str] = []
    page: int = Field(default=1, ge=1)
    limit: int | None = Field(default=None, ge=1)


class ListCharactersResponse(BaseModel):
    """List characters response."""

    characters: list[CharacterSummary]


class ListCharactersUseCase:
    """Use case for browsing the public character gallery."""

    def __init__(
        self, character_service: CharacterService, storage_settings: StorageSettings
    ) -> None:
        """Initialize list characters use case.

        Args:
            character_service: Character domain service
            storage_settings: Provides the default page size
        """
        self.character_service = character_service
        self.storage_settings = storage_settings

    async def execute(self, request: ListCharactersRequest) -> ListCharactersResponse:
        """Execute list characters flow.

        Returns:
            Matching characters, most recent upload first
        """
        limit = request.limit or self.storage_settings.character_page_size
        characters = await self.character_service.list_characters(
            query=request.query,
            uploader_handle=request.uploader,
            tags=request.tags,
            limit=limit,
            offset=(request.page - 1) * limit,
        )
        return ListCharactersResponse(
            characters=[CharacterSummary.from_domain(c) for c in characters]
        )
