"""Get public character use case."""

from tavern.domain.service import CharacterService
from tavern.domain.value import CharacterId

from .list_characters import CharacterItem


class GetCharacterUseCase:
    """Use case for opening a character. Counts a view."""

    def __init__(self, character_service: CharacterService) -> None:
        """Initialize get character use case.

        Args:
            character_service: Character domain service
        """
        self.character_service = character_service

    async def execute(self, character_id: str) -> CharacterItem:
        """Execute get character flow.

        Raises:
            NotFoundError: If character not found
        """
        character = await self.character_service.view_character(
            CharacterId(character_id)
        )
        return CharacterItem.from_domain(character)
