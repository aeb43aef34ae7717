"""Serve a stored character card file."""

from pathlib import PurePath

from tavern.domain.service import CharacterService

CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".json": "application/json",
    ".yaml": "application/x-yaml",
}


class GetAvatarUseCase:
    """Use case for reading a character's card file (used as its avatar)."""

    def __init__(self, character_service: CharacterService) -> None:
        """Initialize get avatar use case.

        Args:
            character_service: Character domain service
        """
        self.character_service = character_service

    async def execute(self, filename: str) -> tuple[str, bytes]:
        """Load the file and pick a content type from its extension.

        Returns:
            Tuple of (content type, content)

        Raises:
            NotFoundError: If no such file exists
        """
        content = await self.character_service.load_card_file(filename)
        content_type = CONTENT_TYPES.get(PurePath(filename).suffix.lower(), "image/png")
        return content_type, content
