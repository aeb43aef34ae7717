"""In-memory character repository for testing."""

from typing import Optional, Sequence

from tavern.domain.model.character import Character
from tavern.domain.repository.character import CharacterRepository
from tavern.domain.value import CharacterId


class InMemoryCharacterRepository(CharacterRepository):
    """In-memory implementation of CharacterRepository for testing."""

    def __init__(self) -> None:
        self._characters: dict[CharacterId, Character] = {}

    async def find_by_id(self, character_id: CharacterId) -> Optional[Character]:
        """Find a character by ID."""
        return self._characters.get(character_id)

    async def find_all(
        self,
        query: Optional[str] = None,
        uploader_handle: Optional[str] = None,
        tags: Sequence[str] = (),
        limit: int = 1000,
        offset: int = 0,
    ) -> list[Character]:
        """Find characters, most recent upload first, without card data."""
        characters = list(self._characters.values())

        if query:
            needle = query.lower()
            characters = [
                c
                for c in characters
                if needle in c.name.lower()
                or needle in c.description.lower()
                or any(needle in tag.lower() for tag in c.tags)
            ]
        if uploader_handle:
            characters = [c for c in characters if c.uploader.handle == uploader_handle]
        if tags:
            characters = [c for c in characters if set(tags) <= set(c.tags)]

        characters.sort(key=lambda c: c.uploaded_at, reverse=True)
        return [
            c.model_copy(update={"character_data": {}})
            for c in characters[offset : offset + limit]
        ]

    async def save(self, character: Character) -> Character:
        """Save or update a character."""
        self._characters[character.id] = character
        return character

    async def delete(self, character_id: CharacterId) -> bool:
        """Delete a character."""
        return self._characters.pop(character_id, None) is not None

    async def increment_views(self, character_id: CharacterId) -> Optional[Character]:
        """Increment views by 1."""
        character = self._characters.get(character_id)
        if not character:
            return None
        updated = character.model_copy(update={"views": character.views + 1})
        self._characters[character_id] = updated
        return updated

    async def increment_downloads(
        self, character_id: CharacterId
    ) -> Optional[Character]:
        """Increment downloads by 1."""
        character = self._characters.get(character_id)
        if not character:
            return None
        updated = character.model_copy(update={"downloads": character.downloads + 1})
        self._characters[character_id] = updated
        return updated
