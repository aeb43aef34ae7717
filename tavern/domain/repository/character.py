"""Character repository interface."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from tavern.domain.model.character import Character
from tavern.domain.value import CharacterId


class CharacterRepository(ABC):
    """Repository for public character cards."""

    @abstractmethod
    async def find_by_id(self, character_id: CharacterId) -> Optional[Character]:
        """Find a character by ID, including its card data."""
        pass

    @abstractmethod
    async def find_all(
        self,
        query: Optional[str] = None,
        uploader_handle: Optional[str] = None,
        tags: Sequence[str] = (),
        limit: int = 1000,
        offset: int = 0,
    ) -> List[Character]:
        """Find characters, most recently uploaded first.

        ``character_data`` is not loaded for listings and comes back empty.

        Args:
            query: Case-insensitive substring matched against name, description and tags
            uploader_handle: Exact uploader handle filter
            tags: Tags that must all be present
            limit: Maximum number of characters to return
            offset: Number of characters to skip

        Returns:
            List of characters matching the criteria
        """
        pass

    @abstractmethod
    async def save(self, character: Character) -> Character:
        """Save a character (create or update)."""
        pass

    @abstractmethod
    async def delete(self, character_id: CharacterId) -> bool:
        """Delete a character. Returns True if one was removed."""
        pass

    @abstractmethod
    async def increment_views(self, character_id: CharacterId) -> Optional[Character]:
        """Atomically increment views by 1 and return the updated character."""
        pass

    @abstractmethod
    async def increment_downloads(
        self, character_id: CharacterId
    ) -> Optional[Character]:
        """Atomically increment downloads by 1 and return the updated character."""
        pass
