"""Public character card.

A character card uploaded to the shared gallery. The parsed card JSON is
kept in ``character_data``; the original file lives in file storage under
``avatar``.
"""

from datetime import datetime
from typing import Any

from pydantic import Field

from tavern.domain.model.common import DomainModel, utc_now
from tavern.domain.value import Author, CharacterId


class Character(DomainModel):
    """Public character card."""

    id: CharacterId
    name: str = Field(min_length=1, max_length=255)
    description: str = ""
    tags: list[str] = Field(default_factory=list)
    uploader: Author
    character_data: dict[str, Any] = Field(default_factory=dict)
    avatar: str
    downloads: int = Field(default=0, ge=0)
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    uploaded_at: datetime = Field(default_factory=utc_now)
    created_at: datetime = Field(default_factory=utc_now)
    updated_at: datetime = Field(default_factory=utc_now)

    @property
    def file_extension(self) -> str:
        """Extension of the stored card file, without the dot."""
        _, _, ext = self.avatar.rpartition(".")
        return ext.lower()
