"""File storage ports.

Binary uploads (forum images, character cards) and the per-user character
library live outside the database. Implementations are in
``tavern.adapter.filesystem``.
"""

import re

from tavern.domain.error import ValidationError
from tavern.domain.value import StorageBucket

_UNSAFE_CHARS = re.compile(r'[\\/:*?"<>|\x00-\x1f\x7f]')


def sanitize_filename(filename: str) -> str:
    """Strip path separators and reserved characters from a client file name.

    Raises:
        ValidationError: If nothing usable remains
    """
    cleaned = _UNSAFE_CHARS.sub("", filename or "").strip()
    if not cleaned or cleaned in (".", "..") or cleaned.startswith(".."):
        raise ValidationError("Invalid file name")
    return cleaned


class FileStorage:
    """Storage for uploaded binaries, addressed by bucket and file name."""

    async def save(self, bucket: StorageBucket, name: str, content: bytes) -> None:
        """Write a file, replacing any existing one."""
        raise NotImplementedError

    async def load(self, bucket: StorageBucket, name: str) -> bytes | None:
        """Read a file. Returns None if it doesn't exist."""
        raise NotImplementedError

    async def exists(self, bucket: StorageBucket, name: str) -> bool:
        """Whether a file exists."""
        raise NotImplementedError

    async def delete(self, bucket: StorageBucket, name: str) -> bool:
        """Delete a file. Returns True if one was removed."""
        raise NotImplementedError


class UserLibrary:
    """A user's own character library in the host chat application."""

    async def import_character(
        self, handle: str, base_name: str, content: bytes, extension: str
    ) -> str:
        """Write a character card into the user's library.

        Also ensures the character's chats directory exists.

        Args:
            handle: Owner of the library
            base_name: File name without extension
            content: Card file content
            extension: File extension without the dot

        Returns:
            The written file name
        """
        raise NotImplementedError
