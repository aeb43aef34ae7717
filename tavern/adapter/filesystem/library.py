"""Per-user character library on the local filesystem.

Layout matches the host chat application's user directories::

    {data_root}/{handle}/characters/{name}.{ext}
    {data_root}/{handle}/chats/{name}/
"""

import asyncio
from pathlib import Path

import logfire

from tavern.adapter.error import StorageError
from tavern.domain.service.storage import UserLibrary, sanitize_filename

from .storage import write_atomic


class LocalUserLibrary(UserLibrary):
    """User character libraries under the data root."""

    def __init__(self, data_root: Path) -> None:
        """Initialize the library.

        Args:
            data_root: Directory holding one subdirectory per user handle
        """
        self.data_root = data_root

    def _write(self, handle: str, file_name: str, base_name: str, content: bytes) -> None:
        user_dir = self.data_root / sanitize_filename(handle)
        write_atomic(user_dir / "characters" / file_name, content)
        (user_dir / "chats" / base_name).mkdir(parents=True, exist_ok=True)

    async def import_character(
        self, handle: str, base_name: str, content: bytes, extension: str
    ) -> str:
        """Write a card into the user's characters directory."""
        base_name = sanitize_filename(base_name)
        file_name = f"{base_name}.{extension}"
        with logfire.span(
            "user_library.import_character", handle=handle, file_name=file_name
        ):
            try:
                await asyncio.to_thread(
                    self._write, handle, file_name, base_name, content
                )
            except OSError as e:
                logfire.error(
                    "Character import write failed",
                    handle=handle,
                    file_name=file_name,
                    error=str(e),
                )
                raise StorageError(f"Failed to import {file_name}") from e
            logfire.info("Character written to library", handle=handle, file_name=file_name)
            return file_name


class InMemoryUserLibrary(UserLibrary):
    """Records imported cards in memory for tests."""

    def __init__(self) -> None:
        self.files: dict[tuple[str, str], bytes] = {}

    async def import_character(
        self, handle: str, base_name: str, content: bytes, extension: str
    ) -> str:
        file_name = f"{sanitize_filename(base_name)}.{extension}"
        self.files[(handle, file_name)] = content
        return file_name
