"""Public character domain service."""

import json
import time
from typing import Sequence

import logfire

from tavern.domain.error import NotFoundError, ValidationError
from tavern.domain.model import Character
from tavern.domain.repository import CharacterRepository
from tavern.domain.value import Author, CardFormat, CharacterId, StorageBucket, new_id

from .card import CardCodec
from .storage import FileStorage, UserLibrary, sanitize_filename


class CharacterService:
    """Domain service for the public character gallery.

    Owns both the character records and the stored card files.
    """

    def __init__(
        self,
        character_repository: CharacterRepository,
        file_storage: FileStorage,
        user_library: UserLibrary,
        card_codec: CardCodec,
    ) -> None:
        """Initialize character service.

        Args:
            character_repository: Character repository
            file_storage: Storage holding uploaded card files
            user_library: Per-user character library
            card_codec: Card file codec
        """
        self.character_repository = character_repository
        self.file_storage = file_storage
        self.user_library = user_library
        self.card_codec = card_codec

    async def list_characters(
        self,
        query: str | None = None,
        uploader_handle: str | None = None,
        tags: Sequence[str] = (),
        limit: int = 1000,
        offset: int = 0,
    ) -> list[Character]:
        """List characters, most recent upload first, without card data."""
        with logfire.span(
            "character_service.list_characters",
            query=query,
            uploader_handle=uploader_handle,
            tags=list(tags),
            limit=limit,
            offset=offset,
        ):
            characters = await self.character_repository.find_all(
                query=query.strip() if query else None,
                uploader_handle=uploader_handle or None,
                tags=[tag for tag in tags if tag],
                limit=limit,
                offset=offset,
            )
            logfire.info("Characters listed", count=len(characters))
            return characters

    async def get_character(self, character_id: CharacterId) -> Character:
        """Get a character by ID.

        Raises:
            NotFoundError: If character not found
        """
        with logfire.span(
            "character_service.get_character", character_id=character_id
        ):
            character = await self.character_repository.find_by_id(character_id)
            if not character:
                logfire.warn("Character not found", character_id=character_id)
                raise NotFoundError("Character", character_id)
            return character

    async def view_character(self, character_id: CharacterId) -> Character:
        """Record a view and return the character.

        Raises:
            NotFoundError: If character not found
        """
        with logfire.span(
            "character_service.view_character", character_id=character_id
        ):
            character = await self.character_repository.increment_views(character_id)
            if not character:
                logfire.warn("Character not found", character_id=character_id)
                raise NotFoundError("Character", character_id)
            return character

    async def record_download(self, character_id: CharacterId) -> Character:
        """Count a download and return the character.

        Raises:
            NotFoundError: If character not found
        """
        with logfire.span(
            "character_service.record_download", character_id=character_id
        ):
            character = await self.character_repository.increment_downloads(
                character_id
            )
            if not character:
                logfire.warn("Character not found", character_id=character_id)
                raise NotFoundError("Character", character_id)
            logfire.info(
                "Character downloaded",
                character_id=character_id,
                downloads=character.downloads,
            )
            return character

    async def create_character(
        self,
        uploader: Author,
        name: str,
        content: bytes,
        card_format: CardFormat,
        description: str | None = None,
        tags: Sequence[str] = (),
    ) -> Character:
        """Parse an uploaded card, store its file and create the record.

        Args:
            uploader: Uploading user
            name: Display name (trimmed, required)
            content: Raw card file
            card_format: Detected file format
            description: Optional description
            tags: Tags

        Returns:
            Created character

        Raises:
            ValidationError: If the name is empty or the card cannot be parsed
        """
        with logfire.span(
            "character_service.create_character",
            uploader_handle=uploader.handle,
            card_format=card_format.value,
            size=len(content),
        ):
            name = (name or "").strip()
            if not name:
                raise ValidationError("Character name is required")

            character_data = self.card_codec.parse(content, card_format)

            character_id = CharacterId(new_id())
            file_name = f"{character_id}.{card_format.value}"
            await self.file_storage.save(
                StorageBucket.PUBLIC_CHARACTERS, file_name, content
            )

            try:
                character = Character(
                    id=character_id,
                    name=name,
                    description=(description or "").strip(),
                    tags=[tag.strip() for tag in tags if tag and tag.strip()],
                    uploader=uploader,
                    character_data=character_data,
                    avatar=file_name,
                )
                saved = await self.character_repository.save(character)
            except Exception:
                # No record will point at the file
                await self.file_storage.delete(
                    StorageBucket.PUBLIC_CHARACTERS, file_name
                )
                logfire.warn(
                    "Character upload failed, stored file removed",
                    character_id=character_id,
                    avatar=file_name,
                )
                raise

            logfire.info(
                "Character uploaded",
                character_id=saved.id,
                name=saved.name,
                uploader_handle=uploader.handle,
            )
            return saved

    async def delete_character(self, character: Character) -> None:
        """Delete a character record and its stored card file.

        Raises:
            NotFoundError: If the record is already gone
        """
        with logfire.span(
            "character_service.delete_character", character_id=character.id
        ):
            if not await self.character_repository.delete(character.id):
                raise NotFoundError("Character", character.id)

            removed = await self.file_storage.delete(
                StorageBucket.PUBLIC_CHARACTERS, character.avatar
            )
            if not removed:
                logfire.warn(
                    "Character file missing on delete",
                    character_id=character.id,
                    avatar=character.avatar,
                )
            logfire.info("Character deleted", character_id=character.id)

    async def load_card_file(self, file_name: str) -> bytes:
        """Read a stored card file.

        Raises:
            NotFoundError: If no such file exists
        """
        name = sanitize_filename(file_name)
        content = await self.file_storage.load(StorageBucket.PUBLIC_CHARACTERS, name)
        if content is None:
            raise NotFoundError("Avatar", name)
        return content

    async def import_to_library(self, character: Character, handle: str) -> str:
        """Copy a character card into a user's own library.

        PNG cards get the current card data embedded; other formats are
        written as pretty-printed JSON.

        Args:
            character: Character to import
            handle: Library owner

        Returns:
            Base file name written into the library

        Raises:
            NotFoundError: If the stored card file is missing
        """
        with logfire.span(
            "character_service.import_to_library",
            character_id=character.id,
            handle=handle,
        ):
            source = await self.file_storage.load(
                StorageBucket.PUBLIC_CHARACTERS, character.avatar
            )
            if source is None:
                logfire.error(
                    "Character source file missing",
                    character_id=character.id,
                    avatar=character.avatar,
                )
                raise NotFoundError("Character file", character.avatar)

            if character.file_extension == CardFormat.PNG.value:
                content = self.card_codec.embed(source, character.character_data)
                extension = CardFormat.PNG.value
            else:
                content = json.dumps(
                    character.character_data, ensure_ascii=False, indent=4
                ).encode("utf-8")
                extension = CardFormat.JSON.value

            try:
                stem = sanitize_filename(character.name)
            except ValidationError:
                stem = "character"
            base_name = f"{stem}_{int(time.time() * 1000)}"

            await self.user_library.import_character(
                handle, base_name, content, extension
            )
            logfire.info(
                "Character imported",
                character_id=character.id,
                handle=handle,
                file_name=base_name,
            )
            return base_name
