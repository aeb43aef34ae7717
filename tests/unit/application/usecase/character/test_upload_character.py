"""Unit tests for UploadCharacterUseCase."""

import json

import pytest

from tavern.application.usecase.character import (
    UploadCharacterRequest,
    UploadCharacterUseCase,
    parse_tags,
)
from tavern.domain.error import NotAuthenticatedError, ValidationError
from tavern.domain.repository import CharacterRepository
from tavern.domain.service import FileStorage
from tavern.domain.value import StorageBucket
from tavern.persistence.error import StoreError
from tests.conftest import make_card_png, make_principal
from tests.harness import create_env_fixture

unit_env = create_env_fixture()

CARD = {"name": "Seraphina", "description": "A guardian of the forest"}


class TestParseTags:
    """Tests for parse_tags."""

    def test_json_array(self):
        assert parse_tags('["fantasy", " elf ", ""]') == ["fantasy", "elf"]

    def test_comma_separated(self):
        assert parse_tags("fantasy, elf,,") == ["fantasy", "elf"]

    def test_empty(self):
        assert parse_tags(None) == []
        assert parse_tags("") == []


class TestUploadCharacter:
    """Tests for the upload flow."""

    @pytest.mark.asyncio
    async def test_png_card_is_parsed_and_stored(self, unit_env):
        # Arrange
        use_case = await unit_env.get(UploadCharacterUseCase)
        storage = await unit_env.get(FileStorage)
        content = make_card_png(CARD)

        # Act
        item = await use_case.execute(
            UploadCharacterRequest(
                name=" Seraphina ",
                description="Forest guardian",
                tags='["fantasy"]',
                filename="seraphina.png",
                content_type="image/png",
                content=content,
                principal=make_principal("alice"),
            )
        )

        # Assert
        assert item.name == "Seraphina"
        assert item.character_data == CARD
        assert item.tags == ["fantasy"]
        assert item.uploader.handle == "alice"
        assert item.avatar == f"{item.id}.png"
        assert await storage.load(StorageBucket.PUBLIC_CHARACTERS, item.avatar) == content

    @pytest.mark.asyncio
    async def test_json_card_by_extension(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)

        item = await use_case.execute(
            UploadCharacterRequest(
                name="Seraphina",
                filename="card.json",
                content_type="application/octet-stream",
                content=json.dumps(CARD).encode("utf-8"),
                principal=make_principal(),
            )
        )

        assert item.avatar.endswith(".json")
        assert item.character_data == CARD

    @pytest.mark.asyncio
    async def test_anonymous_rejected(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)

        with pytest.raises(NotAuthenticatedError):
            await use_case.execute(
                UploadCharacterRequest(
                    name="X", filename="x.json", content=b"{}"
                )
            )

    @pytest.mark.asyncio
    async def test_missing_file_rejected(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)

        with pytest.raises(ValidationError):
            await use_case.execute(
                UploadCharacterRequest(name="X", principal=make_principal())
            )

    @pytest.mark.asyncio
    async def test_unsupported_type_rejected(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)

        with pytest.raises(ValidationError, match="Unsupported file type"):
            await use_case.execute(
                UploadCharacterRequest(
                    name="X",
                    filename="card.txt",
                    content_type="text/plain",
                    content=b"hello",
                    principal=make_principal(),
                )
            )

    @pytest.mark.asyncio
    async def test_oversized_file_rejected(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)

        with pytest.raises(ValidationError, match="10MB"):
            await use_case.execute(
                UploadCharacterRequest(
                    name="X",
                    filename="card.json",
                    content=b" " * (10 * 1024 * 1024 + 1),
                    principal=make_principal(),
                )
            )

    @pytest.mark.asyncio
    async def test_blank_name_rejected_without_storing(self, unit_env):
        use_case = await unit_env.get(UploadCharacterUseCase)
        storage = await unit_env.get(FileStorage)

        with pytest.raises(ValidationError, match="name is required"):
            await use_case.execute(
                UploadCharacterRequest(
                    name="  ",
                    filename="card.json",
                    content=json.dumps(CARD).encode("utf-8"),
                    principal=make_principal(),
                )
            )

        assert storage.files == {}

    @pytest.mark.asyncio
    async def test_failed_insert_removes_stored_file(self, unit_env, monkeypatch):
        """A card whose record cannot be saved leaves no file behind."""
        # Arrange
        use_case = await unit_env.get(UploadCharacterUseCase)
        storage = await unit_env.get(FileStorage)
        repo = await unit_env.get(CharacterRepository)

        async def failing_save(character):
            raise StoreError("character.save", RuntimeError("connection lost"))

        monkeypatch.setattr(repo, "save", failing_save)

        # Act
        with pytest.raises(StoreError):
            await use_case.execute(
                UploadCharacterRequest(
                    name="Seraphina",
                    filename="card.json",
                    content=json.dumps(CARD).encode("utf-8"),
                    principal=make_principal(),
                )
            )

        # Assert
        assert storage.files == {}
