"""Unit tests for the local filesystem adapters."""

import pytest

from tavern.adapter.filesystem import LocalFileStorage, LocalUserLibrary
from tavern.domain.error import ValidationError
from tavern.domain.service import sanitize_filename
from tavern.domain.value import StorageBucket


class TestSanitizeFilename:
    """Tests for sanitize_filename."""

    def test_strips_separators_and_reserved_characters(self):
        assert sanitize_filename('a/b\\c:d*e?f"g<h>i|j') == "abcdefghij"

    def test_keeps_unicode(self):
        assert sanitize_filename("塞拉菲娜.png") == "塞拉菲娜.png"

    @pytest.mark.parametrize("name", ["", "   ", ".", "..", "../", "..secret", "/"])
    def test_rejects_unusable_names(self, name):
        with pytest.raises(ValidationError):
            sanitize_filename(name)


class TestLocalFileStorage:
    """Tests for LocalFileStorage."""

    @pytest.mark.asyncio
    async def test_save_load_delete(self, tmp_path):
        storage = LocalFileStorage(tmp_path)

        await storage.save(StorageBucket.PUBLIC_CHARACTERS, "abc.png", b"data")

        assert (tmp_path / "public_characters" / "abc.png").read_bytes() == b"data"
        assert await storage.exists(StorageBucket.PUBLIC_CHARACTERS, "abc.png")
        assert await storage.load(StorageBucket.PUBLIC_CHARACTERS, "abc.png") == b"data"
        assert await storage.delete(StorageBucket.PUBLIC_CHARACTERS, "abc.png") is True
        assert await storage.delete(StorageBucket.PUBLIC_CHARACTERS, "abc.png") is False
        assert await storage.load(StorageBucket.PUBLIC_CHARACTERS, "abc.png") is None

    @pytest.mark.asyncio
    async def test_save_replaces_existing_file(self, tmp_path):
        storage = LocalFileStorage(tmp_path)

        await storage.save(StorageBucket.FORUM_IMAGES, "x.png", b"one")
        await storage.save(StorageBucket.FORUM_IMAGES, "x.png", b"two")

        assert await storage.load(StorageBucket.FORUM_IMAGES, "x.png") == b"two"
        # No temp files left behind
        assert [p.name for p in (tmp_path / "forum_data" / "images").iterdir()] == [
            "x.png"
        ]

    @pytest.mark.asyncio
    async def test_names_cannot_escape_bucket(self, tmp_path):
        storage = LocalFileStorage(tmp_path / "root")

        with pytest.raises(ValidationError):
            await storage.save(StorageBucket.FORUM_IMAGES, "../../evil.png", b"x")
        await storage.save(StorageBucket.FORUM_IMAGES, "sub/evil.png", b"x")

        assert not (tmp_path / "evil.png").exists()
        assert (tmp_path / "root" / "forum_data" / "images" / "subevil.png").exists()


class TestLocalUserLibrary:
    """Tests for LocalUserLibrary."""

    @pytest.mark.asyncio
    async def test_import_writes_card_and_chats_dir(self, tmp_path):
        library = LocalUserLibrary(tmp_path)

        file_name = await library.import_character(
            "alice", "Seraphina_1700000000000", b"{}", "json"
        )

        assert file_name == "Seraphina_1700000000000.json"
        assert (tmp_path / "alice" / "characters" / file_name).read_bytes() == b"{}"
        assert (tmp_path / "alice" / "chats" / "Seraphina_1700000000000").is_dir()
