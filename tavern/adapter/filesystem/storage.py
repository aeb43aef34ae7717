"""Local filesystem file storage."""

import asyncio
import os
import tempfile
from pathlib import Path

import logfire

from tavern.adapter.error import StorageError
from tavern.domain.service.storage import FileStorage, sanitize_filename
from tavern.domain.value import StorageBucket


def write_atomic(path: Path, content: bytes) -> None:
    """Write ``content`` to ``path`` through a temp file and rename."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, "wb") as tmp:
            tmp.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class LocalFileStorage(FileStorage):
    """File storage rooted at the configured data directory.

    Each bucket maps to a subdirectory that is created on first write.
    """

    def __init__(self, data_root: Path) -> None:
        """Initialize local storage.

        Args:
            data_root: Directory all buckets live under
        """
        self.data_root = data_root

    def _path(self, bucket: StorageBucket, name: str) -> Path:
        return self.data_root / bucket.value / sanitize_filename(name)

    async def save(self, bucket: StorageBucket, name: str, content: bytes) -> None:
        """Write a file atomically."""
        path = self._path(bucket, name)
        with logfire.span(
            "file_storage.save", bucket=bucket.value, name=name, size=len(content)
        ):
            try:
                await asyncio.to_thread(write_atomic, path, content)
            except OSError as e:
                logfire.error(
                    "File write failed", bucket=bucket.value, name=name, error=str(e)
                )
                raise StorageError(f"Failed to store {name}") from e

    async def load(self, bucket: StorageBucket, name: str) -> bytes | None:
        """Read a file, or None if it doesn't exist."""
        path = self._path(bucket, name)
        try:
            return await asyncio.to_thread(path.read_bytes)
        except FileNotFoundError:
            return None
        except OSError as e:
            logfire.error(
                "File read failed", bucket=bucket.value, name=name, error=str(e)
            )
            raise StorageError(f"Failed to read {name}") from e

    async def exists(self, bucket: StorageBucket, name: str) -> bool:
        """Whether a file exists."""
        return await asyncio.to_thread(self._path(bucket, name).is_file)

    async def delete(self, bucket: StorageBucket, name: str) -> bool:
        """Delete a file. Returns True if one was removed."""
        path = self._path(bucket, name)
        try:
            await asyncio.to_thread(path.unlink)
        except FileNotFoundError:
            return False
        except OSError as e:
            logfire.error(
                "File delete failed", bucket=bucket.value, name=name, error=str(e)
            )
            raise StorageError(f"Failed to delete {name}") from e
        logfire.info("File deleted", bucket=bucket.value, name=name)
        return True


class InMemoryFileStorage(FileStorage):
    """Dict-backed file storage for tests."""

    def __init__(self) -> None:
        self.files: dict[tuple[StorageBucket, str], bytes] = {}

    async def save(self, bucket: StorageBucket, name: str, content: bytes) -> None:
        self.files[(bucket, sanitize_filename(name))] = content

    async def load(self, bucket: StorageBucket, name: str) -> bytes | None:
        return self.files.get((bucket, sanitize_filename(name)))

    async def exists(self, bucket: StorageBucket, name: str) -> bool:
        return (bucket, sanitize_filename(name)) in self.files

    async def delete(self, bucket: StorageBucket, name: str) -> bool:
        return self.files.pop((bucket, sanitize_filename(name)), None) is not None
