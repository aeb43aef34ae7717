"""Mock file storage providers for testing."""

from dishka import Scope, provide

from tavern.adapter.filesystem import InMemoryFileStorage, InMemoryUserLibrary
from tavern.domain.service import FileStorage, UserLibrary
from tavern.util.di.infrastructure.storage import StorageProvider


class MockStorageProvider(StorageProvider):
    """Mock storage provider keeping files in memory."""

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_file_storage(self) -> FileStorage:
        """Provide in-memory file storage."""
        return InMemoryFileStorage()

    @provide(scope=Scope.APP)
    def get_user_library(self) -> UserLibrary:
        """Provide in-memory user library."""
        return InMemoryUserLibrary()
