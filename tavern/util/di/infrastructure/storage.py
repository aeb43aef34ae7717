"""File storage infrastructure providers."""

from dishka import Scope, provide

from tavern.adapter.filesystem import LocalFileStorage, LocalUserLibrary
from tavern.config import StorageSettings
from tavern.domain.service import FileStorage, UserLibrary
from tavern.util.di.base import ProviderBase


class StorageProvider(ProviderBase):
    """File storage component base."""

    __mock_component__ = "storage"


class ProdStorageProvider(StorageProvider):
    """Production storage provider using the local data directory."""

    __is_mock__ = False

    scope = Scope.APP

    @provide
    def get_file_storage(self, storage_settings: StorageSettings) -> FileStorage:
        """Provide file storage for uploads."""
        return LocalFileStorage(storage_settings.data_root)

    @provide
    def get_user_library(self, storage_settings: StorageSettings) -> UserLibrary:
        """Provide per-user character libraries."""
        return LocalUserLibrary(storage_settings.data_root)
