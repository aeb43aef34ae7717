"""Settings and per-request state providers."""

from dishka import Scope, provide

from tavern.config import AuthSettings, DatabaseSettings, Settings, StorageSettings
from tavern.persistence.database import Transaction
from tavern.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Loads ``Settings`` once and hands out the groups services depend on."""

    scope = Scope.APP

    @provide
    def provide_settings(self) -> Settings:
        return Settings()

    @provide
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        return settings.auth

    @provide
    def provide_database_settings(self, settings: Settings) -> DatabaseSettings:
        return settings.database

    @provide
    def provide_storage_settings(self, settings: Settings) -> StorageSettings:
        return settings.storage

    # Shared by the session and the HTTP error handler of the same request
    transaction = provide(Transaction, scope=Scope.REQUEST)
