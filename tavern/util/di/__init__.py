"""Dependency injection wiring."""

from tavern.util.di.adapter import ProdAdapterProvider
from tavern.util.di.application import ProdApplicationProvider
from tavern.util.di.base import Component, ProviderBase
from tavern.util.di.core import ProdConfigProvider
from tavern.util.di.domain import ProdDomainProvider
from tavern.util.di.infrastructure import (
    PersistenceProvider,
    ProdPersistenceProvider,
    ProdStorageProvider,
    StorageProvider,
)

PROVIDERS: list[type[ProviderBase]] = [
    ProdConfigProvider,
    ProdDomainProvider,
    ProdApplicationProvider,
    ProdAdapterProvider,
    PersistenceProvider,
    StorageProvider,
]

COMPONENTS: frozenset[Component] = frozenset(
    base.__mock_component__ for base in PROVIDERS if base.__mock_component__
)

__all__ = [
    "COMPONENTS",
    "Component",
    "PROVIDERS",
    "PersistenceProvider",
    "ProdAdapterProvider",
    "ProdApplicationProvider",
    "ProdConfigProvider",
    "ProdDomainProvider",
    "ProdPersistenceProvider",
    "ProdStorageProvider",
    "ProviderBase",
    "StorageProvider",
]
