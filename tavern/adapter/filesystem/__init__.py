"""Local filesystem adapters."""

from .library import InMemoryUserLibrary, LocalUserLibrary
from .storage import InMemoryFileStorage, LocalFileStorage

__all__ = [
    "InMemoryFileStorage",
    "InMemoryUserLibrary",
    "LocalFileStorage",
    "LocalUserLibrary",
]
