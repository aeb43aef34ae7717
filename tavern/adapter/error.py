"""Adapter layer errors."""


class AdapterError(Exception):
    """Base adapter error."""

    pass


class StorageError(AdapterError):
    """A file storage operation failed."""

    pass
