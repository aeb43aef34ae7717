"""Persistence layer errors."""


class StoreError(Exception):
    """A database operation failed.

    Wraps the driver/SQLAlchemy exception so upper layers don't depend on it.
    """

    def __init__(self, operation: str, cause: Exception | None = None):
        self.operation = operation
        self.cause = cause
        super().__init__(f"Store operation failed: {operation}")
