"""Domain layer errors."""


class DomainError(Exception):
    """Base domain error."""

    pass


class ValidationError(DomainError):
    """Domain validation error (missing or malformed input)."""

    pass


class NotAuthenticatedError(DomainError):
    """Raised when an operation requires an identity and none was resolved."""

    def __init__(self, action: str = "perform this action"):
        super().__init__(f"Authentication required to {action}")


class PermissionDeniedError(DomainError):
    """Raised when a user attempts to modify content they don't own."""

    def __init__(self, resource: str, resource_id: str, handle: str):
        self.resource = resource
        self.resource_id = resource_id
        self.handle = handle
        super().__init__(
            f"User {handle} is not allowed to modify {resource} {resource_id}"
        )


class NotFoundError(DomainError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str):
        self.resource = resource
        self.identifier = identifier
        super().__init__(f"{resource} not found: {identifier}")
