"""Access checks shared by use cases."""

from tavern.domain.error import NotAuthenticatedError, PermissionDeniedError
from tavern.domain.model import Principal


def require_principal(principal: Principal | None, action: str) -> Principal:
    """Return the caller, or fail if the request is anonymous.

    Args:
        principal: Resolved caller (None when anonymous)
        action: What the caller tried to do, for the error message

    Raises:
        NotAuthenticatedError: If ``principal`` is None
    """
    if principal is None:
        raise NotAuthenticatedError(action)
    return principal


def require_owner(
    principal: Principal | None,
    owner_handle: str,
    resource: str,
    resource_id: str,
) -> Principal:
    """Return the caller if they own the record or are an administrator.

    Raises:
        NotAuthenticatedError: If the request is anonymous
        PermissionDeniedError: If the caller is neither owner nor admin
    """
    principal = require_principal(principal, f"modify this {resource.lower()}")
    if not principal.can_modify(owner_handle):
        raise PermissionDeniedError(resource, resource_id, principal.handle)
    return principal
