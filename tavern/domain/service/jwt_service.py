"""Resolving callers from the session cookie."""

import logfire

from tavern.config import AuthSettings
from tavern.domain.model import Principal
from tavern.util.jwt import JWTError, create_token, verify_token


class JWTService:
    """Turns ``auth_token`` cookies into principals."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        self.auth_settings = auth_settings

    def create_token(self, handle: str, name: str, admin: bool = False) -> str:
        """Sign a session token for ``handle``.

        The chat server issues real sessions; this serves tooling and tests.
        """
        return create_token(handle, name, self.auth_settings, admin=admin)

    def get_principal_from_token(self, token: str | None) -> Principal | None:
        """Resolve the caller, or ``None`` for anonymous visitors.

        Missing, expired and forged tokens all count as anonymous; routes
        that need a login then answer 401.

        Args:
            token: Raw cookie value, if any

        Returns:
            The authenticated principal, or None
        """
        if not token:
            return None

        try:
            payload = verify_token(token, self.auth_settings)
        except JWTError as e:
            logfire.debug("Ignoring unusable session token", error=str(e))
            return None

        return Principal(
            handle=payload.handle, name=payload.display_name, admin=payload.admin
        )
