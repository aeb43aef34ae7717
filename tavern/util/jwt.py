"""Session token encoding.

The host chat server signs tokens with a shared HS256 secret and puts them
in the ``auth_token`` cookie. Claims mirror its user profile: ``handle``,
display ``name`` and the ``admin`` flag.
"""

from datetime import datetime, timedelta, timezone

import jwt
from pydantic import BaseModel, ValidationError

from tavern.config import AuthSettings


class TokenPayload(BaseModel):
    handle: str
    name: str | None = None
    admin: bool = False
    exp: datetime

    @property
    def display_name(self) -> str:
        return self.name or self.handle


class JWTError(Exception):
    """Token missing a claim, badly signed, malformed or expired."""


def create_token(
    handle: str, name: str, settings: AuthSettings, admin: bool = False
) -> str:
    """Sign a token the way the host chat server does.

    Only tooling and tests mint tokens here.

    Args:
        handle: User handle
        name: Display name
        settings: Authentication settings
        admin: Whether the user is an administrator

    Returns:
        Encoded token
    """
    claims = {
        "handle": handle,
        "name": name,
        "admin": admin,
        "exp": datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Check the signature and expiry, then parse the claims.

    Raises:
        JWTError: If the token cannot be trusted
    """
    try:
        claims = jwt.decode(
            token,
            settings.jwt_secret,
            algorithms=[settings.jwt_algorithm],
            leeway=settings.jwt_leeway,
            options={"require": ["exp", "handle"]},
        )
    except jwt.ExpiredSignatureError as e:
        raise JWTError("Token has expired") from e
    except jwt.InvalidTokenError as e:
        raise JWTError(f"Invalid token: {e}") from e

    try:
        return TokenPayload.model_validate(claims)
    except ValidationError as e:
        raise JWTError("Token claims are malformed") from e
