"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt

from tavern.config import AuthSettings
from tavern.domain.service import JWTService

SETTINGS = AuthSettings(jwt_secret="secret", jwt_leeway=0)


def sign(claims: dict) -> str:
    return jwt.encode(claims, "secret", algorithm="HS256")


class TestGetPrincipalFromToken:
    """Tests for get_principal_from_token."""

    def test_round_trip_principal(self):
        service = JWTService(SETTINGS)
        token = service.create_token("alice", "Alice", admin=True)

        principal = service.get_principal_from_token(token)

        assert principal.handle == "alice"
        assert principal.name == "Alice"
        assert principal.admin is True

    def test_missing_token_is_anonymous(self):
        service = JWTService(SETTINGS)

        assert service.get_principal_from_token(None) is None
        assert service.get_principal_from_token("") is None

    def test_token_signed_with_other_secret_is_anonymous(self):
        token = JWTService(AuthSettings(jwt_secret="other")).create_token("eve", "Eve")
        service = JWTService(SETTINGS)

        assert service.get_principal_from_token(token) is None

    def test_garbage_token_is_anonymous(self):
        service = JWTService(SETTINGS)

        assert service.get_principal_from_token("not-a-jwt") is None

    def test_expired_token_is_anonymous(self):
        expired = datetime.now(timezone.utc) - timedelta(minutes=5)
        token = sign({"handle": "alice", "name": "Alice", "exp": expired})

        assert JWTService(SETTINGS).get_principal_from_token(token) is None

    def test_token_without_handle_is_anonymous(self):
        expiry = datetime.now(timezone.utc) + timedelta(days=1)
        token = sign({"name": "Alice", "exp": expiry})

        assert JWTService(SETTINGS).get_principal_from_token(token) is None

    def test_name_falls_back_to_handle(self):
        """Tokens from older servers carry no display name."""
        expiry = datetime.now(timezone.utc) + timedelta(days=1)
        token = sign({"handle": "alice", "exp": expiry})

        principal = JWTService(SETTINGS).get_principal_from_token(token)

        assert principal.name == "alice"
        assert principal.admin is False
