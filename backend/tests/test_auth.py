"""
Tests for JWT authentication and role checks.
"""

import time

import jwt
import pytest

from shared.config.settings import JWT_AUDIENCE, JWT_ISSUER, JWT_SECRET
from shared.security.auth import (
    get_bearer_token,
    get_user_email,
    get_user_id,
    require_roles,
    sign_jwt,
    verify_jwt,
)
from shared.utils.exceptions import AuthenticationError, InsufficientRoleError


class TestJwt:
    """Token signing and verification."""

    def test_round_trip_claims(self):
        token = sign_jwt({"sub": "7", "email": "a@test.com", "roles": ["ADMIN"]})
        claims = verify_jwt(token)
        assert claims["sub"] == "7"
        assert claims["roles"] == ["ADMIN"]
        assert claims["iss"] == JWT_ISSUER

    def test_expired_token(self):
        token = sign_jwt({"sub": "7", "roles": []}, ttl_seconds=-30)
        with pytest.raises(AuthenticationError, match="expired"):
            verify_jwt(token)

    def test_wrong_audience(self):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "7", "iss": JWT_ISSUER, "aud": "someone-else", "iat": now, "exp": now + 60},
            JWT_SECRET,
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError):
            verify_jwt(token)

    def test_wrong_secret(self):
        now = int(time.time())
        token = jwt.encode(
            {"sub": "7", "iss": JWT_ISSUER, "aud": JWT_AUDIENCE, "iat": now, "exp": now + 60},
            "another-secret-that-is-long-enough-for-hs256",
            algorithm="HS256",
        )
        with pytest.raises(AuthenticationError, match="Invalid token"):
            verify_jwt(token)

    def test_missing_subject(self):
        with pytest.raises(AuthenticationError, match="subject"):
            verify_jwt(sign_jwt({"email": "a@test.com"}))

    def test_malformed_subject(self):
        with pytest.raises(AuthenticationError, match="subject"):
            verify_jwt(sign_jwt({"sub": "abc"}))

    def test_malformed_roles(self):
        with pytest.raises(AuthenticationError, match="roles"):
            verify_jwt(sign_jwt({"sub": "1", "roles": "ADMIN"}))


class TestBearerHeader:
    """Authorization header parsing."""

    def test_extracts_token(self):
        assert get_bearer_token("Bearer abc.def") == "abc.def"

    def test_missing_header(self):
        with pytest.raises(AuthenticationError) as exc:
            get_bearer_token(None)
        assert exc.value.status_code == 401
        assert exc.value.headers == {"WWW-Authenticate": "Bearer"}

    def test_wrong_scheme(self):
        with pytest.raises(AuthenticationError):
            get_bearer_token("Basic dXNlcjpwYXNz")


class TestRoles:
    """Role checks and actor helpers."""

    def test_allowed_role(self):
        require_roles({"sub": "1", "roles": ["VIEWER"]}, ["ADMIN", "VIEWER"])

    def test_missing_role(self):
        with pytest.raises(InsufficientRoleError) as exc:
            require_roles({"sub": "1", "roles": ["VIEWER"]}, ["ADMIN"])
        assert exc.value.status_code == 403
        assert "ADMIN" in exc.value.detail

    def test_actor_helpers(self):
        ctx = {"sub": "12", "email": "a@test.com"}
        assert get_user_id(ctx) == 12
        assert get_user_email(ctx) == "a@test.com"
        assert get_user_email({"sub": "12"}) == ""
