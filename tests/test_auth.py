"""Tests for authentication functionality.

This module contains tests for JWT token management and the auth
endpoints.
"""

from datetime import UTC, datetime, timedelta
from unittest.mock import patch

import pytest
from fastapi import status
from fastapi.testclient import TestClient
from jose import jwt

from skillswap.schemas.auth import Token
from skillswap.shared.utils.auth import (
    create_access_token,
    verify_token,
)


class TestTokenCreation:
    """Test suite for JWT token creation."""

    def test_create_access_token_success(self):
        token = create_access_token("user-123")

        assert isinstance(token, Token)
        assert token.access_token
        assert token.token_type == "bearer"
        assert token.expires_at > datetime.now(UTC)

    def test_token_claims(self):
        token = create_access_token("user-123")
        payload = jwt.decode(token.access_token, "test-secret-key", algorithms=["HS256"])

        assert payload["sub"] == "user-123"
        assert payload["type"] == "access_token"
        assert payload["jti"].startswith("user-123-")
        assert "iat" in payload
        assert "exp" in payload

    def test_default_expiry_is_seven_days(self):
        token = create_access_token("user-123")
        expected = datetime.now(UTC) + timedelta(days=7)
        assert abs((token.expires_at - expected).total_seconds()) < 5

    def test_create_access_token_with_custom_expiry(self):
        custom_expiry = timedelta(hours=1)
        token = create_access_token("user-123", custom_expiry)

        expected_expiry = datetime.now(UTC) + custom_expiry
        assert abs((token.expires_at - expected_expiry).total_seconds()) < 5

    def test_create_access_token_invalid_user_id(self):
        with pytest.raises(ValueError, match="User ID must be a non-empty string"):
            create_access_token("")

        with pytest.raises(ValueError, match="User ID must be a non-empty string"):
            create_access_token(None)

    def test_create_access_token_missing_secret_key(self):
        with patch("skillswap.shared.utils.auth.settings") as mock_settings:
            mock_settings.JWT_SECRET_KEY = None
            mock_settings.JWT_ALGORITHM = "HS256"
            mock_settings.JWT_ACCESS_TOKEN_EXPIRE_DAYS = 7

            with pytest.raises(ValueError, match="JWT secret key is not configured"):
                create_access_token("user-123")


class TestTokenVerification:
    """Test suite for JWT token verification."""

    def test_round_trip(self):
        token = create_access_token("user-123")
        assert verify_token(token.access_token) == "user-123"

    def test_expired_token(self):
        token = create_access_token("user-123", timedelta(seconds=-10))
        assert verify_token(token.access_token) is None

    def test_tampered_token(self):
        token = create_access_token("user-123").access_token
        tampered = token[:-4] + ("aaaa" if not token.endswith("aaaa") else "bbbb")
        assert verify_token(tampered) is None

    def test_wrong_secret(self):
        now = datetime.now(UTC)
        foreign = jwt.encode(
            {"sub": "user-123", "iat": now, "exp": now + timedelta(hours=1)},
            "another-secret",
            algorithm="HS256",
        )
        assert verify_token(foreign) is None

    def test_wrong_token_type(self):
        now = datetime.now(UTC)
        refresh = jwt.encode(
            {"sub": "user-123", "iat": now, "exp": now + timedelta(hours=1), "type": "refresh_token"},
            "test-secret-key",
            algorithm="HS256",
        )
        assert verify_token(refresh) is None

    @pytest.mark.parametrize("token", ["", None, "not.a.jwt"])
    def test_malformed_token(self, token):
        assert verify_token(token) is None


class TestAuthEndpoints:
    """Test suite for /auth endpoints."""

    def test_register(self, client: TestClient):
        response = client.post(
            "/api/auth/register",
            json={
                "email": "Alice@Example.com",
                "password": "password123",
                "name": "Alice",
                "offers": ["Guitar"],
                "seeks": ["Spanish"],
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert data["success"] is True
        assert data["token"]
        assert data["user"]["email"] == "alice@example.com"
        assert data["user"]["offers"] == ["Guitar"]
        assert data["user"]["is_online"] is True
        assert "hashed_password" not in data["user"]

    def test_register_duplicate_email(self, client: TestClient, register):
        register("alice@example.com")

        response = client.post(
            "/api/auth/register",
            json={"email": "ALICE@example.com", "password": "password123", "name": "Alice"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["success"] is False
        assert data["error"] == "USER_ALREADY_EXISTS"

    def test_register_short_password(self, client: TestClient):
        response = client.post(
            "/api/auth/register",
            json={"email": "bob@example.com", "password": "short", "name": "Bob"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        data = response.json()
        assert data["error"] == "INVALID_ARGUMENT"
        assert data["details"]["errors"][0]["field"] == "password"

    def test_login(self, client: TestClient, register):
        register("alice@example.com")

        response = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "password123"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["user"]["email"] == "alice@example.com"
        assert verify_token(data["token"]) == data["user"]["id"]

    def test_login_wrong_password(self, client: TestClient, register):
        register("alice@example.com")

        response = client.post(
            "/api/auth/login", json={"email": "alice@example.com", "password": "wrong-password"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["error"] == "INVALID_CREDENTIALS"

    def test_login_unknown_email(self, client: TestClient):
        response = client.post(
            "/api/auth/login", json={"email": "ghost@example.com", "password": "password123"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_verify(self, client: TestClient, register):
        user_id, headers = register("alice@example.com", name="Alice")

        response = client.get("/api/auth/verify", headers=headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["user"]["id"] == user_id

    def test_missing_token_is_401(self, client: TestClient):
        response = client.get("/api/auth/verify")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        data = response.json()
        assert data["success"] is False
        assert data["message"] == "Access token required"

    def test_invalid_token_is_403(self, client: TestClient):
        response = client.get(
            "/api/auth/verify", headers={"Authorization": "Bearer invalid.token.value"}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json()["message"] == "Invalid or expired token"

    def test_expired_token_is_403(self, client: TestClient, register):
        user_id, _ = register("alice@example.com")
        token = create_access_token(user_id, timedelta(seconds=-10))

        response = client.get(
            "/api/auth/verify", headers={"Authorization": f"Bearer {token.access_token}"}
        )
        assert response.status_code == status.HTTP_403_FORBIDDEN

    def test_token_for_missing_user_is_401(self, client: TestClient):
        token = create_access_token("deleted-user")

        response = client.get(
            "/api/auth/verify", headers={"Authorization": f"Bearer {token.access_token}"}
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_logout_marks_user_offline(self, client: TestClient, register):
        _, headers = register("alice@example.com")

        response = client.post("/api/auth/logout", headers=headers)
        assert response.status_code == status.HTTP_200_OK

        profile = client.get("/api/users/profile", headers=headers).json()
        assert profile["user"]["is_online"] is False
