# mypy: ignore-errors
# tests/v1/test_auth.py
"""Tests for registration, login, token verification and profile endpoints."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from fastapi import status
from jose import jwt

from ideaboard.core.security import create_access_token
from ideaboard.core.settings import settings
from tests.conftest import TEST_PASSWORD


def _register(client, username="carol", email="carol@example.com", password="secret1"):
    return client.post(
        "/api/v1/auth/register",
        json={"username": username, "email": email, "password": password},
    )


def test_register_user_success(client) -> None:
    """Registration returns a token and the private profile."""
    response = _register(client)
    assert response.status_code == status.HTTP_201_CREATED
    data = response.json()

    assert data["message"] == "User registered successfully"
    assert data["token"]
    assert data["user"]["username"] == "carol"
    assert data["user"]["email"] == "carol@example.com"
    assert data["user"]["role"] == "user"
    assert data["user"]["isActive"] is True
    assert "passwordHash" not in data["user"]
    assert "password_hash" not in data["user"]


def test_register_normalizes_email(client) -> None:
    response = _register(client, email="Carol@Example.COM")
    assert response.status_code == status.HTTP_201_CREATED
    assert response.json()["user"]["email"] == "carol@example.com"


def test_register_duplicate_email(client, test_user) -> None:
    response = _register(client, username="someone_else", email=test_user.email)
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Email already registered"


def test_register_duplicate_username_is_case_insensitive(client, test_user) -> None:
    response = _register(client, username=test_user.username.upper())
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Username already taken"


def test_register_rejects_handle_of_inactive_account(client, make_user) -> None:
    """Uniqueness is not scoped to active records."""
    make_user("ghost", is_active=False)
    response = _register(client, username="ghost")
    assert response.status_code == status.HTTP_400_BAD_REQUEST
    assert response.json()["detail"] == "Username already taken"


def test_register_email_checked_before_username(client, test_user) -> None:
    response = _register(client, username=test_user.username, email=test_user.email)
    assert response.json()["detail"] == "Email already registered"


def test_register_validation_errors(client) -> None:
    short = _register(client, username="ab")
    assert short.status_code == status.HTTP_400_BAD_REQUEST
    assert short.json()["detail"] == "Username must be between 3 and 30 characters"

    bad_chars = _register(client, username="not-valid")
    assert bad_chars.status_code == status.HTTP_400_BAD_REQUEST
    assert bad_chars.json()["detail"] == (
        "Username can only contain letters, numbers, and underscores"
    )

    weak = _register(client, password="12345")
    assert weak.status_code == status.HTTP_400_BAD_REQUEST
    assert weak.json()["detail"] == "Password must be at least 6 characters long"

    bad_email = _register(client, email="not-an-email")
    assert bad_email.status_code == status.HTTP_400_BAD_REQUEST


class TestLogin:
    """Exchanging credentials for a token."""

    def test_login_success(self, client, test_user) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_200_OK
        data = response.json()
        assert data["message"] == "Login successful"
        assert data["user"]["id"] == test_user.id
        assert data["user"]["lastLogin"] is not None

    def test_login_email_is_case_insensitive(self, client, test_user) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email.upper(), "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_200_OK

    def test_login_wrong_password(self, client, test_user) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "wrong-password"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_unknown_email(self, client) -> None:
        response = client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Invalid email or password"

    def test_login_inactive_account(self, client, make_user) -> None:
        user = make_user("sleeper", is_active=False)
        response = client.post(
            "/api/v1/auth/login",
            json={"email": user.email, "password": TEST_PASSWORD},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Account is deactivated"


class TestTokens:
    """Bearer token contents and validation."""

    def test_token_claims(self, client) -> None:
        token = _register(client).json()["token"]
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])

        assert claims["username"] == "carol"
        assert claims["avatar"] is None
        expires = datetime.fromtimestamp(claims["exp"], tz=UTC)
        remaining = expires - datetime.now(UTC)
        assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)

    def test_verify_token(self, client, test_user, auth_token) -> None:
        response = client.get("/api/v1/auth/verify", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["valid"] is True
        assert response.json()["user"]["id"] == test_user.id

    def test_missing_token(self, client) -> None:
        response = client.get("/api/v1/auth/verify")
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Access token required"

    def test_token_without_bearer_prefix(self, client) -> None:
        response = client.get("/api/v1/auth/verify", headers={"Authorization": "InvalidToken123"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_malformed_token(self, client) -> None:
        response = client.get(
            "/api/v1/auth/verify",
            headers={"Authorization": "Bearer not.a.valid.jwt"},
        )
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Could not validate credentials"

    def test_token_with_wrong_secret(self, client, test_user) -> None:
        token = jwt.encode(
            {"sub": str(test_user.id), "exp": datetime.now(UTC) + timedelta(hours=1)},
            "wrong_secret_key",
            algorithm=settings.jwt_algorithm,
        )
        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_expired_token(self, client, test_user) -> None:
        token = create_access_token(test_user.id, expires_delta=timedelta(seconds=-10))
        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_token_for_unknown_user(self, client) -> None:
        token = create_access_token(999_999)
        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "User not found"

    def test_token_for_deactivated_user(self, client, make_user) -> None:
        user = make_user("retired", is_active=False)
        token = create_access_token(user.id)
        response = client.get("/api/v1/auth/verify", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Account is deactivated"


class TestProfile:
    """Reading and editing the caller's own profile."""

    def test_get_profile(self, client, test_user, auth_token) -> None:
        response = client.get("/api/v1/auth/profile", headers=auth_token)
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == test_user.email

    def test_update_profile(self, client, auth_token) -> None:
        response = client.put(
            "/api/v1/auth/profile",
            json={
                "bio": "  Writes tests  ",
                "socialLinks": {"github": "https://github.com/alice"},
            },
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_200_OK
        user = response.json()["user"]
        assert user["bio"] == "Writes tests"
        assert user["socialLinks"]["github"] == "https://github.com/alice"

    def test_update_profile_rejects_bad_social_link(self, client, auth_token) -> None:
        response = client.put(
            "/api/v1/auth/profile",
            json={"socialLinks": {"twitter": "https://example.com/alice"}},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid twitter link"

    def test_update_profile_username_taken(self, client, auth_token, other_user) -> None:
        response = client.put(
            "/api/v1/auth/profile",
            json={"username": other_user.username},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Username already taken"


class TestChangePassword:
    def test_change_password(self, client, test_user, auth_token) -> None:
        response = client.put(
            "/api/v1/auth/change-password",
            json={"currentPassword": TEST_PASSWORD, "newPassword": "brand-new-pass"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.json()["message"] == "Password changed successfully"

        login = client.post(
            "/api/v1/auth/login",
            json={"email": test_user.email, "password": "brand-new-pass"},
        )
        assert login.status_code == status.HTTP_200_OK

    def test_change_password_wrong_current(self, client, auth_token) -> None:
        response = client.put(
            "/api/v1/auth/change-password",
            json={"currentPassword": "not-it", "newPassword": "brand-new-pass"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Current password is incorrect"

    def test_change_password_too_short(self, client, auth_token) -> None:
        response = client.put(
            "/api/v1/auth/change-password",
            json={"currentPassword": TEST_PASSWORD, "newPassword": "123"},
            headers=auth_token,
        )
        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "New password must be at least 6 characters long"
