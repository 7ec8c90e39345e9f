"""
Tests for authentication: bearer middleware and account endpoints.
"""

import pytest
from unittest.mock import patch, MagicMock, AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_auth_service, get_profile_service
from modules.auth.exceptions import InvalidCredentialsError, SignUpFailedError
from modules.auth.models import AuthResult, AuthTokens
from shared.models import AuthenticatedUser
from tests.conftest import TEST_JWT_SECRET, create_test_token, make_profile


SIGNUP_BODY = {
    "email": "new@example.com",
    "password": "secret1",
    "confirm_password": "secret1",
    "profile": {
        "user_type": "employee",
        "role": "Developer",
        "field": "Software",
        "experience": "3",
        "country": "Kenya",
        "citizenship": "Kenya",
        "gender": "female",
    },
}


@pytest.fixture
def app():
    """Create a fresh app for each test."""
    return create_app()


class TestBearerAuthentication:
    """Token validation through a protected endpoint."""

    @pytest.fixture
    def client(self, app):
        with patch("modules.auth.service.get_settings") as mock_settings, \
             patch("modules.auth.service.get_supabase_client") as mock_db:
            mock_settings.return_value.supabase_jwt_secret = TEST_JWT_SECRET
            mock_db.return_value = MagicMock()
            yield TestClient(app)

    def test_missing_token(self, client):
        """Requests without a bearer token get 401 with a challenge header."""
        response = client.get("/api/profiles/me")
        assert response.status_code == 401
        assert response.headers["www-authenticate"] == "Bearer"
        assert response.json()["error"] == "MISSING_TOKEN"

    def test_expired_token(self, client):
        token = create_test_token(expired=True)
        response = client.get("/api/profiles/me", headers={"Authorization": f"Bearer {token}"})
        assert response.status_code == 401
        assert response.json()["error"] == "TOKEN_EXPIRED"

    def test_garbage_token(self, client):
        response = client.get("/api/profiles/me", headers={"Authorization": "Bearer nope"})
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_TOKEN"

    def test_valid_token_reaches_endpoint(self, app, client, auth_headers):
        """A valid token is accepted and the caller's profile is returned."""
        profiles = AsyncMock()
        profiles.get_profile.return_value = make_profile("test-user-123")
        app.dependency_overrides[get_profile_service] = lambda: profiles
        try:
            response = client.get("/api/profiles/me", headers=auth_headers)
        finally:
            app.dependency_overrides.clear()

        assert response.status_code == 200
        assert response.json()["id"] == "test-user-123"
        profiles.get_profile.assert_awaited_once_with("test-user-123")


class TestAccountEndpoints:
    @pytest.fixture
    def auth(self, app):
        auth = AsyncMock()
        app.dependency_overrides[get_auth_service] = lambda: auth
        yield auth
        app.dependency_overrides.clear()

    def test_signup(self, app, auth):
        user = AuthenticatedUser(id="new-user", email="new@example.com")
        auth.sign_up.return_value = AuthResult(
            user=user,
            tokens=AuthTokens(access_token="a", refresh_token="r"),
            profile=make_profile("new-user"),
        )

        response = TestClient(app).post("/api/auth/signup", json=SIGNUP_BODY)

        assert response.status_code == 201
        data = response.json()
        assert data["user"]["id"] == "new-user"
        assert data["tokens"]["token_type"] == "bearer"
        assert data["profile"]["user_type"] == "employee"

    def test_signup_password_mismatch(self, app, auth):
        """Mismatched passwords never reach the auth service."""
        body = {**SIGNUP_BODY, "confirm_password": "different"}
        response = TestClient(app).post("/api/auth/signup", json=body)
        assert response.status_code == 422
        assert response.json()["error"] == "VALIDATION_ERROR"
        auth.sign_up.assert_not_awaited()

    def test_signup_rejected(self, app, auth):
        auth.sign_up.side_effect = SignUpFailedError("User already registered")
        response = TestClient(app).post("/api/auth/signup", json=SIGNUP_BODY)
        assert response.status_code == 422
        assert response.json()["message"] == "User already registered"

    def test_login(self, app, auth):
        auth.sign_in.return_value = AuthResult(
            user=AuthenticatedUser(id="u1", email="u1@example.com"),
            tokens=AuthTokens(access_token="a", refresh_token="r"),
        )
        response = TestClient(app).post(
            "/api/auth/login", json={"email": "u1@example.com", "password": "secret1"}
        )
        assert response.status_code == 200
        assert response.json()["tokens"]["access_token"] == "a"
        auth.sign_in.assert_awaited_once_with("u1@example.com", "secret1")

    def test_login_bad_credentials(self, app, auth):
        auth.sign_in.side_effect = InvalidCredentialsError()
        response = TestClient(app).post(
            "/api/auth/login", json={"email": "u1@example.com", "password": "wrong1"}
        )
        assert response.status_code == 401
        assert response.json()["error"] == "INVALID_CREDENTIALS"

    def test_logout(self, app, auth):
        response = TestClient(app).post(
            "/api/auth/logout", headers={"Authorization": "Bearer the-token"}
        )
        assert response.status_code == 204
        auth.sign_out.assert_awaited_once_with("the-token")

    def test_logout_requires_token(self, app, auth):
        response = TestClient(app).post("/api/auth/logout")
        assert response.status_code == 401
        auth.sign_out.assert_not_awaited()
