"""Tests for profile endpoints."""

import pytest
from unittest.mock import AsyncMock
from fastapi.testclient import TestClient

from api.app import create_app
from api.dependencies import get_profile_service
from api.middleware.auth import get_current_user
from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.models import ProfileUpdate
from shared.models import AuthenticatedUser
from tests.conftest import make_profile


USER = AuthenticatedUser(id="me", email="me@example.com")


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def profiles():
    return AsyncMock()


@pytest.fixture
def client(app, profiles):
    app.dependency_overrides[get_current_user] = lambda: USER
    app.dependency_overrides[get_profile_service] = lambda: profiles
    yield TestClient(app)
    app.dependency_overrides.clear()


class TestMyProfile:
    def test_get_me(self, client, profiles):
        profiles.get_profile.return_value = make_profile("me", bio="Hello")
        response = client.get("/api/profiles/me")
        assert response.status_code == 200
        assert response.json()["bio"] == "Hello"

    def test_get_me_missing(self, client, profiles):
        profiles.get_profile.side_effect = ProfileNotFoundError("me")
        response = client.get("/api/profiles/me")
        assert response.status_code == 404
        assert response.json() == {
            "error": "PROFILE_NOT_FOUND",
            "message": "Profile not found: me",
            "details": {"user_id": "me"},
        }

    def test_patch_me_merges(self, client, profiles):
        """Only the fields sent are passed on as changes."""
        profiles.update_profile.return_value = make_profile("me", bio="New")

        response = client.patch("/api/profiles/me", json={"bio": "New"})

        assert response.status_code == 200
        user_id, changes = profiles.update_profile.await_args.args
        assert user_id == "me"
        assert changes == ProfileUpdate(bio="New")
        assert changes.model_dump(exclude_unset=True) == {"bio": "New"}

    def test_patch_rejects_bad_experience(self, client, profiles):
        response = client.patch("/api/profiles/me", json={"experience": "lots"})
        assert response.status_code == 422
        profiles.update_profile.assert_not_awaited()

    def test_patch_ignores_user_type(self, client, profiles):
        """User type cannot be changed after sign-up."""
        profiles.update_profile.return_value = make_profile("me")
        client.patch("/api/profiles/me", json={"user_type": "employer", "bio": "x"})
        changes = profiles.update_profile.await_args.args[1]
        assert "user_type" not in changes.model_dump(exclude_unset=True)


class TestOtherProfiles:
    def test_get_other(self, client, profiles):
        profiles.get_profile.return_value = make_profile("them")
        response = client.get("/api/profiles/them")
        assert response.status_code == 200
        profiles.get_profile.assert_awaited_once_with("them")
