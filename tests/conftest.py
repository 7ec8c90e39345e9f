"""
Shared test fixtures and utilities.

This module provides common test infrastructure used across all test modules.
"""

import pytest
from datetime import datetime, timezone, timedelta
import jwt  # PyJWT

from api.dependencies import reset_container
from modules.auth.service import reset_auth_service
from modules.catalog.service import reset_catalog_service
from modules.chat.service import reset_chat_service
from modules.directory.service import reset_directory_service
from modules.profiles.models import Profile, UserType
from modules.profiles.repository import reset_profile_repository
from modules.profiles.service import reset_profile_service
from shared.models import AuthenticatedUser


# Test JWT secret (only for testing)
TEST_JWT_SECRET = "test-secret-key-for-testing-only"


def create_test_token(
    user_id: str = "test-user-123",
    email: str = "test@example.com",
    expired: bool = False,
    email_verified: bool = True,
) -> str:
    """
    Create a test JWT token for authentication.

    Args:
        user_id: User ID to include in the token
        email: Email to include in the token
        expired: If True, creates an expired token
        email_verified: Whether the email should be marked as verified

    Returns:
        JWT token string
    """
    now = datetime.now(timezone.utc)
    exp = now - timedelta(hours=1) if expired else now + timedelta(hours=1)

    payload = {
        "sub": user_id,
        "email": email,
        "email_confirmed_at": now.isoformat() if email_verified else None,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(exp.timestamp()),
        "iat": int(now.timestamp()),
    }
    return jwt.encode(payload, TEST_JWT_SECRET, algorithm="HS256")


def make_profile(
    user_id: str,
    user_type: UserType = UserType.EMPLOYEE,
    role: str = "Developer",
    field: str = "Software",
    country: str = "Kenya",
    bio: str = "",
) -> Profile:
    """Build a Profile with sensible defaults for the fields a test does not care about."""
    return Profile(
        id=user_id,
        user_type=user_type,
        role=role,
        field=field,
        experience="3",
        country=country,
        citizenship=country,
        gender="female",
        bio=bio,
    )


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset service singletons and the container before and after each test."""

    def reset():
        reset_container()
        reset_auth_service()
        reset_profile_service()
        reset_profile_repository()
        reset_directory_service()
        reset_catalog_service()
        reset_chat_service()

    reset()
    yield
    reset()


@pytest.fixture
def test_user_id() -> str:
    """Provide a consistent test user ID."""
    return "test-user-123"


@pytest.fixture
def test_user_email() -> str:
    """Provide a consistent test user email."""
    return "test@example.com"


@pytest.fixture
def test_user(test_user_id: str, test_user_email: str) -> AuthenticatedUser:
    """Provide the authenticated user matching auth_token."""
    return AuthenticatedUser(id=test_user_id, email=test_user_email, email_verified=True)


@pytest.fixture
def auth_token(test_user_id: str, test_user_email: str) -> str:
    """Create a valid auth token for testing."""
    return create_test_token(user_id=test_user_id, email=test_user_email)


@pytest.fixture
def auth_headers(auth_token: str) -> dict[str, str]:
    """Create authorization headers with a valid token."""
    return {"Authorization": f"Bearer {auth_token}"}
