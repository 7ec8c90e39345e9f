"""
Authentication service implementation.

Validates Supabase JWT tokens and runs the email/password flows against
Supabase Auth.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional

import httpx
import jwt
from pydantic import ValidationError as PydanticValidationError
from supabase import AuthApiError, AuthError, AuthRetryableError

from shared.config import get_settings
from shared.database import get_supabase_client, get_supabase_anon_client
from shared.exceptions import ExternalServiceError
from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService

from .interfaces import IAuthService
from .models import AuthResult, AuthTokens, JWTPayload, SignUpRequest
from .exceptions import (
    AuthNotConfiguredError,
    InvalidCredentialsError,
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    SignUpFailedError,
)

logger = logging.getLogger(__name__)


class AuthService(IAuthService):
    """
    Implementation of the authentication service.

    Uses Supabase JWT tokens for authentication and the profiles table
    for the questionnaire written at sign-up.
    """

    def __init__(self, profiles: Optional[IProfileService] = None):
        self._settings = get_settings()
        self._db = get_supabase_client()
        self._profiles = profiles

    @property
    def profiles(self) -> IProfileService:
        if self._profiles is None:
            from modules.profiles.service import get_profile_service
            self._profiles = get_profile_service()
        return self._profiles

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        This implementation validates Supabase JWTs using the JWT secret.
        """
        if not token:
            raise MissingTokenError()

        if not self._settings.supabase_jwt_secret:
            raise AuthNotConfiguredError()

        try:
            payload = jwt.decode(
                token,
                self._settings.supabase_jwt_secret,
                algorithms=["HS256"],
                audience="authenticated",
            )

            jwt_payload = JWTPayload(**payload)

            return AuthenticatedUser(
                id=jwt_payload.sub,
                email=jwt_payload.email or "",
                email_verified=jwt_payload.email_confirmed_at is not None,
                last_sign_in=datetime.fromtimestamp(jwt_payload.iat, tz=timezone.utc),
                role=jwt_payload.role if jwt_payload.role != "authenticated" else "user",
            )

        except jwt.ExpiredSignatureError:
            raise ExpiredTokenError()
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))
        except PydanticValidationError:
            raise InvalidTokenError("Token claims are incomplete")

    async def sign_up(self, request: SignUpRequest) -> AuthResult:
        """
        Create the auth user, then write its profile.

        Each flow runs on its own anon-key client so the session Supabase
        stores on the client is never shared between users.
        """
        client = get_supabase_anon_client()
        try:
            response = client.auth.sign_up(
                {"email": request.email, "password": request.password}
            )
        except AuthRetryableError as e:
            raise self._unavailable(e)
        except AuthError as e:
            raise SignUpFailedError(e.message or "An error occurred during sign up")
        except httpx.HTTPError as e:
            raise self._unavailable(e)

        if response.user is None:
            raise SignUpFailedError()

        user = self._to_authenticated_user(response.user)
        profile = await self.profiles.create_profile(user.id, request.profile)
        logger.info(f"Signed up {user.id} as {profile.user_type.value}")

        return AuthResult(
            user=user,
            tokens=self._to_tokens(response.session),
            profile=profile,
        )

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """Sign in with email and password."""
        client = get_supabase_anon_client()
        try:
            response = client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthRetryableError as e:
            raise self._unavailable(e)
        except AuthError as e:
            raise InvalidCredentialsError(e.message or "Invalid email or password")
        except httpx.HTTPError as e:
            raise self._unavailable(e)

        if response.user is None or response.session is None:
            raise InvalidCredentialsError()

        return AuthResult(
            user=self._to_authenticated_user(response.user),
            tokens=self._to_tokens(response.session),
        )

    async def sign_out(self, access_token: str) -> None:
        """Revoke every session of the token's user."""
        if not access_token:
            raise MissingTokenError()
        try:
            self._db.auth.admin.sign_out(access_token)
        except AuthApiError as e:
            # An already-revoked or expired session is signed out either way.
            logger.debug(f"Sign-out of stale session ignored: {e.message}")
        except (AuthRetryableError, httpx.HTTPError) as e:
            raise self._unavailable(e)

    def _to_authenticated_user(self, user: Any) -> AuthenticatedUser:
        """Map a Supabase Auth user to AuthenticatedUser."""
        return AuthenticatedUser(
            id=user.id,
            email=user.email or "",
            email_verified=user.email_confirmed_at is not None,
            last_sign_in=user.last_sign_in_at,
        )

    def _to_tokens(self, session: Any) -> Optional[AuthTokens]:
        if session is None:
            return None
        return AuthTokens(
            access_token=session.access_token,
            refresh_token=session.refresh_token,
            token_type=session.token_type or "bearer",
            expires_at=session.expires_at,
        )

    def _unavailable(self, error: Exception) -> ExternalServiceError:
        return ExternalServiceError(
            f"Authentication service unavailable: {error}",
            service="supabase-auth",
            code="AUTH_UNAVAILABLE",
        )


# Module-level instance getter
_service_instance: Optional[AuthService] = None


def get_auth_service() -> AuthService:
    """Get the auth service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = AuthService()
    return _service_instance


def reset_auth_service() -> None:
    """Reset the auth service singleton (for testing)."""
    global _service_instance
    _service_instance = None
