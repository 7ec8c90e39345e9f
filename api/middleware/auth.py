"""
JWT Authentication dependencies.

Validates Supabase JWT tokens and builds the per-request Session.
"""

from typing import Optional
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from shared.exceptions import AuthenticationError
from shared.models import AuthenticatedUser
from modules.auth.exceptions import MissingTokenError
from modules.auth.interfaces import IAuthService
from modules.profiles.exceptions import ProfileNotFoundError
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import Session

from ..dependencies import get_auth_service, get_profile_service

# Bearer token extractor
bearer_scheme = HTTPBearer(auto_error=False)


async def get_access_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    """Dependency returning the raw bearer token, or 401 if absent."""
    if credentials is None:
        raise MissingTokenError("Missing authorization header")
    return credentials.credentials


async def get_current_user(
    token: str = Depends(get_access_token),
    auth: IAuthService = Depends(get_auth_service),
) -> AuthenticatedUser:
    """
    Dependency that requires authentication.

    Use this for endpoints that require a logged-in user.

    Usage:
        @router.get("/protected")
        async def protected_route(user: AuthenticatedUser = Depends(get_current_user)):
            return {"user_id": user.id}
    """
    return await auth.validate_token(token)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    auth: IAuthService = Depends(get_auth_service),
) -> Optional[AuthenticatedUser]:
    """
    Dependency that optionally extracts user if authenticated.

    Use this for endpoints that work with or without authentication.
    """
    if credentials is None:
        return None

    try:
        return await auth.validate_token(credentials.credentials)
    except AuthenticationError:
        return None


async def get_current_session(
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> Session:
    """
    Dependency building the caller's Session (identity plus profile).

    A missing profile is not an error here; operations that need one
    raise ProfileRequiredError themselves.
    """
    try:
        profile = await profiles.get_profile(user.id)
    except ProfileNotFoundError:
        profile = None
    return Session(identity=user, profile=profile)


# Type aliases for cleaner route definitions
RequireAuth = Depends(get_current_user)
OptionalAuth = Depends(get_optional_user)
RequireSession = Depends(get_current_session)
