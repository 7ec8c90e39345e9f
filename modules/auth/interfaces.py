"""
Authentication module interface.

Other modules should depend on IAuthService and IIdentityEvents, not the
concrete implementations. This enables testing with mocks.
"""

from typing import Awaitable, Callable, Protocol, Optional, runtime_checkable

from shared.models import AuthenticatedUser
from .models import AuthResult, SignUpRequest


IdentityListener = Callable[[Optional[AuthenticatedUser]], Awaitable[None]]


@runtime_checkable
class IAuthService(Protocol):
    """
    Interface for authentication operations.

    Implementations are stateless: they never remember who signed in.
    Client-side identity tracking lives in AuthState.
    """

    async def validate_token(self, token: str) -> AuthenticatedUser:
        """
        Validate a JWT token and return the authenticated user.

        Args:
            token: JWT access token from Supabase Auth

        Returns:
            AuthenticatedUser with user ID and basic info

        Raises:
            AuthenticationError: If token is invalid or expired
        """
        ...

    async def sign_up(self, request: SignUpRequest) -> AuthResult:
        """
        Create an account and its profile.

        Raises:
            SignUpFailedError: If the account could not be created
            ExternalServiceError: If Supabase could not be reached
        """
        ...

    async def sign_in(self, email: str, password: str) -> AuthResult:
        """
        Sign in with email and password.

        Raises:
            InvalidCredentialsError: If the credentials are rejected
            ExternalServiceError: If Supabase could not be reached
        """
        ...

    async def sign_out(self, access_token: str) -> None:
        """
        Revoke the session behind an access token.
        """
        ...


@runtime_checkable
class IIdentityEvents(Protocol):
    """
    Source of identity-changed events.
    """

    async def on_identity_changed(self, listener: IdentityListener) -> Callable[[], None]:
        """
        Register a listener for identity changes.

        The listener is called once immediately with the current identity
        (None when signed out), then after every sign-in, sign-up and
        sign-out.

        Returns:
            A function that unregisters the listener
        """
        ...
