"""
Client-side auth state.

AuthService is stateless so it can serve many users behind the API.
A single client (one device, one user at a time) wraps it in AuthState,
which remembers the current identity and its tokens and notifies
listeners whenever the identity changes.
"""

import logging
from typing import Callable, Optional

from shared.models import AuthenticatedUser

from .interfaces import IAuthService, IIdentityEvents, IdentityListener
from .models import AuthResult, AuthTokens, SignUpRequest

logger = logging.getLogger(__name__)


class AuthState(IIdentityEvents):
    """Current identity of one client, with identity-changed notifications."""

    def __init__(self, auth: IAuthService):
        self._auth = auth
        self._identity: Optional[AuthenticatedUser] = None
        self._tokens: Optional[AuthTokens] = None
        self._listeners: list[IdentityListener] = []

    @property
    def identity(self) -> Optional[AuthenticatedUser]:
        return self._identity

    @property
    def tokens(self) -> Optional[AuthTokens]:
        return self._tokens

    async def on_identity_changed(self, listener: IdentityListener) -> Callable[[], None]:
        """Register a listener; it is called right away with the current identity."""
        self._listeners.append(listener)
        await listener(self._identity)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def sign_up(self, request: SignUpRequest) -> AuthResult:
        result = await self._auth.sign_up(request)
        await self._set_identity(result.user, result.tokens)
        return result

    async def sign_in(self, email: str, password: str) -> AuthResult:
        result = await self._auth.sign_in(email, password)
        await self._set_identity(result.user, result.tokens)
        return result

    async def sign_out(self) -> None:
        """Revoke the current session (if any) and notify listeners."""
        if self._tokens is not None:
            await self._auth.sign_out(self._tokens.access_token)
        await self._set_identity(None, None)

    async def _set_identity(
        self,
        identity: Optional[AuthenticatedUser],
        tokens: Optional[AuthTokens],
    ) -> None:
        self._identity = identity
        self._tokens = tokens
        logger.debug(f"Identity changed: {identity.id if identity else None}")
        for listener in list(self._listeners):
            await listener(identity)
