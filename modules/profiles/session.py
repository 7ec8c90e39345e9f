"""
Session lifecycle.

SessionManager bridges identity-changed events from the auth service to
profile loading and caching. It owns the current Session and replaces it
(never mutates it) on every change:

- start(): present the cached profile provisionally, subscribe to identity
  events (the auth service replays the current identity immediately)
- sign-in: fetch the profile from the store, overwrite the cache
- sign-out: drop identity and profile, remove the cache
"""

import logging
from typing import TYPE_CHECKING, Callable, Optional

from shared.exceptions import BridgeItError
from shared.models import AuthenticatedUser

from .cache import ProfileCache
from .exceptions import NotSignedInError
from .interfaces import IProfileService
from .models import Profile, ProfileUpdate, Session

if TYPE_CHECKING:
    from modules.auth.interfaces import IIdentityEvents

logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the current Session for one signed-in client."""

    def __init__(
        self,
        auth: "IIdentityEvents",
        profiles: IProfileService,
        cache: ProfileCache,
    ):
        self._auth = auth
        self._profiles = profiles
        self._cache = cache
        self._session = Session()
        self._unsubscribe: Optional[Callable[[], None]] = None

    @property
    def session(self) -> Session:
        """The current session. Treat as read-only; it is replaced on change."""
        return self._session

    async def start(self) -> Session:
        """Load the provisional profile and start following identity changes."""
        cached = self._cache.load()
        if cached is not None:
            self._session = Session(profile=cached)
        if self._unsubscribe is None:
            self._unsubscribe = await self._auth.on_identity_changed(
                self.handle_identity_changed
            )
        return self._session

    def stop(self) -> None:
        """Stop following identity changes. Safe to call more than once."""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    async def handle_identity_changed(self, identity: Optional[AuthenticatedUser]) -> None:
        """Populate the session on sign-in, clear it on sign-out."""
        if identity is None:
            self._session = Session()
            self._cache.clear()
            logger.debug("Session cleared after sign-out")
            return

        provisional = self._session.profile
        if provisional is not None and provisional.id != identity.id:
            provisional = None
        self._session = Session(identity=identity, profile=provisional)
        await self._load_profile(identity)

    async def refresh_profile(self) -> Optional[Profile]:
        """Re-read the signed-in user's profile from the store."""
        identity = self._require_identity()
        return await self._load_profile(identity)

    async def update_profile(self, changes: ProfileUpdate) -> Profile:
        """Update the signed-in user's profile and cache the stored result."""
        identity = self._require_identity()
        profile = await self._profiles.update_profile(identity.id, changes)
        self._session = Session(identity=identity, profile=profile)
        self._cache.save(profile)
        return profile

    async def _load_profile(self, identity: AuthenticatedUser) -> Optional[Profile]:
        try:
            profile = await self._profiles.get_profile(identity.id)
        except BridgeItError as e:
            # Keep whatever provisional profile we had; the store stays authoritative.
            logger.warning(f"Could not load profile for {identity.id}: {e.message}")
            return self._session.profile

        if self._session.identity != identity:
            # Identity changed while the fetch was in flight.
            return profile
        self._session = Session(identity=identity, profile=profile)
        self._cache.save(profile)
        return profile

    def _require_identity(self) -> AuthenticatedUser:
        if self._session.identity is None:
            raise NotSignedInError()
        return self._session.identity
