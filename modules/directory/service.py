"""
Directory service implementation.
"""

import logging
from typing import Optional

from modules.profiles.exceptions import NotSignedInError, ProfileRequiredError
from modules.profiles.models import Profile, Session
from modules.profiles.interfaces import IProfileService

from .filters import filter_profiles
from .interfaces import IDirectoryService

logger = logging.getLogger(__name__)


class DirectoryService(IDirectoryService):
    """Counterpart listing on top of the profile service."""

    def __init__(self, profiles: Optional[IProfileService] = None):
        if profiles is None:
            from modules.profiles.service import get_profile_service
            profiles = get_profile_service()
        self._profiles = profiles

    async def browse(self, session: Session, query: str = "") -> list[Profile]:
        if session.identity is None:
            raise NotSignedInError()
        if session.profile is None:
            raise ProfileRequiredError(session.identity.id)

        counterpart = session.profile.user_type.counterpart
        profiles = await self._profiles.list_profiles(counterpart)
        matches = filter_profiles(profiles, query)
        logger.debug(
            f"Directory for {session.identity.id}: {len(matches)} of "
            f"{len(profiles)} {counterpart.value} profiles match {query!r}"
        )
        return matches


# Module-level instance getter
_service_instance: Optional[DirectoryService] = None


def get_directory_service() -> DirectoryService:
    """Get the directory service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = DirectoryService()
    return _service_instance


def reset_directory_service() -> None:
    """Reset the directory service singleton (for testing)."""
    global _service_instance
    _service_instance = None
