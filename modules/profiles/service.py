"""
Profile service implementation.
"""

import logging
from typing import Optional

from .interfaces import IProfileService
from .models import Profile, ProfileFields, ProfileUpdate, UserType
from .repository import ProfileRepository, get_profile_repository
from .exceptions import ProfileNotFoundError

logger = logging.getLogger(__name__)


class ProfileService(IProfileService):
    """
    Profile service backed by the profiles table.

    Every read goes to the store; callers that want a local copy use
    ProfileCache on top of this service.
    """

    def __init__(self, repository: Optional[ProfileRepository] = None):
        self._repository = repository or get_profile_repository()

    async def get_profile(self, user_id: str) -> Profile:
        """Get a profile, raising ProfileNotFoundError if absent."""
        profile = self._repository.get_by_id(user_id)
        if profile is None:
            raise ProfileNotFoundError(user_id)
        return profile

    async def create_profile(self, user_id: str, fields: ProfileFields) -> Profile:
        """Create a profile for a new identity."""
        profile = self._repository.create(user_id, fields)
        logger.info(f"Created {profile.user_type.value} profile for {user_id}")
        return profile

    async def update_profile(self, user_id: str, changes: ProfileUpdate) -> Profile:
        """Merge changes, then re-read so the caller sees the stored row."""
        self._repository.update(user_id, changes)
        return await self.get_profile(user_id)

    async def list_profiles(self, user_type: UserType) -> list[Profile]:
        """List every profile of a user type."""
        return self._repository.list_by_user_type(user_type)


# Module-level instance getter
_service_instance: Optional[ProfileService] = None


def get_profile_service() -> ProfileService:
    """Get the profile service singleton."""
    global _service_instance
    if _service_instance is None:
        _service_instance = ProfileService()
    return _service_instance


def reset_profile_service() -> None:
    """Reset the profile service singleton (for testing)."""
    global _service_instance
    _service_instance = None
