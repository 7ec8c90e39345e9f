"""
Profiles module interface.

The API layer and the directory/chat modules depend on IProfileService,
not the concrete implementation.
"""

from typing import Protocol, runtime_checkable

from .models import Profile, ProfileFields, ProfileUpdate, UserType


@runtime_checkable
class IProfileService(Protocol):
    """
    Interface for profile operations.
    """

    async def get_profile(self, user_id: str) -> Profile:
        """
        Get a profile by its owner's identity ID.

        Raises:
            ProfileNotFoundError: If no profile exists for the ID
        """
        ...

    async def create_profile(self, user_id: str, fields: ProfileFields) -> Profile:
        """
        Create the profile for a freshly signed-up identity.
        """
        ...

    async def update_profile(self, user_id: str, changes: ProfileUpdate) -> Profile:
        """
        Merge changes into the owner's profile and return the stored result.

        Raises:
            ProfileNotFoundError: If the profile vanished after the update
        """
        ...

    async def list_profiles(self, user_type: UserType) -> list[Profile]:
        """
        List every profile of one user type. Unpaginated.
        """
        ...
