"""
Profile endpoints.

Users read any profile but can only change their own.
"""

from fastapi import APIRouter, Depends

from shared.models import AuthenticatedUser
from modules.profiles.interfaces import IProfileService
from modules.profiles.models import Profile, ProfileUpdate
from ..dependencies import get_profile_service
from ..middleware.auth import get_current_user

router = APIRouter()


@router.get("/me", response_model=Profile)
async def get_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Get the current user's profile.

    Requires authentication.
    """
    return await profiles.get_profile(user.id)


@router.patch("/me", response_model=Profile)
async def update_my_profile(
    changes: ProfileUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> Profile:
    """
    Merge changes into the current user's profile.

    Omitted fields are left as they are.
    """
    return await profiles.update_profile(user.id, changes)


@router.get("/{user_id}", response_model=Profile)
async def get_profile(
    user_id: str,
    user: AuthenticatedUser = Depends(get_current_user),
    profiles: IProfileService = Depends(get_profile_service),
) -> Profile:
    """Get another user's profile."""
    return await profiles.get_profile(user_id)
