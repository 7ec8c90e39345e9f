"""
Directory API endpoint.
"""

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from api.middleware.auth import get_current_session
from api.dependencies import get_directory_service
from modules.profiles.models import Profile, Session, UserType

from .interfaces import IDirectoryService

router = APIRouter()


class DirectoryResponse(BaseModel):
    """Profiles visible to the caller."""

    user_type: UserType
    profiles: list[Profile]
    total: int


@router.get("", response_model=DirectoryResponse)
async def browse_directory(
    q: str = Query(default="", max_length=200, description="Filter text"),
    session: Session = Depends(get_current_session),
    service: IDirectoryService = Depends(get_directory_service),
) -> DirectoryResponse:
    """
    List profiles of the other user type.

    The filter matches role, field, country and bio, ignoring case.
    """
    profiles = await service.browse(session, q)
    return DirectoryResponse(
        user_type=session.profile.user_type.counterpart,
        profiles=profiles,
        total=len(profiles),
    )
