"""
Profiles module.

Handles questionnaire profiles, the local profile cache and the
session lifecycle.

Public API:
- IProfileService: Interface for profile operations
- Profile, ProfileFields, ProfileUpdate, UserType: Profile models
- Session: Explicit (identity, profile) context object
- Profile exceptions
"""

from .interfaces import IProfileService
from .models import Profile, ProfileFields, ProfileUpdate, Session, UserType
from .exceptions import ProfileNotFoundError, ProfileRequiredError, NotSignedInError

__all__ = [
    # Interface
    "IProfileService",
    # Models
    "Profile",
    "ProfileFields",
    "ProfileUpdate",
    "Session",
    "UserType",
    # Exceptions
    "ProfileNotFoundError",
    "ProfileRequiredError",
    "NotSignedInError",
]
