"""
Profiles module data models.

A profile is the questionnaire a user fills in at sign-up. It is keyed by
the auth identity id and owned exclusively by that identity.
"""

from datetime import datetime
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field

from shared.models import AuthenticatedUser

# Matches the sign-up form's limit on the bio field
BIO_MAX_LENGTH = 1000


class UserType(str, Enum):
    """Which side of the marketplace a user is on."""

    EMPLOYEE = "employee"
    EMPLOYER = "employer"

    @property
    def counterpart(self) -> "UserType":
        """The user type this one browses in the directory."""
        if self is UserType.EMPLOYEE:
            return UserType.EMPLOYER
        return UserType.EMPLOYEE


class ProfileFields(BaseModel):
    """Questionnaire answers collected at sign-up."""

    user_type: UserType = Field(default=UserType.EMPLOYEE, description="Employee or employer")
    role: str = Field(..., min_length=1, max_length=200, description="Job title or role sought")
    field: str = Field(..., min_length=1, max_length=200, description="Industry or field")
    experience: str = Field(
        ...,
        pattern=r"^\d+$",
        description="Years of experience, as a numeric string",
    )
    country: str = Field(..., min_length=1, max_length=100)
    citizenship: str = Field(..., min_length=1, max_length=100)
    gender: str = Field(..., min_length=1, max_length=50)
    bio: str = Field(default="", max_length=BIO_MAX_LENGTH)


class Profile(ProfileFields):
    """A stored profile."""

    id: str = Field(..., description="Owner identity ID")
    created_at: Optional[datetime] = Field(None, description="Creation time")
    updated_at: Optional[datetime] = Field(None, description="Last update time")


class ProfileUpdate(BaseModel):
    """
    Owner-editable profile fields.

    User type and gender are fixed at sign-up. Unset fields are left
    unchanged by the merge.
    """

    role: Optional[str] = Field(None, min_length=1, max_length=200)
    field: Optional[str] = Field(None, min_length=1, max_length=200)
    experience: Optional[str] = Field(None, pattern=r"^\d+$")
    country: Optional[str] = Field(None, min_length=1, max_length=100)
    citizenship: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=BIO_MAX_LENGTH)


class Session(BaseModel):
    """
    The signed-in identity and its profile.

    Passed explicitly to directory and chat operations. A new Session is
    built whenever either part changes; instances are never mutated.
    """

    identity: Optional[AuthenticatedUser] = None
    profile: Optional[Profile] = None

    model_config = {"frozen": True}

    @property
    def is_authenticated(self) -> bool:
        return self.identity is not None
