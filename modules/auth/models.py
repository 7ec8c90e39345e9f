"""
Authentication module data models.

These models define the data structures used by the auth module
and exposed to other modules through the interface.
"""

from typing import Optional
from pydantic import BaseModel, Field, EmailStr, model_validator

from shared.models import AuthenticatedUser
from modules.profiles.models import Profile, ProfileFields


MIN_PASSWORD_LENGTH = 6


class JWTPayload(BaseModel):
    """
    Decoded JWT token payload from Supabase.

    This matches the structure of Supabase Auth JWTs.
    """

    sub: str = Field(..., description="Subject (user ID)")
    email: Optional[str] = Field(None, description="User's email")
    email_confirmed_at: Optional[str] = Field(None, description="When the email was confirmed")
    exp: int = Field(..., description="Expiration timestamp")
    iat: int = Field(..., description="Issued at timestamp")
    aud: str = Field(default="authenticated", description="Audience")
    role: str = Field(default="authenticated", description="User role")

    # Supabase-specific claims
    app_metadata: dict = Field(default_factory=dict)
    user_metadata: dict = Field(default_factory=dict)


class SignUpRequest(BaseModel):
    """
    Account details plus the sign-up questionnaire.

    Everything here is validated before any network call is made.
    """

    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=MIN_PASSWORD_LENGTH, description="Account password")
    confirm_password: str = Field(..., description="Must repeat password")
    profile: ProfileFields = Field(..., description="Questionnaire answers")

    @model_validator(mode="after")
    def passwords_match(self) -> "SignUpRequest":
        if self.password != self.confirm_password:
            raise ValueError("Passwords do not match")
        return self


class LoginRequest(BaseModel):
    """Email/password sign-in."""

    email: EmailStr
    password: str = Field(..., min_length=1)


class AuthTokens(BaseModel):
    """Session tokens issued by Supabase Auth."""

    access_token: str
    refresh_token: str
    token_type: str = "bearer"
    expires_at: Optional[int] = None


class AuthResult(BaseModel):
    """Outcome of a successful sign-up or sign-in."""

    user: AuthenticatedUser
    tokens: Optional[AuthTokens] = Field(
        None,
        description="Absent after sign-up when email confirmation is required",
    )
    profile: Optional[Profile] = None
