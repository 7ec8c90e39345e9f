"""
Shared data models used across modules.

These models are shared infrastructure, not business logic.
Module-specific models should stay in their respective module directories.
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, EmailStr, Field


class AuthenticatedUser(BaseModel):
    """
    Represents an authenticated identity in the system.

    Populated from JWT claims or from an auth response and passed to
    services explicitly (inside a Session) instead of living in a global.
    The id is opaque: it is only ever compared and sorted, never parsed.
    """

    id: str = Field(..., min_length=1, description="User ID (UUID from Supabase)")
    email: EmailStr = Field(..., description="User's email address")
    email_verified: bool = Field(default=False, description="Whether email is verified")

    last_sign_in: Optional[datetime] = Field(None, description="Last sign-in time")

    role: str = Field(default="user", description="User role")

    model_config = {
        "frozen": True,  # Identity is immutable for the session
        "extra": "ignore",  # Ignore extra fields from JWT
    }
