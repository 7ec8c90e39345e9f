"""
Profiles module exceptions.
"""

from shared.exceptions import AuthenticationError, NotFoundError, ValidationError


class ProfileNotFoundError(NotFoundError):
    """Raised when a referenced profile does not exist."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile not found: {user_id}",
            code="PROFILE_NOT_FOUND",
            details={"user_id": user_id},
        )


class ProfileRequiredError(ValidationError):
    """Raised when an operation needs the caller's profile and none is loaded."""

    def __init__(self, user_id: str):
        super().__init__(
            "Complete your profile before using this feature",
            code="PROFILE_REQUIRED",
            details={"user_id": user_id},
        )


class NotSignedInError(AuthenticationError):
    """Raised when a session operation runs without a signed-in identity."""

    def __init__(self, message: str = "No authenticated user"):
        super().__init__(message, code="NOT_SIGNED_IN")
