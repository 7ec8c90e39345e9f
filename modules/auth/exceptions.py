"""
Authentication module exceptions.

These exceptions are raised by the auth module and can be caught
by API error handlers to return appropriate HTTP responses.
"""

from shared.exceptions import AuthenticationError, ValidationError


class InvalidTokenError(AuthenticationError):
    """Raised when a JWT token is invalid or malformed."""

    def __init__(self, message: str = "Invalid authentication token"):
        super().__init__(message, code="INVALID_TOKEN")


class ExpiredTokenError(AuthenticationError):
    """Raised when a JWT token has expired."""

    def __init__(self, message: str = "Authentication token has expired"):
        super().__init__(message, code="TOKEN_EXPIRED")


class MissingTokenError(AuthenticationError):
    """Raised when no authentication token is provided."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, code="MISSING_TOKEN")


class AuthNotConfiguredError(AuthenticationError):
    """Raised when the server has no JWT secret to validate tokens with."""

    def __init__(self):
        super().__init__(
            "Server authentication not configured",
            code="AUTH_NOT_CONFIGURED",
        )


class InvalidCredentialsError(AuthenticationError):
    """Raised when Supabase rejects an email/password pair."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, code="INVALID_CREDENTIALS")


class SignUpFailedError(ValidationError):
    """Raised when Supabase refuses to create the account."""

    def __init__(self, message: str = "An error occurred during sign up"):
        super().__init__(message, code="SIGN_UP_FAILED")
