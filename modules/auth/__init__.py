"""
Authentication module.

Handles JWT validation, email/password flows and identity-changed events.

Public API:
- IAuthService: Interface for auth operations
- IIdentityEvents: Interface for identity-changed notifications
- SignUpRequest, LoginRequest, AuthResult, AuthTokens: Auth models
- Auth exceptions: InvalidTokenError, ExpiredTokenError, etc.
"""

from .interfaces import IAuthService, IIdentityEvents, IdentityListener
from .models import AuthResult, AuthTokens, JWTPayload, LoginRequest, SignUpRequest
from .exceptions import (
    InvalidTokenError,
    ExpiredTokenError,
    MissingTokenError,
    AuthNotConfiguredError,
    InvalidCredentialsError,
    SignUpFailedError,
)

__all__ = [
    # Interfaces
    "IAuthService",
    "IIdentityEvents",
    "IdentityListener",
    # Models
    "AuthResult",
    "AuthTokens",
    "JWTPayload",
    "LoginRequest",
    "SignUpRequest",
    # Exceptions
    "InvalidTokenError",
    "ExpiredTokenError",
    "MissingTokenError",
    "AuthNotConfiguredError",
    "InvalidCredentialsError",
    "SignUpFailedError",
]
