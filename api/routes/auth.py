"""
Account endpoints.

Sign-up creates the identity and its questionnaire profile in one call.
"""

from fastapi import APIRouter, Depends

from modules.auth.interfaces import IAuthService
from modules.auth.models import AuthResult, LoginRequest, SignUpRequest
from ..dependencies import get_auth_service
from ..middleware.auth import get_access_token

router = APIRouter()


@router.post("/signup", response_model=AuthResult, status_code=201)
async def sign_up(
    request: SignUpRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """
    Create an account and its profile.

    tokens is null when the project requires email confirmation.
    """
    return await auth.sign_up(request)


@router.post("/login", response_model=AuthResult)
async def login(
    request: LoginRequest,
    auth: IAuthService = Depends(get_auth_service),
) -> AuthResult:
    """Sign in with email and password."""
    return await auth.sign_in(request.email, request.password)


@router.post("/logout", status_code=204)
async def logout(
    token: str = Depends(get_access_token),
    auth: IAuthService = Depends(get_auth_service),
) -> None:
    """Revoke the caller's session."""
    await auth.sign_out(token)
