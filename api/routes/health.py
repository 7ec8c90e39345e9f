"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from shared.config import get_settings

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str
    auth: str


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check() -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether the backend credentials are configured. No network
    call is made.
    """
    settings = get_settings()
    database_ok = bool(settings.supabase_url and settings.supabase_service_role_key)
    auth_ok = bool(settings.supabase_jwt_secret)
    return ReadinessResponse(
        status="ready" if database_ok and auth_ok else "not_ready",
        database="configured" if database_ok else "not_configured",
        auth="configured" if auth_ok else "not_configured",
    )
