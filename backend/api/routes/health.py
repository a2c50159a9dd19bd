"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from modules.auth.registry import SessionRegistry
from shared.config import get_settings

from ..middleware.session import get_session_registry

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    supabase: str
    sessions: int


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(
    registry: SessionRegistry = Depends(get_session_registry),
) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Reports whether Supabase is configured and how many portal sessions
    are live.
    """
    settings = get_settings()
    configured = bool(settings.supabase_url and settings.supabase_anon_key)
    return ReadinessResponse(
        status="ready" if configured else "degraded",
        supabase="configured" if configured else "missing",
        sessions=len(registry),
    )
