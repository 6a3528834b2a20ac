"""Health check routes."""

from fastapi import APIRouter
from pydantic import BaseModel

from dashboard.core.dependencies import SettingsDep

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str


class ReadyResponse(BaseModel):
    """Readiness check response."""

    status: str
    backend: str


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check",
    description="Check if the service is running.",
)
async def health_check(settings: SettingsDep) -> HealthResponse:
    """Return service health status."""
    return HealthResponse(
        status="healthy",
        version=settings.app.version,
    )


@router.get(
    "/ready",
    response_model=ReadyResponse,
    summary="Readiness check",
    description="Check if the service is ready to receive traffic.",
)
async def readiness_check(settings: SettingsDep) -> ReadyResponse:
    """Return service readiness status with the configured backend."""
    return ReadyResponse(
        status="ready",
        backend=settings.backend.transactions_base_url,
    )


@router.get(
    "/live",
    summary="Liveness check",
    description="Kubernetes liveness probe endpoint.",
)
async def liveness_check() -> dict:
    """Return liveness status."""
    return {"status": "alive"}
