"""Health endpoints: basic, detailed (with database check), readiness, liveness.

Mounted at /health outside the /api prefix. Unexpected errors surface through
the app-wide exception handler as a 500 envelope.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.api.dependencies import get_health_service
from app.application.services import HealthService
from app.schemas.health import (
    DetailedHealthResponse,
    HealthResponse,
    LivenessResponse,
    ReadinessResponse,
)

router = APIRouter()

Health = Annotated[HealthService, Depends(get_health_service)]


@router.get("", response_model=HealthResponse)
@router.get("/", response_model=HealthResponse, include_in_schema=False)
async def health_check(health: Health) -> HealthResponse:
    """Process status, uptime, memory and CPU. Always 200."""
    return HealthResponse(data=health.basic())


@router.get(
    "/detailed",
    response_model=DetailedHealthResponse,
    responses={503: {"description": "One or more checks failed", "model": DetailedHealthResponse}},
)
async def detailed_health_check(health: Health) -> JSONResponse:
    """Per-subsystem checks plus extended system metrics. 503 unless all checks are OK."""
    data = await health.detailed()
    healthy = data.checks.all_ok
    body = DetailedHealthResponse(success=healthy, data=data)
    return JSONResponse(
        status_code=200 if healthy else 503,
        content=body.model_dump(mode="json"),
    )


@router.get(
    "/ready",
    response_model=ReadinessResponse,
    responses={503: {"description": "Not ready", "model": ReadinessResponse}},
)
async def readiness_check(health: Health) -> JSONResponse:
    ready = await health.is_ready()
    return JSONResponse(
        status_code=200 if ready else 503,
        content=health.readiness(ready).model_dump(mode="json"),
    )


@router.get("/live", response_model=LivenessResponse)
async def liveness_check(health: Health) -> LivenessResponse:
    """Always 200 while the process can serve requests."""
    return health.liveness()
