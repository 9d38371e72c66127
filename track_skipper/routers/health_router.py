"""Health endpoints."""

from datetime import UTC, datetime

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from track_skipper import __version__
from track_skipper.models import DetailedHealthResponse, HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Basic health check endpoint.

    For the state of the skip loop, use `/health/ready`.
    """
    return HealthResponse(status="ok", version=__version__)


@router.get("/health/ready", response_model=DetailedHealthResponse)
async def readiness_check(request: Request):
    """Readiness probe - is the skip loop running?

    **Returns:**
    - 200: Observer and scheduler tasks are alive
    - 503: The skipper was not started or one of its tasks has ended
    """
    skipper = getattr(request.app.state, "skipper", None)

    checks = {"skipper": "ok" if skipper is not None and skipper.is_running else "not_running"}
    all_healthy = checks["skipper"] == "ok"

    return JSONResponse(
        status_code=200 if all_healthy else 503,
        content=DetailedHealthResponse(
            status="healthy" if all_healthy else "unhealthy",
            version=__version__,
            timestamp=datetime.now(UTC),
            checks=checks,
        ).model_dump(mode="json"),
    )
