"""Health check endpoint with database connectivity check."""

import time
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status

from app.api.deps import DbSession, get_app_settings
from app.core.config import Settings
from app.core.database import check_db_connected
from app.schemas.health import HealthResponse

router = APIRouter()

_STARTED = time.monotonic()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
def get_health(
    response: Response,
    db: DbSession,
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; 503 when the database is unreachable.
    """
    connected = check_db_connected(db)
    if not connected:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status="ok" if connected else "error",
        environment=settings.APP_ENV,
        timestamp=datetime.now(UTC),
        uptime=round(time.monotonic() - _STARTED, 3),
        database="connected" if connected else "disconnected",
    )
