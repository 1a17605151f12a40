"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter

from traintrack.api.deps import AppSettings, DbSession
from traintrack.core.database import check_db_connected
from traintrack.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=HealthResponse)
def get_health(db: DbSession, settings: AppSettings) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring; no authentication required.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database=db_status,
    )
