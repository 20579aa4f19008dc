"""Health check endpoint with database connectivity check."""

from fastapi import APIRouter

from pipeline_api.api.deps import AppSettings, DbSession
from pipeline_api.core.database import check_db_connected
from pipeline_api.schemas.common import Envelope
from pipeline_api.schemas.health import HealthResponse

router = APIRouter()


@router.get("", response_model=Envelope[HealthResponse])
def get_health(db: DbSession, settings: AppSettings) -> Envelope[HealthResponse]:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    db_status = "connected" if check_db_connected(db) else "disconnected"

    return Envelope(
        status_code=200,
        message="Service is running",
        payload=HealthResponse(
            status="ok",
            environment=settings.APP_ENV,
            database=db_status,
        ),
    )
