"""
Health Check Routes - System health and monitoring endpoints.

- /health       : liveness, no dependency checks
- /health/ready : database reachability and Gemini key count
"""
from datetime import datetime

from fastapi import APIRouter, Depends

from acns import __version__
from acns.api.container import ServiceContainer
from acns.api.dependencies import get_container
from acns.core.logging_config import get_logger
from acns.models.ai import HealthResponse

logger = get_logger(__name__)

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


@router.get(
    "",
    response_model=HealthResponse,
    summary="Health check endpoint",
)
async def health_check() -> HealthResponse:
    """Verify that the API is running and responsive."""
    logger.debug("Health check requested")

    return HealthResponse(
        status="healthy",
        version=__version__,
        timestamp=datetime.utcnow()
    )


@router.get(
    "/ready",
    response_model=HealthResponse,
    summary="Readiness check endpoint",
    description="""
    Reports whether the database answers and how many Gemini keys are
    configured. Status is "degraded" when either is missing; AI routes
    fail with 503 while no key is configured.
    """
)
async def readiness_check(container: ServiceContainer = Depends(get_container)) -> HealthResponse:
    logger.debug("Readiness check requested")

    database_ok = await container.database.check_connection()
    key_count = len(container.key_pool)

    return HealthResponse(
        status="ready" if database_ok and key_count else "degraded",
        version=__version__,
        timestamp=datetime.utcnow(),
        database=database_ok,
        gemini_keys=key_count,
    )
