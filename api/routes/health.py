"""Health check API routes.

Provides endpoints for:
- GET /health - Basic liveness check
- GET /health/ready - Readiness check (DB connectivity)
"""

from fastapi import APIRouter, Request

from api.exceptions import ServiceUnavailableError
from api.models.api_models import HealthResponse, ReadinessResponse
from api.services.health_service import HealthService

router = APIRouter(prefix="/health", tags=["health"])


def _health_service(request: Request) -> HealthService:
    return HealthService(request.app.state.engine)


@router.get("", response_model=HealthResponse)
async def health() -> HealthResponse:
    """Basic liveness check.

    Returns 200 if the service is running.
    No authentication required.
    """
    return HealthResponse(status="healthy", timestamp=HealthService.timestamp())


@router.get("/ready", response_model=ReadinessResponse)
def ready(request: Request) -> ReadinessResponse:
    """Readiness check.

    Verifies the service is ready to handle requests by checking
    database connectivity. No authentication required.

    Raises:
        ServiceUnavailableError 503: Service not ready
    """
    db_healthy = _health_service(request).check_database()

    if not db_healthy:
        raise ServiceUnavailableError("Service not ready: database unavailable")

    return ReadinessResponse(status="ok", database=db_healthy)
