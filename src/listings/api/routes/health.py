"""Health check endpoint."""

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends

from listings import __version__
from listings.api.dependencies import ServiceContainer, get_container

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    summary="Service health",
    description="""
Report service status.

**Public endpoint** - no authentication required.

Does not call DynamoDB, S3 or Cognito; it only confirms the API is serving
requests and reports the configured environment.
""",
    response_description="Service status",
)
async def health(container: ServiceContainer = Depends(get_container)) -> dict[str, Any]:
    return {
        "status": "healthy",
        "service": "listings-api",
        "version": __version__,
        "environment": container.settings.environment,
        "timestamp": datetime.now(UTC).isoformat(),
    }
