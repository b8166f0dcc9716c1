"""Health check routes."""

from datetime import datetime, timezone

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from invitely.config import Settings
from invitely.interface.api.envelope import ApiResponse, ok

router = APIRouter(tags=["health"], route_class=DishkaRoute)


class HealthResponse(BaseModel):
    """Health check payload."""

    status: str
    timestamp: datetime
    environment: str
    git_sha: str


@router.get("/health")
async def health_check(settings: FromDishka[Settings]) -> ApiResponse[HealthResponse]:
    """Report that the service is up."""
    return ok(
        HealthResponse(
            status="healthy",
            timestamp=datetime.now(timezone.utc),
            environment=settings.environment,
            git_sha=settings.git_sha,
        )
    )
