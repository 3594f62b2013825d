"""Liveness check."""

from datetime import datetime, timezone
from importlib.metadata import PackageNotFoundError, version

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter
from pydantic import BaseModel

from stackit.config import Settings

router = APIRouter(tags=["health"], route_class=DishkaRoute)


def _package_version() -> str:
    try:
        return version("stackit-api")
    except PackageNotFoundError:
        return "unknown"


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    git_sha: str


@router.get("/health", response_model=HealthResponse)
async def health_check(settings: FromDishka[Settings]) -> HealthResponse:
    """Report that the process is up and which build is running.

    Does not touch the database, so it stays green while PostgreSQL is down.
    """
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=_package_version(),
        environment=settings.environment,
        git_sha=settings.git_sha,
    )
