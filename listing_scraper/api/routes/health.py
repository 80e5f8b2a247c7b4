"""Health check routes."""

from datetime import datetime, timezone
from fastapi import APIRouter
from pydantic import BaseModel

from ... import __version__
from ...config import settings

router = APIRouter()


class HealthCheck(BaseModel):
    """Health check response model."""
    status: str
    timestamp: datetime
    version: str
    environment: str


@router.get("/health", response_model=HealthCheck)
async def health_check():
    """Basic health check endpoint.

    Returns:
        HealthCheck: Health check response
    """
    return HealthCheck(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        environment=settings.environment
    )


@router.get("/ping")
async def ping():
    """Simple ping endpoint."""
    return {"message": "pong", "timestamp": datetime.now(timezone.utc)}
