"""
Health check endpoints.

Provides endpoints for monitoring application health and readiness.
"""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from shared.config import get_settings
from shared.exceptions import UserbaseError
from shared.workers import get_worker_pool
from ..dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str


class ReadinessResponse(BaseModel):
    """Readiness check response model."""

    status: str
    database: str



def _check_database() -> None:
    """Open the pool if needed and run a trivial query, off the event loop."""
    get_container().connection_pool.check()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """
    Basic health check endpoint.

    Returns 200 if the API is running.
    """
    return HealthResponse(status="healthy", version=get_settings().app_version)


@router.get("/ready", response_model=ReadinessResponse)
async def readiness_check(response: Response) -> ReadinessResponse:
    """
    Readiness check endpoint.

    Runs ``SELECT 1`` on a pooled connection; 503 if that fails.
    """
    try:
        await get_worker_pool().run(_check_database)
    except (RuntimeError, UserbaseError) as e:
        logger.warning(f"Readiness check failed: {e}")
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return ReadinessResponse(status="unavailable", database="unavailable")

    return ReadinessResponse(status="ready", database="connected")
