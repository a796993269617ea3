"""
Health check endpoints.

Provides liveness and readiness probes with database and catalog checks.
"""

import logging

from fastapi import APIRouter, Response, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from rockcollector.api.deps import SessionDep
from rockcollector.models.failure import CatalogLoadError
from rockcollector.services.catalog_loader import get_catalog

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    database: str | None = None
    catalog: str | None = None


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Liveness probe.

    Returns healthy if the service is running.
    Does not check dependencies.
    """
    return HealthResponse(status="healthy")


@router.get(
    "/ready",
    response_model=HealthResponse,
    responses={503: {"model": HealthResponse}},
)
async def ready(response: Response, session: SessionDep) -> HealthResponse:
    """
    Readiness probe.

    Checks database connectivity and that the static catalog loaded.
    Returns 503 if either is unavailable.
    """
    database = "connected"
    catalog = "loaded"
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Readiness check: database unavailable: %s", e)
        database = "disconnected"
    try:
        get_catalog()
    except CatalogLoadError as e:
        logger.warning("Readiness check: %s", e.message)
        catalog = "unavailable"

    if database != "connected" or catalog != "loaded":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
        return HealthResponse(status="not ready", database=database, catalog=catalog)
    return HealthResponse(status="ready", database=database, catalog=catalog)
