"""Maps classified engine failures onto HTTP responses."""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse

from rockcollector.models.failure import (
    CatalogLoadError,
    ConfigurationError,
    GameError,
    InvariantViolation,
    PreconditionRejected,
)

logger = logging.getLogger(__name__)


def status_for(exc: GameError) -> int:
    """HTTP status for a failure class."""
    if isinstance(exc, PreconditionRejected):
        return status.HTTP_409_CONFLICT
    if isinstance(exc, ConfigurationError):
        return status.HTTP_400_BAD_REQUEST
    if isinstance(exc, CatalogLoadError):
        return status.HTTP_503_SERVICE_UNAVAILABLE
    if isinstance(exc, InvariantViolation):
        return status.HTTP_500_INTERNAL_SERVER_ERROR
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def game_error_handler(_request: Request, exc: GameError) -> JSONResponse:
    """Render any GameError as {"detail": FailureDetail}."""
    code = status_for(exc)
    if code >= 500:
        logger.error("Game failure (%s): %s", exc.kind.value, exc.message)
    else:
        logger.info("Rejected operation (%s): %s", exc.kind.value, exc.message)
    return JSONResponse(
        status_code=code,
        content={"detail": exc.to_detail().model_dump(mode="json")},
    )
