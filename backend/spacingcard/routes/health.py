"""
SpacingCard — Health Check Route
==================================

GET /health: reports whether the API can reach its database.

The probe answers 200 in both states so that container orchestration can
read the body; `status` is "healthy" when SELECT 1 succeeds and "unhealthy"
otherwise.
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from spacingcard import __version__, database
from spacingcard.schemas.spacing import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_started_at = time.monotonic()


async def database_reachable() -> bool:
    """One SELECT 1 on a pooled connection; no retries."""
    try:
        async with database.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (OSError, SQLAlchemyError) as e:
        logger.warning("Health check: database unreachable: %s", str(e))
        return False
    return True


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    reachable = await database_reachable()
    return HealthResponse(
        status="healthy" if reachable else "unhealthy",
        version=__version__,
        database="connected" if reachable else "disconnected",
        uptime_seconds=round(time.monotonic() - _started_at, 2),
    )
