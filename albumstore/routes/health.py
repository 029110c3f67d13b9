"""
Album Store — Health Check Route
================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Pings MongoDB (critical) and, when configured, Redis (non-critical).

Status levels:
    - healthy:   All dependencies reachable (HTTP 200)
    - degraded:  Cache unreachable, persistence fine (HTTP 200)
    - unhealthy: Persistence unreachable (HTTP 503)
"""

import logging
import time
from typing import Optional

from fastapi import APIRouter, Depends, Response, status

from albumstore import __version__
from albumstore.cache import AlbumCache
from albumstore.deps import get_cache, get_repository
from albumstore.repository import AlbumRepository
from albumstore.schemas.album import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    response: Response,
    repository: Optional[AlbumRepository] = Depends(get_repository),
    cache: Optional[AlbumCache] = Depends(get_cache),
) -> HealthResponse:
    db_status = "connected"
    cache_status = "disabled"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        if repository is None:
            raise RuntimeError("repository not initialized")
        await repository.ping()
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Cache ───────────────────────────────────────────────────────
    if cache is not None:
        try:
            await cache.ping()
            cache_status = "connected"
        except Exception as e:
            cache_status = "disconnected"
            overall = "degraded" if overall != "unhealthy" else overall
            logger.warning("Health check: cache unreachable: %s", str(e))

    if overall == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        cache=cache_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
