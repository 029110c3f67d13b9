"""
Album Store — Access Log Middleware
===================================

What:  One `albumstore.access` line per request.
How:   Times the downstream handler and logs method, route, status and
       duration at a level picked by status class. The route is the matched
       template (`/albums/{album_id}`), so lines for different albums group
       together; the concrete id is carried separately in `extra`. Requests
       that match no route log their raw path. Bodies are never logged.

`/health` is skipped.
"""

import logging
import time
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from albumstore.middleware.request_id import request_id_var

logger = logging.getLogger("albumstore.access")

_SKIPPED_PATHS = {"/health"}


def level_for_status(status: int) -> int:
    if status >= 500:
        return logging.ERROR
    if status >= 400:
        return logging.WARNING
    return logging.INFO


def route_template(request: Request) -> str:
    """Matched route path, or the raw URL path when nothing matched."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _SKIPPED_PATHS:
            return await call_next(request)

        start_time = time.perf_counter()
        response = await call_next(request)
        duration_ms = (time.perf_counter() - start_time) * 1000

        # Router fills scope["route"] and scope["path_params"] during call_next
        route = route_template(request)
        album_id: Optional[str] = request.scope.get("path_params", {}).get("album_id")
        rid = request_id_var.get("")
        status = response.status_code

        logger.log(
            level_for_status(status),
            "%s %s %d %.1fms [%s]",
            request.method,
            route,
            status,
            duration_ms,
            rid,
            extra={
                "request_id": rid,
                "method": request.method,
                "route": route,
                "album_id": album_id,
                "status": status,
                "duration_ms": round(duration_ms, 2),
                "client_ip": request.client.host if request.client else None,
            },
        )

        return response
