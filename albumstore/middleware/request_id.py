"""
Album Store — Request ID Middleware
===================================

What:  Tags every request with an id and returns it in `X-Request-ID`.
How:   A client-supplied `X-Request-ID` is reused only when it is a short
       token of letters, digits, `.`, `_` or `-`; anything else (empty, too
       long, spaces, control characters) is replaced by an 8-character hex id.
       The id lives in a ContextVar so access-log lines and service errors
       logged during the request can be correlated.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

request_id_var: ContextVar[str] = ContextVar("request_id", default="")

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def resolve_request_id(supplied: Optional[str]) -> str:
    """Returns `supplied` if it is safe to echo and log, else a fresh id."""
    if supplied and _CLIENT_ID_PATTERN.fullmatch(supplied):
        return supplied
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = resolve_request_id(request.headers.get(REQUEST_ID_HEADER))
        # Not reset afterwards: the outermost 500 handler still logs this id
        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
