"""
DevConnector Backend — Request ID Middleware
==============================================

What:  Gives every request a correlation ID and echoes it in `X-Request-ID`.
How:   A client-supplied ID is kept only when it is a short token of safe
       characters (it ends up in log lines and response headers); anything
       else is replaced by 8 hex chars of a fresh UUID. The ID is published
       through a ContextVar and on `request.state`.
Who:   Read through `current_request_id()` by the access log, the rate
       limiter and every exception handler.

Placement:
    Outermost middleware. Responses built by inner layers (rate limiter,
    exception handlers) get the header here; the fallback 500 handler runs
    outside this layer and sets the header itself.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: Optional[str]) -> Optional[str]:
    """Return `value` if it is usable as a request ID, else None."""
    if value and _CLIENT_ID_PATTERN.match(value):
        return value
    return None


def current_request_id(request: Optional[Request] = None) -> str:
    """
    ID of the request being handled.

    Falls back to `request.state` for code running outside the context the
    middleware set the variable in.
    """
    rid = request_id_var.get("")
    if not rid and request is not None:
        rid = getattr(request.state, "request_id", "")
    return rid


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = accept_client_id(request.headers.get(REQUEST_ID_HEADER)) or new_request_id()

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)
        response.headers[REQUEST_ID_HEADER] = rid
        return response
