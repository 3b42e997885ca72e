"""
DevConnector Backend — Rate Limiting Middleware
=================================================

What:  Per-IP sliding window rate limiter.
How:   Keeps a list of request timestamps per client IP in memory. Each
       request drops timestamps older than the window; if the remaining count
       is at the limit the request is rejected with 429 and Retry-After.
Who:   Applied to every request except health checks and API docs.

Limits come from Settings (`rate_limit_requests` per `rate_limit_window`
seconds) and are passed in by `create_app()`. Every `cleanup_every` counted
requests, IPs whose newest timestamp has left the window are dropped from the
table. `clock` defaults to `time.time`; tests pass a fake one.

This state lives in one process. Multiple uvicorn workers each keep their
own window.
"""

import logging
import time
from collections import defaultdict
from typing import Callable, Dict, List

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from devconnector.exceptions import RateLimitExceededError
from devconnector.middleware.request_id import current_request_id

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(
        self,
        app,
        max_requests: int = 1000,
        window_seconds: int = 3600,
        cleanup_every: int = 1000,
        clock: Callable[[], float] = time.time,
        **kwargs,
    ):
        super().__init__(app, **kwargs)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.cleanup_every = cleanup_every
        self.clock = clock
        self._requests: Dict[str, List[float]] = defaultdict(list)
        self._seen = 0

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = (
            getattr(request.client, "host", "unknown")
            if request.client
            else "unknown"
        )

        now = self.clock()
        window_start = now - self.window_seconds

        self._requests[client_ip] = [
            ts for ts in self._requests[client_ip] if ts > window_start
        ]

        if len(self._requests[client_ip]) >= self.max_requests:
            oldest = self._requests[client_ip][0]
            error = RateLimitExceededError(
                retry_after=int(oldest + self.window_seconds - now) + 1,
            )

            logger.warning(
                "Rate limit exceeded for IP %s: %d requests in %ds window",
                client_ip,
                len(self._requests[client_ip]),
                self.window_seconds,
            )

            # Raised exceptions do not reach the app's handlers from
            # BaseHTTPMiddleware, so the error body is built here
            return JSONResponse(
                status_code=429,
                content={
                    "error": error.error_code,
                    "msg": error.message,
                    "details": {"retry_after": error.retry_after},
                    "request_id": current_request_id(),
                },
                headers={"Retry-After": str(error.retry_after)},
            )

        self._requests[client_ip].append(now)

        # IPs with no request inside the window are dropped every `cleanup_every` requests
        self._seen += 1
        if self._seen % self.cleanup_every == 0:
            self._cleanup_inactive_ips(window_start)

        return await call_next(request)

    def _cleanup_inactive_ips(self, window_start: float) -> None:
        # Timestamps are appended in order, so the last one is the newest
        inactive_ips = [
            ip for ip, timestamps in self._requests.items()
            if not timestamps or timestamps[-1] <= window_start
        ]
        for ip in inactive_ips:
            del self._requests[ip]

        if inactive_ips:
            logger.debug("Cleaned up %d inactive IP entries", len(inactive_ips))
