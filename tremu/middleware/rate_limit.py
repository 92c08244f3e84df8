"""
Tremu Backend — Rate Limiting Middleware
==========================================

What:  Per-IP sliding window rate limiter.
How:   SlidingWindow keeps, per client key, a deque of request timestamps
       inside the current window. Once a key holds ``rate_limit_requests``
       timestamps, further requests get a 429 envelope with a Retry-After
       header until the oldest timestamp leaves the window.

Scope: state lives in one process. Multiple uvicorn workers each enforce
their own budget.
"""

import logging
import time
from collections import deque
from typing import Deque, Dict, Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from tremu.config import settings
from tremu.exceptions import RateLimitExceededError

logger = logging.getLogger(__name__)


class SlidingWindow:
    """Timestamps of recent hits per key; limits are read on every call."""

    # Forget idle keys every this many recorded hits
    SWEEP_EVERY = 1000

    def __init__(self):
        self._hits: Dict[str, Deque[float]] = {}
        self._recorded = 0

    def hit(self, key: str, limit: int, window: int, now: Optional[float] = None) -> Optional[int]:
        """
        Record a hit for ``key``.

        Returns None when the hit is allowed, otherwise the number of
        seconds until the oldest hit expires (nothing is recorded).
        """
        now = time.time() if now is None else now
        window_start = now - window

        hits = self._hits.setdefault(key, deque())
        while hits and hits[0] <= window_start:
            hits.popleft()

        if len(hits) >= limit:
            return int(hits[0] + window - now) + 1

        hits.append(now)
        self._recorded += 1
        if self._recorded % self.SWEEP_EVERY == 0:
            self._sweep(window_start)
        return None

    def __len__(self) -> int:
        return len(self._hits)

    def _sweep(self, window_start: float) -> None:
        idle = [key for key, hits in self._hits.items() if not hits or hits[-1] <= window_start]
        for key in idle:
            del self._hits[key]
        if idle:
            logger.debug("Dropped %d idle rate-limit entries", len(idle))


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Excluded paths: /health and the API docs."""

    EXCLUDED_PATHS = {"/health", "/docs", "/openapi.json", "/redoc"}

    def __init__(self, app, **kwargs):
        super().__init__(app, **kwargs)
        self.window = SlidingWindow()

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in self.EXCLUDED_PATHS:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        retry_after = self.window.hit(
            client_ip, settings.rate_limit_requests, settings.rate_limit_window
        )
        if retry_after is None:
            return await call_next(request)

        logger.warning(
            "Rate limit exceeded for IP %s: %d requests in %ds window",
            client_ip,
            settings.rate_limit_requests,
            settings.rate_limit_window,
        )
        # Middleware sits outside the app's exception handlers, so the
        # envelope is built here
        exc = RateLimitExceededError(retry_after=retry_after)
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.message, "error": "rate_limit_exceeded"},
            headers={"Retry-After": str(retry_after)},
        )
