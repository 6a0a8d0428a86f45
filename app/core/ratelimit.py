"""In-process fixed-window rate limiting.

The counter table lives in a ``FixedWindowRateLimiter`` owned by the app
(``app.state.rate_limiter``). It is per process: running several workers
multiplies the effective limit.
"""

from __future__ import annotations

import asyncio
import logging
import math
import time
from dataclasses import dataclass
from typing import Callable

from fastapi import Request, status
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

logger = logging.getLogger(__name__)

AUTH_KEY_PREFIX = "auth:"


@dataclass
class _Window:
    count: int
    reset_at: float


@dataclass(frozen=True)
class RateLimitDecision:
    allowed: bool
    limit: int
    remaining: int
    retry_after: int


class FixedWindowRateLimiter:
    """Per-key request counters that reset once their window has elapsed."""

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._windows: dict[str, _Window] = {}

    def __len__(self) -> int:
        return len(self._windows)

    def hit(self, key: str, max_requests: int, window_seconds: float) -> RateLimitDecision:
        """Count one request for key and decide whether it is allowed."""
        now = self._clock()
        window = self._windows.get(key)
        if window is None or now > window.reset_at:
            self._windows[key] = _Window(count=1, reset_at=now + window_seconds)
            return RateLimitDecision(True, max_requests, max_requests - 1, 0)

        window.count += 1
        remaining = max(max_requests - window.count, 0)
        if window.count > max_requests:
            retry_after = max(math.ceil(window.reset_at - now), 1)
            return RateLimitDecision(False, max_requests, 0, retry_after)
        return RateLimitDecision(True, max_requests, remaining, 0)

    def sweep(self) -> int:
        """Drop every entry whose window has elapsed; return how many were removed."""
        now = self._clock()
        expired = [key for key, w in self._windows.items() if now > w.reset_at]
        for key in expired:
            del self._windows[key]
        return len(expired)


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Apply the general window to every request, keyed by client IP."""

    def __init__(
        self,
        app,
        *,
        limiter: FixedWindowRateLimiter,
        requests: int = 1000,
        window_seconds: int = 60,
    ) -> None:
        super().__init__(app)
        self.limiter = limiter
        self.requests = requests
        self.window_seconds = window_seconds

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        ip = client_ip(request)
        decision = self.limiter.hit(ip, self.requests, self.window_seconds)
        if not decision.allowed:
            logger.warning("Rate limit exceeded for %s on %s", ip, request.url.path)
            return JSONResponse(
                status_code=status.HTTP_429_TOO_MANY_REQUESTS,
                content={
                    "error": "Too many requests",
                    "code": "RATE_LIMITED",
                    "retryAfter": decision.retry_after,
                },
                headers={"Retry-After": str(decision.retry_after)},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(decision.limit)
        response.headers["X-RateLimit-Remaining"] = str(decision.remaining)
        return response


async def run_periodic_sweep(limiter: FixedWindowRateLimiter, interval_seconds: float) -> None:
    """Sweep elapsed windows forever; cancelled on application shutdown."""
    while True:
        await asyncio.sleep(interval_seconds)
        removed = limiter.sweep()
        if removed:
            logger.info("Rate limit sweep removed %s expired entries", removed)
