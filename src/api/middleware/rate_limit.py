from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime
from time import monotonic
from typing import TYPE_CHECKING

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from api.utils.request_context import client_ip
from core.config_models import RateLimitConfig

if TYPE_CHECKING:  # pragma: no cover
    from fastapi import FastAPI

MAX_TRACKED_CLIENTS = 10_000


class TokenBucket:
    """Refill ``rate`` tokens per second up to ``capacity``."""

    def __init__(self, capacity: int, rate: float, clock: Callable[[], float] = monotonic) -> None:
        self.capacity = capacity
        self.rate = rate
        self._clock = clock
        self._tokens = float(capacity)
        self._updated = clock()

    def take(self) -> bool:
        now = self._clock()
        self._tokens = min(self.capacity, self._tokens + (now - self._updated) * self.rate)
        self._updated = now
        if self._tokens < 1:
            return False
        self._tokens -= 1
        return True

    def is_full(self) -> bool:
        """True once the bucket has refilled to capacity, i.e. the client is idle."""
        elapsed = self._clock() - self._updated
        return self._tokens + elapsed * self.rate >= self.capacity


def prune_buckets(buckets: dict[str, TokenBucket], limit: int) -> None:
    """Keep ``buckets`` below ``limit`` entries.

    Full (idle) buckets are dropped first, then the oldest entries while
    still at the limit.
    """
    if len(buckets) < limit:
        return
    for key in [key for key, bucket in buckets.items() if bucket.is_full()]:
        del buckets[key]
    while len(buckets) >= limit:
        del buckets[next(iter(buckets))]


def register_rate_limit_middleware(
    app: FastAPI,
    config: RateLimitConfig | None,
    clock: Callable[[], float] = monotonic,
    max_clients: int = MAX_TRACKED_CLIENTS,
) -> None:
    """Attach a per-client token bucket limiter when ``config`` enables one.

    Bucket capacity is the burst capacity (requests-per-minute when unset);
    tokens refill at requests-per-minute / 60 per second.
    """
    if config is None or not config.enabled or not config.requests_per_minute:
        return
    if config.requests_per_minute <= 0:
        return

    rate = config.requests_per_minute / 60.0
    capacity = config.burst_capacity if config.burst_capacity and config.burst_capacity > 0 else config.requests_per_minute
    buckets: dict[str, TokenBucket] = {}

    @app.middleware("http")
    async def rate_limit(request: Request, call_next: Callable[[Request], Awaitable[Response]]) -> Response:  # noqa: D401
        key = client_ip(request)
        bucket = buckets.get(key)
        if bucket is None:
            prune_buckets(buckets, max_clients)
            bucket = buckets[key] = TokenBucket(capacity, rate, clock)
        if not bucket.take():
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": "Too many requests, please try again later.",
                    "timestamp": datetime.utcnow().isoformat(),
                },
            )
        return await call_next(request)
