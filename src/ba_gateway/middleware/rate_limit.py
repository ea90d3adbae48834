"""Rate limiting middleware — Redis fixed-window counter per client IP.

Applies to /api/ paths only. Key pattern: "ratelimit:{ip}:{window_start}".
The real client IP is taken from X-Forwarded-For when behind a proxy.

    count = INCR key
    if count == 1: EXPIRE key window
    if count > limit: 429 + Retry-After
"""

import logging
import time
from collections.abc import Awaitable, Callable

import redis.asyncio as aioredis
from redis.exceptions import RedisError
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from src.ba_common.errors import RateLimitError
from src.ba_common.response import error_response

logger = logging.getLogger("ba.ratelimit")


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


class RateLimitMiddleware(BaseHTTPMiddleware):
    def __init__(
        self,
        app: ASGIApp,
        redis_factory: Callable[[], Awaitable[aioredis.Redis]],
        max_requests: int,
        window_seconds: int,
    ) -> None:
        super().__init__(app)
        self._redis_factory = redis_factory
        self._max_requests = max_requests
        self._window_seconds = window_seconds

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        if not request.url.path.startswith("/api/"):
            return await call_next(request)

        now = int(time.time())
        window_start = now - now % self._window_seconds
        key = f"ratelimit:{_client_ip(request)}:{window_start}"
        try:
            redis = await self._redis_factory()
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, self._window_seconds)
        except RedisError as exc:
            # Fail open when Redis is unreachable.
            logger.warning("rate limiter unavailable: %s", exc)
            return await call_next(request)

        if count > self._max_requests:
            err = RateLimitError()
            retry_after = window_start + self._window_seconds - now
            return JSONResponse(
                status_code=err.http_status,
                content=error_response(err.code, err.message).model_dump(),
                headers={"Retry-After": str(retry_after)},
            )
        return await call_next(request)
