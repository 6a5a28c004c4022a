"""Rate limiting middleware."""

import logging
from typing import Callable, Optional

from fastapi import Request, Response
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from city_weather.config import RATE_LIMIT_ENABLED, RATE_LIMIT_REQUESTS_PER_SECOND
from city_weather.rate_limiter import RateLimiter
from city_weather.weather.models import ErrorResponse

logger = logging.getLogger(__name__)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Reject clients that search faster than the configured rate with 429."""

    BYPASS_PATHS = {
        "/api",
        "/weather/health",
        "/weather/info",
        "/weather/codes",
        "/docs",
        "/redoc",
        "/openapi.json",
        "/favicon.ico",
    }

    def __init__(
        self,
        app,
        calls: int = RATE_LIMIT_REQUESTS_PER_SECOND,
        enabled: bool = RATE_LIMIT_ENABLED,
        rate_limiter: Optional[RateLimiter] = None
    ):
        """Initialize rate limit middleware.

        Args:
            app: ASGI application
            calls: Maximum requests per second per client
            enabled: Whether limiting is active
            rate_limiter: Limiter to use; a Redis-backed one is created if None
        """
        super().__init__(app)
        self.enabled = enabled
        self.rate_limiter = (rate_limiter or RateLimiter(max_requests=calls)) if enabled else None
        logger.info(f"Rate limit enabled: {self.enabled}, limit: {calls} req/sec per client")

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        if not self.enabled or request.url.path in self.BYPASS_PATHS:
            return await call_next(request)

        client_id = request.client.host if request.client else "unknown"
        is_allowed, retry_after = await self.rate_limiter.is_allowed(client_id)

        if not is_allowed:
            logger.warning(f"Rate limit exceeded for {client_id} accessing {request.method} {request.url.path}")
            return JSONResponse(
                status_code=429,
                content=ErrorResponse(
                    error="rate_limited",
                    detail=f"Rate limit exceeded. Please try again in {retry_after} seconds."
                ).model_dump(),
                headers={"Retry-After": str(retry_after)}
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(self.rate_limiter.max_requests)
        return response
