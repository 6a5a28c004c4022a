"""Per-client rate limiting backed by Redis."""

import logging
import math
import time
import uuid
from typing import Optional, Tuple

import redis.asyncio as redis

from city_weather.config import (
    REDIS_URL,
    RATE_LIMIT_REQUESTS_PER_SECOND,
    RATE_LIMIT_REDIS_KEY_PREFIX
)

logger = logging.getLogger(__name__)


class RateLimiter:
    """Sliding-window rate limiter keyed by client.

    Each client gets a sorted set of request timestamps. Every search fans
    out to two Open-Meteo calls, so the limit protects the upstream quota.
    Requests are allowed when Redis is unreachable.
    """

    def __init__(
        self,
        redis_client: Optional[redis.Redis] = None,
        max_requests: int = RATE_LIMIT_REQUESTS_PER_SECOND,
        window_seconds: float = 1.0
    ):
        """Initialize rate limiter.

        Args:
            redis_client: Optional Redis client. If None, creates new client.
            max_requests: Requests allowed per client within the window
            window_seconds: Window length in seconds
        """
        self.redis_client = redis_client or redis.from_url(REDIS_URL)
        self.max_requests = max_requests
        self.window_seconds = window_seconds
        self.key_prefix = RATE_LIMIT_REDIS_KEY_PREFIX

    def key_for(self, client_id: str) -> str:
        return f"{self.key_prefix}:{client_id}"

    async def is_allowed(self, client_id: str) -> Tuple[bool, int]:
        """Record a request from a client and check it against the limit.

        Args:
            client_id: Client identifier, usually the remote host

        Returns:
            Tuple of (is_allowed, retry_after_seconds)
        """
        key = self.key_for(client_id)
        now = time.time()
        window_start = now - self.window_seconds

        try:
            pipe = self.redis_client.pipeline()
            pipe.zremrangebyscore(key, 0, window_start)
            pipe.zadd(key, {f"{now}:{uuid.uuid4().hex}": now})
            pipe.zcard(key)
            pipe.expire(key, max(1, math.ceil(self.window_seconds * 2)))
            _, _, request_count, _ = await pipe.execute()

        except Exception as e:
            logger.error(f"Rate limiter error, allowing request: {e}")
            return True, 0

        if request_count > self.max_requests:
            retry_after = max(1, math.ceil(self.window_seconds))
            logger.debug(f"Rate limited {client_id}: count={request_count}, max={self.max_requests}")
            return False, retry_after

        return True, 0

    async def close(self):
        """Close Redis connection."""
        if self.redis_client:
            await self.redis_client.aclose()
