"""
Rate Limiting Module

Sliding-window rate limiting for the API using Redis sorted sets.
Falls back to in-memory storage while Redis is unavailable (that store is
per process, so limits are not shared between workers).
"""

import logging
import time
from uuid import uuid4

from fastapi import HTTPException, Request, status
from redis.asyncio import Redis
from redis.exceptions import RedisError

from app.core import redis as redis_state
from app.core.config import settings

logger = logging.getLogger(__name__)

# In-memory fallback store: {key: [timestamp, ...]}
_memory_store: dict[str, list[float]] = {}
_last_sweep: float = 0.0


class RateLimitExceeded(HTTPException):
    """Exception raised when rate limit is exceeded."""

    def __init__(self, limit: int, window_seconds: int):
        super().__init__(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail={
                "error": "RATE_LIMIT_EXCEEDED",
                "message": (
                    f"Rate limit exceeded. Maximum {limit} requests per {window_seconds} seconds."
                ),
                "retry_after_seconds": window_seconds,
            },
            headers={"Retry-After": str(window_seconds)},
        )


async def _check_rate_limit_redis(
    client: Redis,
    key: str,
    limit: int,
    window_seconds: int,
) -> bool:
    """
    Check rate limit using Redis.

    Args:
        client: Redis client
        key: Rate limit key (e.g., "rate_limit:127.0.0.1")
        limit: Maximum requests allowed
        window_seconds: Time window in seconds

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    now = time.time()
    window_start = now - window_seconds

    pipe = client.pipeline()
    pipe.zremrangebyscore(key, 0, window_start)
    pipe.zcard(key)
    pipe.zadd(key, {f"{now}:{uuid4().hex}": now})
    pipe.expire(key, window_seconds)

    results = await pipe.execute()
    current_count = results[1]

    return current_count < limit


def _sweep_memory_store(now: float, window_start: float, window_seconds: int) -> None:
    """Drop keys with no hits left in the window, at most once per window."""
    global _last_sweep
    if now - _last_sweep < window_seconds:
        return
    _last_sweep = now
    stale_keys = [k for k, hits in _memory_store.items() if not hits or hits[-1] <= window_start]
    for stale_key in stale_keys:
        del _memory_store[stale_key]


def _check_rate_limit_memory(key: str, limit: int, window_seconds: int) -> bool:
    """Check rate limit using the in-process store."""
    now = time.time()
    window_start = now - window_seconds
    _sweep_memory_store(now, window_start, window_seconds)

    hits = [ts for ts in _memory_store.get(key, []) if ts > window_start]
    if len(hits) >= limit:
        _memory_store[key] = hits
        return False

    hits.append(now)
    _memory_store[key] = hits
    return True


async def check_rate_limit(key: str, limit: int, window_seconds: int) -> bool:
    """
    Check if a request is within rate limits.

    Uses the shared Redis client when connected, otherwise memory.

    Returns:
        True if request is allowed, False if rate limit exceeded
    """
    client = redis_state.redis_client
    if client is not None:
        try:
            return await _check_rate_limit_redis(client, key, limit, window_seconds)
        except RedisError as e:
            logger.warning(f"Redis rate limit check failed, using memory: {e}")

    return _check_rate_limit_memory(key, limit, window_seconds)


def rate_limit_key(request: Request) -> str:
    """Key requests by client IP."""
    client_ip = request.client.host if request.client else "unknown"
    return f"rate_limit:ip:{client_ip}"


async def api_rate_limit(request: Request) -> None:
    """
    Router dependency enforcing the global API request budget.

    Raises:
        RateLimitExceeded: When the window budget is spent (HTTP 429)
    """
    key = rate_limit_key(request)
    limit = settings.rate_limit_max_requests
    window = settings.rate_limit_window_seconds

    if not await check_rate_limit(key, limit, window):
        logger.warning(f"Rate limit exceeded for {key}: {limit}/{window}s")
        raise RateLimitExceeded(limit, window)


def reset_memory_store() -> None:
    """Clear the in-memory fallback store."""
    global _last_sweep
    _memory_store.clear()
    _last_sweep = 0.0


__all__ = [
    "api_rate_limit",
    "check_rate_limit",
    "rate_limit_key",
    "reset_memory_store",
    "RateLimitExceeded",
]
