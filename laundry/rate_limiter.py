"""
Hybrid in-memory + Redis rate limiting for the public OTP endpoints.

Counts live in process memory and are periodically mirrored to Redis so that
several workers converge on one window. When Redis is unreachable the
limiter keeps working from memory alone.
"""

import logging
import os
import time
from threading import Lock
from typing import Optional

import redis
from fastapi import Request

from .errors import RateLimitError

logger = logging.getLogger(__name__)

# Redis connection
redis_client: Optional[redis.Redis] = None

# Format: {key: {'count': int, 'reset_time': int, 'last_redis_sync': int}}
memory_cache: dict[str, dict] = {}
cache_lock = Lock()

MEMORY_CACHE_SYNC_INTERVAL = 10  # Sync to Redis every 10 seconds
MEMORY_CACHE_CLEANUP_INTERVAL = 60
last_cleanup_time = 0


def get_redis_client() -> redis.Redis:
    """Get or create Redis client from REDIS_URL or the individual REDIS_* settings"""
    global redis_client

    if redis_client is None:
        redis_url = os.getenv("REDIS_URL")
        if redis_url:
            redis_client = redis.from_url(
                redis_url,
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                health_check_interval=30,
            )
            logger.info("📡 Using Redis URL connection for rate limiting")
        else:
            redis_host = os.getenv("REDIS_HOST", "localhost")
            redis_port = int(os.getenv("REDIS_PORT", "6379"))
            redis_client = redis.Redis(
                host=redis_host,
                port=redis_port,
                password=os.getenv("REDIS_PASSWORD", None),
                db=int(os.getenv("REDIS_DB", "0")),
                ssl=os.getenv("REDIS_SSL", "false").lower() == "true",
                decode_responses=True,
                socket_connect_timeout=5,
                socket_timeout=5,
                health_check_interval=30,
            )
            logger.info(f"📡 Using Redis at {redis_host}:{redis_port} for rate limiting")

    return redis_client


def cleanup_expired_cache():
    """Remove expired entries from memory cache"""
    global last_cleanup_time
    current_time = int(time.time())

    if current_time - last_cleanup_time < MEMORY_CACHE_CLEANUP_INTERVAL:
        return

    with cache_lock:
        expired_keys = [k for k, v in memory_cache.items() if current_time >= v.get("reset_time", 0)]
        for k in expired_keys:
            del memory_cache[k]

        if expired_keys:
            logger.debug(f"🧹 Cleaned up {len(expired_keys)} expired rate limit entries")

    last_cleanup_time = current_time


def check_rate_limit(
    key: str, limit: int, window_seconds: int, client: Optional[redis.Redis]
) -> tuple[bool, int, int]:
    """
    Check and count one request against a fixed window.

    Returns:
        Tuple of (is_allowed, current_count, ttl_seconds)
    """
    current_time = int(time.time())
    cleanup_expired_cache()

    with cache_lock:
        if key not in memory_cache:
            entry = {"count": 0, "reset_time": current_time + window_seconds, "last_redis_sync": 0}
            if client is not None:
                # Continue a window another worker already started
                try:
                    redis_count = client.get(key)
                    redis_ttl = client.ttl(key)
                    if redis_count and redis_ttl > 0:
                        entry = {
                            "count": int(redis_count),
                            "reset_time": current_time + redis_ttl,
                            "last_redis_sync": current_time,
                        }
                except redis.RedisError as e:
                    logger.warning(f"⚠️ Failed to load from Redis, using memory only: {e}")
            memory_cache[key] = entry

        cache_entry = memory_cache[key]

        if current_time >= cache_entry["reset_time"]:
            cache_entry["count"] = 0
            cache_entry["reset_time"] = current_time + window_seconds
            cache_entry["last_redis_sync"] = 0

        is_allowed = cache_entry["count"] < limit
        if is_allowed:
            cache_entry["count"] += 1

        ttl = max(0, cache_entry["reset_time"] - current_time)

        if client is not None and current_time - cache_entry["last_redis_sync"] >= MEMORY_CACHE_SYNC_INTERVAL:
            try:
                client.set(key, cache_entry["count"], ex=max(ttl, 1))
                cache_entry["last_redis_sync"] = current_time
            except redis.RedisError as e:
                logger.warning(f"⚠️ Failed to sync to Redis: {e}")

        return is_allowed, cache_entry["count"], ttl


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


def create_rate_limiter(limit: int, window_seconds: int, key_prefix: str = "rate_limit"):
    """
    Create a per-IP rate limiter dependency

    Example usage:
        rate_limit_otp = create_rate_limiter(limit=5, window_seconds=600, key_prefix="otp_login")

        @router.post("/login")
        async def login(data: PhoneRequest, _: None = Depends(rate_limit_otp)):
            ...
    """

    async def rate_limiter(request: Request):
        if not getattr(request.app.state, "rate_limit_enabled", True):
            return

        try:
            client = get_redis_client()
        except redis.RedisError as e:
            logger.warning(f"⚠️ Redis unavailable, rate limiting from memory only: {e}")
            client = None

        key = f"{key_prefix}:{_client_ip(request)}"
        is_allowed, current_count, ttl = check_rate_limit(key, limit, window_seconds, client)

        if not is_allowed:
            logger.warning(f"🚫 Rate limit EXCEEDED for {key} - {current_count}/{limit} requests used")
            raise RateLimitError(
                f"Too many requests. Maximum {limit} requests per {window_seconds} seconds.",
                headers={"Retry-After": str(ttl)},
            )

    return rate_limiter
