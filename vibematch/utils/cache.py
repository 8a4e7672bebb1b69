"""Redis caching utilities for catalog API responses.

Provides async Redis caching with JSON serialization, TTL management, and
cache key namespacing. Caching is optional: without REDIS_URL, or when Redis
is unreachable, every lookup is a miss and every write is a no-op.
"""

import hashlib
import json
from datetime import timedelta
from typing import Any

import redis.asyncio as redis

from vibematch.config import get_settings
from vibematch.utils.logging import get_logger

logger = get_logger(__name__)

# Cache TTL defaults
CACHE_TTL_SHORT = timedelta(minutes=15)  # Now playing, on the air
CACHE_TTL_MEDIUM = timedelta(hours=6)  # Reviews, videos, series details
CACHE_TTL_LONG = timedelta(hours=24)  # Watch providers


class RedisCache:
    """Async Redis cache client with JSON serialization."""

    def __init__(self, url: str | None = None) -> None:
        self._url = url
        self._client: redis.Redis | None = None
        self._connected = False

    @property
    def connected(self) -> bool:
        return self._connected

    def _resolve_url(self) -> str | None:
        if self._url is not None:
            return self._url
        settings = get_settings()
        return str(settings.redis_url) if settings.redis_url else None

    async def _get_client(self) -> redis.Redis | None:
        """Get or create Redis client."""
        if self._client is None:
            url = self._resolve_url()
            if url is None:
                return None
            self._client = redis.from_url(
                url,
                encoding="utf-8",
                decode_responses=True,
            )
        return self._client

    async def connect(self) -> bool:
        """Test Redis connection."""
        try:
            client = await self._get_client()
            if client is None:
                return False
            await client.ping()
            self._connected = True
            return True
        except Exception as e:
            logger.warning(f"Redis cache unavailable: {e}")
            self._connected = False
            return False

    async def ping(self) -> bool:
        """Ping Redis to check connection health."""
        client = await self._get_client()
        if client is None:
            return False
        return await client.ping()

    async def close(self) -> None:
        """Close Redis connection."""
        if self._client:
            await self._client.aclose()
            self._client = None
            self._connected = False

    async def get(self, key: str) -> Any | None:
        """Get value from cache.

        Returns:
            Cached value or None if not found/expired/unavailable
        """
        if not self._connected:
            return None

        try:
            client = await self._get_client()
            data = await client.get(key)
            if data:
                return json.loads(data)
            return None
        except Exception as e:
            logger.debug(f"Cache get error for {key}: {e}")
            return None

    async def set(
        self,
        key: str,
        value: Any,
        ttl: timedelta | None = None,
    ) -> bool:
        """Set value in cache.

        Args:
            key: Cache key
            value: Value to cache (must be JSON serializable)
            ttl: Time to live (default: 6 hours)

        Returns:
            True if successful
        """
        if not self._connected:
            return False

        try:
            client = await self._get_client()
            serialized = json.dumps(value, default=str)
            expire_seconds = int((ttl or CACHE_TTL_MEDIUM).total_seconds())
            await client.setex(key, expire_seconds, serialized)
            return True
        except Exception as e:
            logger.debug(f"Cache set error for {key}: {e}")
            return False


# Global cache instance
cache = RedisCache()


def make_cache_key(namespace: str, *args: Any, **kwargs: Any) -> str:
    """Generate a cache key from arguments.

    Args:
        namespace: Key prefix (e.g., "tmdb:movie/550/reviews")
        *args: Positional arguments to include in key
        **kwargs: Keyword arguments to include in key

    Returns:
        Cache key string
    """
    parts = [namespace]

    for arg in args:
        if arg is not None:
            parts.append(str(arg))

    for key, value in sorted(kwargs.items()):
        if value is not None:
            parts.append(f"{key}={value}")

    key_str = ":".join(parts)

    # Hash if too long to keep keys readable in redis-cli
    if len(key_str) > 200:
        hash_suffix = hashlib.md5(key_str.encode()).hexdigest()[:12]
        key_str = f"{namespace}:{hash_suffix}"

    return key_str
