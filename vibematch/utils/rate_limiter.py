"""Rate limiter for external API calls."""

import asyncio
import logging
import time
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class RateLimitConfig:
    """Configuration for rate limiting."""

    requests_per_second: float = 2.0  # Max requests per second
    burst_size: int = 5  # Allow short bursts


@dataclass
class TokenBucket:
    """Token bucket for rate limiting."""

    capacity: int
    refill_rate: float  # tokens per second
    tokens: float = field(default=0.0)
    last_refill: float = field(default_factory=time.monotonic)

    def __post_init__(self):
        self.tokens = float(self.capacity)

    def _refill(self) -> None:
        """Refill tokens based on elapsed time."""
        now = time.monotonic()
        elapsed = now - self.last_refill
        self.tokens = min(self.capacity, self.tokens + elapsed * self.refill_rate)
        self.last_refill = now

    def acquire(self, tokens: int = 1) -> float:
        """Try to acquire tokens.

        Returns:
            Wait time in seconds (0 if tokens acquired immediately)
        """
        self._refill()

        if self.tokens >= tokens:
            self.tokens -= tokens
            return 0.0

        tokens_needed = tokens - self.tokens
        return tokens_needed / self.refill_rate


class RateLimiter:
    """Per-service rate limiter shared by all requests of the process.

    Uses a token bucket per service. TMDB allows roughly 40 requests per
    second; a single recommendation can issue 40+ enrichment calls at once.
    """

    def __init__(self) -> None:
        self._buckets: dict[str, TokenBucket] = {}
        self._configs: dict[str, RateLimitConfig] = {}
        self._lock = asyncio.Lock()

        self._default_configs = {
            "tmdb": RateLimitConfig(requests_per_second=35.0, burst_size=40),
            "gemini": RateLimitConfig(requests_per_second=2.0, burst_size=5),
            "default": RateLimitConfig(requests_per_second=2.0, burst_size=5),
        }

    def configure(self, service: str, config: RateLimitConfig) -> None:
        """Configure rate limits for a specific service."""
        self._configs[service] = config
        self._buckets.pop(service, None)

    def _get_bucket(self, service: str) -> TokenBucket:
        if service not in self._buckets:
            config = self._configs.get(
                service, self._default_configs.get(service, self._default_configs["default"])
            )
            self._buckets[service] = TokenBucket(
                capacity=config.burst_size,
                refill_rate=config.requests_per_second,
            )
        return self._buckets[service]

    async def acquire(self, service: str = "default", tokens: int = 1) -> None:
        """Acquire rate limit tokens for a service, sleeping if the bucket is empty."""
        while True:
            async with self._lock:
                wait_time = self._get_bucket(service).acquire(tokens)
            if wait_time <= 0:
                return
            logger.debug(f"Rate limit [{service}]: waiting {wait_time:.3f}s")
            await asyncio.sleep(wait_time)

    def get_stats(self) -> dict[str, dict[str, float]]:
        """Get current rate limiter statistics."""
        stats = {}
        for service, bucket in self._buckets.items():
            bucket._refill()
            stats[service] = {
                "available_tokens": bucket.tokens,
                "capacity": bucket.capacity,
                "refill_rate": bucket.refill_rate,
            }
        return stats


# Global rate limiter instance
rate_limiter = RateLimiter()
