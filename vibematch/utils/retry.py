"""Retry utilities with exponential backoff for external API calls."""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

import httpx

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RetryConfig:
    """Configuration for retry behavior."""

    max_retries: int = 2
    base_delay: float = 0.5  # seconds
    max_delay: float = 5.0  # seconds
    exponential_base: float = 2.0
    retryable_exceptions: tuple = (
        httpx.TimeoutException,
        httpx.ConnectError,
        httpx.ReadError,
        ConnectionError,
        TimeoutError,
    )
    retryable_status_codes: tuple = (429, 500, 502, 503, 504)

    def delay_for(self, attempt: int) -> float:
        return min(self.base_delay * (self.exponential_base**attempt), self.max_delay)


DEFAULT_RETRY_CONFIG = RetryConfig()
NO_RETRY = RetryConfig(max_retries=0)


async def retry_request(
    send: Callable[[], Awaitable[httpx.Response]],
    config: RetryConfig = DEFAULT_RETRY_CONFIG,
    operation_name: str = "request",
) -> httpx.Response:
    """Send an HTTP request, retrying transient failures with exponential backoff.

    Args:
        send: Zero-argument coroutine factory performing the request
        config: Retry configuration
        operation_name: Name of the operation for logging

    Returns:
        The last response received. Retryable status codes are returned as-is
        once retries are exhausted, so the caller decides how to treat them.

    Raises:
        The last retryable exception once retries are exhausted, or any
        non-retryable exception immediately.
    """
    for attempt in range(config.max_retries + 1):
        try:
            response = await send()
        except config.retryable_exceptions as e:
            if attempt >= config.max_retries:
                logger.warning(
                    f"{operation_name}: Failed after {config.max_retries + 1} attempts: {type(e).__name__}"
                )
                raise
            delay = config.delay_for(attempt)
            logger.debug(
                f"{operation_name}: {type(e).__name__}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
            )
            await asyncio.sleep(delay)
            continue

        if response.status_code in config.retryable_status_codes and attempt < config.max_retries:
            delay = config.delay_for(attempt)
            if response.status_code == 429:
                delay = min(retry_after_seconds(response, delay), config.max_delay)
            logger.debug(
                f"{operation_name}: Got status {response.status_code}, "
                f"retrying in {delay:.1f}s (attempt {attempt + 1}/{config.max_retries + 1})"
            )
            await asyncio.sleep(delay)
            continue

        return response

    # Unreachable: the loop either returns or raises on the last attempt
    raise RuntimeError(f"{operation_name}: retry loop exited unexpectedly")


def retry_after_seconds(response: httpx.Response, default: float) -> float:
    """Honor a numeric Retry-After header when present."""
    value: Any = response.headers.get("Retry-After")
    try:
        return float(value)
    except (TypeError, ValueError):
        return default
