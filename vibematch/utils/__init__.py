"""Utility modules for the VibeMatch application."""

from vibematch.utils.events import EventRecorder, LoggingEventRecorder, MemoryEventRecorder
from vibematch.utils.logging import LogContext, get_logger, setup_logging
from vibematch.utils.rate_limiter import RateLimitConfig, rate_limiter
from vibematch.utils.retry import RetryConfig, retry_request

__all__ = [
    # Events
    "EventRecorder",
    "LoggingEventRecorder",
    "MemoryEventRecorder",
    # Logging
    "get_logger",
    "LogContext",
    "setup_logging",
    # Rate limiting
    "rate_limiter",
    "RateLimitConfig",
    # Retry
    "retry_request",
    "RetryConfig",
]
