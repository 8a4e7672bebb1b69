"""Centralized logging configuration for the VibeMatch application."""

import logging
import sys
from typing import Literal

from vibematch.config import get_settings


def setup_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] | None = None
) -> None:
    """Configure logging for the application.

    Args:
        level: Override log level (default: LOG_LEVEL setting, else INFO for
            production and DEBUG for development)
    """
    settings = get_settings()

    if level is None:
        level = settings.log_level or ("INFO" if settings.is_production else "DEBUG")

    # Root logger configuration
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
    logging.getLogger("google_genai").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger with the given name.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


class LogContext:
    """Adds structured ``[key=value]`` context to log messages."""

    def __init__(self, logger: logging.Logger, **context: str) -> None:
        self.logger = logger
        self.context = context
        self.prefix = " ".join(f"[{k}={v}]" for k, v in context.items())

    def debug(self, msg: str, *args, **kwargs) -> None:
        self.logger.debug(f"{self.prefix} {msg}", *args, **kwargs)

    def info(self, msg: str, *args, **kwargs) -> None:
        self.logger.info(f"{self.prefix} {msg}", *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs) -> None:
        self.logger.warning(f"{self.prefix} {msg}", *args, **kwargs)

    def error(self, msg: str, *args, **kwargs) -> None:
        self.logger.error(f"{self.prefix} {msg}", *args, **kwargs)
