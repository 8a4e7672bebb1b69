"""Main FastAPI application."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.gzip import GZipMiddleware

from vibematch import __version__
from vibematch.api import api_router
from vibematch.config import get_settings
from vibematch.exceptions import ConfigurationError, ValidationError
from vibematch.utils.cache import cache
from vibematch.utils.http_client import close_all_clients
from vibematch.utils.logging import get_logger, setup_logging
from vibematch.utils.rate_limiter import rate_limiter

settings = get_settings()
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler."""
    # Startup
    if not settings.tmdb_api_key:
        logger.warning("TMDB_API_KEY is not set - catalog lookups will return no results")
    if not settings.gemini_api_key:
        logger.warning("GEMINI_API_KEY is not set - recommendation requests will fail")

    if settings.cache_enabled:
        if await cache.connect():
            logger.info("Redis cache connected")
        else:
            logger.warning("Redis cache unavailable - running without caching")

    yield

    # Shutdown
    await cache.close()
    await close_all_clients()
    logger.info("Application shutdown complete")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    lifespan=lifespan,
)

app.add_middleware(GZipMiddleware, minimum_size=500)

if settings.is_development:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000", "http://localhost:5173", "http://127.0.0.1:8080"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

app.include_router(api_router)


@app.exception_handler(ValidationError)
async def validation_error_handler(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"detail": str(exc)})


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(request: Request, exc: ConfigurationError) -> JSONResponse:
    logger.error(f"Configuration error on {request.url.path}: {exc}")
    return JSONResponse(status_code=503, content={"detail": str(exc)})


# Store app start time for uptime tracking
_app_start_time = datetime.now(UTC)


@app.get("/health", include_in_schema=True, tags=["monitoring"])
async def health_check() -> JSONResponse:
    """Health check endpoint for monitoring and load balancers.

    Returns:
        JSONResponse with status, uptime, and service health checks.
    """
    health_status = {
        "status": "healthy",
        "timestamp": datetime.now(UTC).isoformat(),
        "uptime_seconds": (datetime.now(UTC) - _app_start_time).total_seconds(),
        "version": __version__,
        "checks": {
            "tmdb": {"status": "configured" if settings.tmdb_api_key else "missing"},
            "gemini": {"status": "configured" if settings.gemini_api_key else "missing"},
        },
        "rate_limits": rate_limiter.get_stats(),
    }

    if not settings.tmdb_api_key or not settings.gemini_api_key:
        health_status["status"] = "degraded"

    if settings.cache_enabled:
        try:
            await cache.ping()
            health_status["checks"]["redis"] = {"status": "healthy"}
        except Exception:
            health_status["checks"]["redis"] = {"status": "unhealthy"}
            health_status["status"] = "degraded"

    status_code = 200 if health_status["status"] == "healthy" else 503
    return JSONResponse(content=health_status, status_code=status_code)
