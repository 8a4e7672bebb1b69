"""HTTP API."""

from vibematch.api.router import api_router

__all__ = ["api_router"]
