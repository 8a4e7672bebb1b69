"""Shared persistent httpx client for catalog API calls.

Using a persistent client avoids creating a new TCP connection + TLS handshake
for every catalog call, which matters because one recommendation request
fans out into dozens of TMDB requests.
"""

import httpx

from vibematch.constants import HTTPX_TIMEOUT

# Connection pool limits
_POOL_LIMITS = httpx.Limits(
    max_connections=20,
    max_keepalive_connections=10,
    keepalive_expiry=30,
)

_tmdb_client: httpx.AsyncClient | None = None


def get_tmdb_client() -> httpx.AsyncClient:
    """Get persistent httpx client for TMDB API calls."""
    global _tmdb_client
    if _tmdb_client is None or _tmdb_client.is_closed:
        _tmdb_client = httpx.AsyncClient(
            timeout=HTTPX_TIMEOUT,
            limits=_POOL_LIMITS,
            http2=False,
        )
    return _tmdb_client


async def close_all_clients() -> None:
    """Close all persistent httpx clients. Call during app shutdown."""
    global _tmdb_client
    if _tmdb_client is not None:
        await _tmdb_client.aclose()
        _tmdb_client = None
