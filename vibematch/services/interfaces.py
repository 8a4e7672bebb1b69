"""Interfaces the recommendation engine depends on.

The engine only talks to the catalog and the generative service through
these protocols; ``TMDBService`` and ``GeminiRecommender`` implement them,
tests substitute in-memory fakes.
"""

from typing import Protocol

from vibematch.models.recommendation import (
    CatalogEntry,
    Enrichment,
    MediaKind,
    SeriesDetails,
)
from vibematch.models.results import CatalogResult, GenerationResult
from vibematch.services.metadata.tmdb import SearchOptions


class CatalogGateway(Protocol):
    """Protocol for catalog access."""

    async def search_media(self, query: str, options: SearchOptions) -> CatalogResult[list[CatalogEntry]]:
        """Free-text plus filtered search, de-duplicated by id."""
        ...

    async def search_by_title(
        self, title: str, year: int | None, media_kind: MediaKind
    ) -> CatalogResult[CatalogEntry | None]:
        """First catalog match for a title, or None."""
        ...

    async def get_recent_releases(self, media_kind: MediaKind, limit: int) -> CatalogResult[list[str]]:
        """Currently showing titles, formatted for prompt context."""
        ...

    async def enrich(self, tmdb_id: int, media_kind: MediaKind, region: str) -> Enrichment:
        """Providers, reviews and trailer for one title."""
        ...

    async def get_series_details(self, tmdb_id: int) -> CatalogResult[SeriesDetails | None]:
        """Season and episode counts for a TV title."""
        ...

    def image_url(self, path: str | None, size: str = "poster") -> str:
        ...

    def genre_names(self, genre_ids: tuple[int, ...] | list[int]) -> list[str]:
        ...


class GenerativeRecommender(Protocol):
    """Protocol for AI title suggestions."""

    async def generate(
        self,
        prompt: str,
        media_kind: MediaKind,
        hidden_gems: bool,
        recent_titles: list[str] | None = None,
    ) -> GenerationResult:
        """Suggest up to five titles; failures come back as a failed result."""
        ...
