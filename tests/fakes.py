"""In-memory stand-ins for the catalog and generative services."""

import asyncio
from typing import Any

from vibematch.models.recommendation import (
    AccessType,
    CandidateTitle,
    CatalogEntry,
    Enrichment,
    MediaKind,
    Review,
    SeriesDetails,
    StreamingProvider,
)
from vibematch.models.results import CatalogResult, GenerationResult
from vibematch.services.metadata.tmdb import SearchOptions, image_url


def make_entry(tmdb_id: int, title: str | None = None, **kwargs: Any) -> CatalogEntry:
    """Build a catalog entry with sensible defaults."""
    defaults: dict[str, Any] = {
        "year": 2020,
        "overview": f"Plot of {title or tmdb_id}",
        "vote_average": 7.0,
        "popularity": 500.0,
        "genre_ids": (35,),
    }
    defaults.update(kwargs)
    return CatalogEntry(id=tmdb_id, title=title or f"Title {tmdb_id}", **defaults)


class FakeCatalog:
    """In-memory catalog gateway recording every call."""

    def __init__(
        self,
        titles: dict[str, CatalogEntry] | None = None,
        search_results: list[CatalogEntry] | None = None,
        recent: list[str] | None = None,
        enrich_delay: float = 0.0,
        fail_enrich_for: set[int] | None = None,
        fail_recent: bool = False,
    ) -> None:
        self.titles = titles or {}
        self.search_results = search_results or []
        self.recent = recent or []
        self.enrich_delay = enrich_delay
        self.fail_enrich_for = fail_enrich_for or set()
        self.fail_recent = fail_recent
        self.in_flight = 0
        self.max_in_flight = 0
        self.calls: list[tuple[str, Any]] = []

    def called(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]

    async def _pause(self) -> None:
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.enrich_delay)
        finally:
            self.in_flight -= 1

    async def search_media(self, query: str, options: SearchOptions) -> CatalogResult[list[CatalogEntry]]:
        self.calls.append(("search_media", (query, options)))
        return CatalogResult.success(list(self.search_results))

    async def search_by_title(
        self, title: str, year: int | None, media_kind: MediaKind
    ) -> CatalogResult[CatalogEntry | None]:
        self.calls.append(("search_by_title", (title, year, media_kind)))
        return CatalogResult.success(self.titles.get(title))

    async def get_recent_releases(self, media_kind: MediaKind, limit: int) -> CatalogResult[list[str]]:
        self.calls.append(("get_recent_releases", (media_kind, limit)))
        if self.fail_recent:
            return CatalogResult.failure("now playing unavailable", [])
        return CatalogResult.success(self.recent[:limit])

    async def enrich(self, tmdb_id: int, media_kind: MediaKind, region: str) -> Enrichment:
        self.calls.append(("enrich", (tmdb_id, media_kind, region)))
        if self.enrich_delay:
            await self._pause()
        if tmdb_id in self.fail_enrich_for:
            raise RuntimeError(f"enrichment exploded for {tmdb_id}")
        return Enrichment(
            providers=(StreamingProvider("Netflix", "https://img/netflix.png", AccessType.FLATRATE),),
            reviews=(
                Review("alice", "Loved it"),
                Review("bob", "Pretty good"),
                Review("carol", "Meh"),
            ),
            trailer_key=f"yt{tmdb_id}",
        )

    async def get_series_details(self, tmdb_id: int) -> CatalogResult[SeriesDetails | None]:
        self.calls.append(("get_series_details", tmdb_id))
        if self.enrich_delay:
            await self._pause()
        return CatalogResult.success(SeriesDetails(number_of_seasons=3, number_of_episodes=30))

    def image_url(self, path: str | None, size: str = "poster") -> str:
        return image_url(path, size)

    def genre_names(self, genre_ids: tuple[int, ...] | list[int]) -> list[str]:
        return ["Comedy" for g in genre_ids if g == 35]


class FakeGenerator:
    """Generative recommender returning a canned result."""

    def __init__(self, result: GenerationResult | None = None, error: Exception | None = None) -> None:
        self.result = result or GenerationResult.failure("no canned result")
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def generate(
        self,
        prompt: str,
        media_kind: MediaKind,
        hidden_gems: bool,
        recent_titles: list[str] | None = None,
    ) -> GenerationResult:
        self.calls.append(
            {
                "prompt": prompt,
                "media_kind": media_kind,
                "hidden_gems": hidden_gems,
                "recent_titles": recent_titles,
            }
        )
        if self.error is not None:
            raise self.error
        return self.result


def candidates(*titles: str) -> GenerationResult:
    """Successful generation result with one candidate per title."""
    return GenerationResult.ok(
        [CandidateTitle(title=t, year=2020, explanation=f"{t} fits your mood") for t in titles]
    )
