"""TMDB API integration: catalog search and per-title enrichment.

Every public operation returns a ``CatalogResult``. Transport errors,
timeouts, non-200 responses and malformed payloads are recorded and turned
into a failed result carrying the empty value, so callers never see an
exception from this module.
"""

import asyncio
import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, TypeVar

import httpx

from vibematch.config import get_settings
from vibematch.constants import (
    ANIMATION_GENRE_ID,
    ANIME_ORIGINAL_LANGUAGE,
    CATALOG_LANGUAGE,
    MAX_RECENT_RELEASES,
    MAX_REVIEWS_FETCHED,
    PROVIDER_FALLBACK_REGION,
    SORT_BY_POPULARITY,
    SORT_BY_RATING,
    TMDB_API_BASE_URL,
    TMDB_BACKDROP_SIZE,
    TMDB_IMAGE_BASE_URL,
    TMDB_LOGO_SIZE,
    TMDB_MEDIA_TYPE_MOVIE,
    TMDB_MEDIA_TYPE_TV,
    TMDB_POSTER_SIZE,
    VOTE_COUNT_MIN_DEFAULT,
    VOTE_COUNT_MIN_HIDDEN_GEMS,
)
from vibematch.exceptions import CatalogError
from vibematch.models.recommendation import (
    AccessType,
    CatalogEntry,
    Enrichment,
    MediaKind,
    Review,
    SeriesDetails,
    StreamingProvider,
)
from vibematch.models.results import CatalogResult
from vibematch.services.metadata.genres import GenreCache, genre_cache
from vibematch.utils.cache import (
    CACHE_TTL_LONG,
    CACHE_TTL_MEDIUM,
    CACHE_TTL_SHORT,
    RedisCache,
    cache,
    make_cache_key,
)
from vibematch.utils.events import EventRecorder, default_recorder
from vibematch.utils.http_client import get_tmdb_client
from vibematch.utils.rate_limiter import RateLimiter, rate_limiter
from vibematch.utils.retry import DEFAULT_RETRY_CONFIG, RetryConfig, retry_request

T = TypeVar("T")

COMPONENT = "catalog"

# Priority order when flattening watch providers
PROVIDER_PRIORITY = [AccessType.FREE, AccessType.FLATRATE, AccessType.RENT, AccessType.BUY]


@dataclass(frozen=True)
class SearchOptions:
    """Filters for a free-text catalog search."""

    media_kind: MediaKind = MediaKind.MOVIE
    genres: tuple[str, ...] = ()
    language: str | None = None  # e.g. "hi" for Hindi, "bn" for Bengali
    region: str | None = None  # e.g. "IN" for India
    hidden_gems: bool = False  # Prioritize high rating over popularity
    year: int | None = None


def parse_year(date: str | None) -> int | None:
    """Extract the year from a TMDB ``YYYY-MM-DD`` date."""
    if not date or len(date) < 4 or not date[:4].isdigit():
        return None
    return int(date[:4])


def parse_entry(item: dict[str, Any], catalog_type: str) -> CatalogEntry:
    """Build a CatalogEntry from a TMDB list item (movie or TV)."""
    return CatalogEntry(
        id=int(item["id"]),
        title=item.get("title") or item.get("name") or "Unknown",
        year=parse_year(item.get("release_date") or item.get("first_air_date")),
        overview=item.get("overview") or "",
        vote_average=float(item.get("vote_average") or 0.0),
        popularity=float(item.get("popularity") or 0.0),
        genre_ids=tuple(item.get("genre_ids") or ()),
        poster_path=item.get("poster_path"),
        backdrop_path=item.get("backdrop_path"),
        original_language=item.get("original_language"),
        media_type=catalog_type,
    )


def image_url(path: str | None, size: str = "poster") -> str:
    """Build a TMDB image URL; missing paths give an empty string."""
    if not path:
        return ""
    image_size = TMDB_POSTER_SIZE if size == "poster" else TMDB_BACKDROP_SIZE
    return f"{TMDB_IMAGE_BASE_URL}/{image_size}{path}"


class TMDBService:
    """Catalog gateway backed by The Movie Database."""

    def __init__(
        self,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        recorder: EventRecorder | None = None,
        genres: GenreCache | None = None,
        response_cache: RedisCache | None = None,
        limiter: RateLimiter | None = rate_limiter,
        retry_config: RetryConfig = DEFAULT_RETRY_CONFIG,
    ) -> None:
        self.api_key = api_key if api_key is not None else get_settings().tmdb_api_key
        self._client = client
        self.recorder = recorder or default_recorder
        self.genres = genres or genre_cache
        self.response_cache = response_cache or cache
        self.limiter = limiter
        self.retry_config = retry_config
        # Support both API key v3 and Bearer token
        if self.api_key and self.api_key.startswith("eyJ"):
            # Bearer token (API Read Access Token)
            self.headers = {
                "Authorization": f"Bearer {self.api_key}",
                "Accept": "application/json",
            }
            self.use_api_key_param = False
        else:
            # API key v3 - pass as query parameter
            self.headers = {"Accept": "application/json"}
            self.use_api_key_param = True

    @property
    def client(self) -> httpx.AsyncClient:
        return self._client or get_tmdb_client()

    def _add_api_key(self, params: dict) -> dict:
        """Add API key to params if using v3 key."""
        if self.use_api_key_param:
            params["api_key"] = self.api_key
        return params

    async def _get_json(
        self,
        path: str,
        params: dict[str, Any] | None = None,
        cache_ttl: timedelta | None = None,
    ) -> dict[str, Any]:
        """GET a TMDB endpoint and decode its JSON body.

        Raises:
            CatalogError: on missing credentials, transport errors, non-200
                responses or a body that is not a JSON object
        """
        if not self.api_key:
            raise CatalogError("TMDB_API_KEY is not configured")

        params = dict(params or {})
        cache_key = make_cache_key(f"tmdb:{path}", **params) if cache_ttl else None
        if cache_key:
            cached = await self.response_cache.get(cache_key)
            if cached is not None:
                return cached

        async def send() -> httpx.Response:
            if self.limiter is not None:
                await self.limiter.acquire("tmdb")
            return await self.client.get(
                f"{TMDB_API_BASE_URL}/{path}",
                params=self._add_api_key(dict(params)),
                headers=self.headers,
            )

        try:
            response = await retry_request(send, self.retry_config, operation_name=f"tmdb {path}")
        except (httpx.HTTPError, *self.retry_config.retryable_exceptions) as e:
            raise CatalogError(f"{type(e).__name__} calling {path}") from e

        if response.status_code != 200:
            raise CatalogError(f"{path} returned {response.status_code}", status_code=response.status_code)

        try:
            data = response.json()
        except ValueError as e:
            raise CatalogError(f"{path} returned invalid JSON") from e
        if not isinstance(data, dict):
            raise CatalogError(f"{path} returned an unexpected payload")

        if cache_key:
            await self.response_cache.set(cache_key, data, cache_ttl)
        return data

    def _failure(self, operation: str, error: Exception, empty: T, **fields: Any) -> CatalogResult[T]:
        self.recorder.record(COMPONENT, f"{operation}_failed", logging.WARNING, error=str(error), **fields)
        return CatalogResult.failure(str(error), empty)

    # ------------------------------------------------------------------
    # Genres
    # ------------------------------------------------------------------

    async def get_genre_list(self, catalog_type: str = TMDB_MEDIA_TYPE_MOVIE) -> list[dict[str, Any]] | None:
        """Fetch the official genres for a catalog type, or None on failure."""
        try:
            data = await self._get_json(f"genre/{catalog_type}/list", {"language": CATALOG_LANGUAGE})
        except CatalogError as e:
            self._failure("genre_list", e, None, catalog_type=catalog_type)
            return None
        return [g for g in data.get("genres", []) if isinstance(g, dict)]

    async def genre_map(self, catalog_type: str) -> dict[str, int] | None:
        return await self.genres.get_map(catalog_type, self.get_genre_list)

    def genre_names(self, genre_ids: tuple[int, ...] | list[int]) -> list[str]:
        return self.genres.names_for(genre_ids)

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    async def search_media(self, query: str, options: SearchOptions) -> CatalogResult[list[CatalogEntry]]:
        """Search movies, TV shows or anime from a free-text query and filters.

        Runs a filtered discover query and a plain text search concurrently
        and returns their union (discover first), de-duplicated by id.
        """
        media_kind = options.media_kind
        catalog_type = media_kind.catalog_type

        genre_map = await self.genre_map(catalog_type)
        if genre_map is None:
            return CatalogResult.failure("genre list unavailable", [])

        genre_ids = self.genres.resolve_ids(catalog_type, list(options.genres))
        if media_kind is MediaKind.ANIME and ANIMATION_GENRE_ID not in genre_ids:
            genre_ids.append(ANIMATION_GENRE_ID)

        discover_params: dict[str, Any] = {
            "sort_by": SORT_BY_RATING if options.hidden_gems else SORT_BY_POPULARITY,
            "vote_count.gte": VOTE_COUNT_MIN_HIDDEN_GEMS if options.hidden_gems else VOTE_COUNT_MIN_DEFAULT,
            "page": 1,
            "include_adult": "false",
        }
        if genre_ids:
            discover_params["with_genres"] = ",".join(str(g) for g in genre_ids)
        if options.language:
            discover_params["with_original_language"] = options.language
        if options.region:
            discover_params["region"] = options.region
        if options.year:
            if catalog_type == TMDB_MEDIA_TYPE_MOVIE:
                discover_params["primary_release_year"] = options.year
            else:
                discover_params["first_air_date_year"] = options.year
        # Anime is Japanese animation
        if media_kind is MediaKind.ANIME:
            discover_params["with_original_language"] = ANIME_ORIGINAL_LANGUAGE

        search_params = {
            "query": query,
            "language": CATALOG_LANGUAGE,
            "page": 1,
            "include_adult": "false",
        }

        try:
            discover_data, search_data = await asyncio.gather(
                self._get_json(f"discover/{catalog_type}", discover_params),
                self._get_json(f"search/{catalog_type}", search_params),
            )
            items = list(discover_data.get("results", [])) + list(search_data.get("results", []))
            seen: set[int] = set()
            results: list[CatalogEntry] = []
            for item in items:
                entry = parse_entry(item, catalog_type)
                if entry.id in seen:
                    continue
                if media_kind is MediaKind.ANIME and ANIMATION_GENRE_ID not in entry.genre_ids:
                    continue
                seen.add(entry.id)
                results.append(entry)
        except (CatalogError, KeyError, TypeError, ValueError) as e:
            return self._failure("search_media", e, [], media_kind=media_kind.value)

        return CatalogResult.success(results)

    async def search_by_title(
        self,
        title: str,
        year: int | None = None,
        media_kind: MediaKind = MediaKind.MOVIE,
    ) -> CatalogResult[CatalogEntry | None]:
        """Look up a specific title; the first search result wins."""
        catalog_type = media_kind.catalog_type
        params: dict[str, Any] = {
            "query": title,
            "language": CATALOG_LANGUAGE,
            "page": 1,
        }
        if year:
            if catalog_type == TMDB_MEDIA_TYPE_MOVIE:
                params["year"] = year
            else:
                params["first_air_date_year"] = year

        try:
            data = await self._get_json(f"search/{catalog_type}", params)
            results = data.get("results") or []
            if not results:
                return CatalogResult.success(None)
            return CatalogResult.success(parse_entry(results[0], catalog_type))
        except (CatalogError, KeyError, TypeError, ValueError) as e:
            return self._failure("search_by_title", e, None, title=title)

    async def get_recent_releases(
        self,
        media_kind: MediaKind = MediaKind.MOVIE,
        limit: int = MAX_RECENT_RELEASES,
    ) -> CatalogResult[list[str]]:
        """Get now-playing movies or on-the-air shows as ``"Title (YYYY)"`` strings."""
        catalog_type = media_kind.catalog_type
        endpoint = "tv/on_the_air" if catalog_type == TMDB_MEDIA_TYPE_TV else "movie/now_playing"

        try:
            data = await self._get_json(
                endpoint, {"language": CATALOG_LANGUAGE, "page": 1}, cache_ttl=CACHE_TTL_SHORT
            )
            titles = []
            for item in (data.get("results") or [])[:limit]:
                title = item.get("title") or item.get("name") or "Unknown"
                year = (item.get("release_date") or item.get("first_air_date") or "")[:4]
                titles.append(f"{title} ({year})")
        except (CatalogError, AttributeError, TypeError) as e:
            return self._failure("recent_releases", e, [], media_kind=media_kind.value)

        return CatalogResult.success(titles)

    # ------------------------------------------------------------------
    # Enrichment
    # ------------------------------------------------------------------

    async def get_watch_providers(
        self,
        tmdb_id: int,
        catalog_type: str = TMDB_MEDIA_TYPE_MOVIE,
        region: str = "IN",
    ) -> CatalogResult[list[StreamingProvider]]:
        """Get streaming providers for a title in a region (falls back to US).

        Providers are ordered free > subscription > rent > buy; a provider
        listed under several access types keeps its highest-priority one.
        """
        try:
            data = await self._get_json(
                f"{catalog_type}/{tmdb_id}/watch/providers", cache_ttl=CACHE_TTL_LONG
            )
            results = data.get("results") or {}
            region_data = results.get(region) or results.get(PROVIDER_FALLBACK_REGION)
            if not region_data:
                return CatalogResult.success([])

            providers: list[StreamingProvider] = []
            seen: set[str] = set()
            for access_type in PROVIDER_PRIORITY:
                for option in region_data.get(access_type.value) or []:
                    name = option["provider_name"]
                    if name in seen:
                        continue
                    seen.add(name)
                    providers.append(
                        StreamingProvider(
                            name=name,
                            logo_url=f"{TMDB_IMAGE_BASE_URL}/{TMDB_LOGO_SIZE}{option.get('logo_path') or ''}",
                            access_type=access_type,
                        )
                    )
        except (CatalogError, AttributeError, KeyError, TypeError) as e:
            return self._failure("watch_providers", e, [], tmdb_id=tmdb_id)

        return CatalogResult.success(providers)

    async def get_reviews(
        self,
        tmdb_id: int,
        catalog_type: str = TMDB_MEDIA_TYPE_MOVIE,
    ) -> CatalogResult[list[Review]]:
        """Get the top reviews for a title."""
        try:
            data = await self._get_json(
                f"{catalog_type}/{tmdb_id}/reviews",
                {"language": CATALOG_LANGUAGE, "page": 1},
                cache_ttl=CACHE_TTL_MEDIUM,
            )
            reviews = []
            for item in (data.get("results") or [])[:MAX_REVIEWS_FETCHED]:
                rating = (item.get("author_details") or {}).get("rating")
                reviews.append(
                    Review(
                        author=item.get("author") or "Anonymous",
                        content=item.get("content") or "",
                        created_at=item.get("created_at") or "",
                        rating=float(rating) if rating is not None else None,
                    )
                )
        except (CatalogError, AttributeError, TypeError, ValueError) as e:
            return self._failure("reviews", e, [], tmdb_id=tmdb_id)

        return CatalogResult.success(reviews)

    async def get_trailer(
        self,
        tmdb_id: int,
        catalog_type: str = TMDB_MEDIA_TYPE_MOVIE,
    ) -> CatalogResult[str | None]:
        """Get the YouTube key of the first trailer, if any."""
        try:
            data = await self._get_json(
                f"{catalog_type}/{tmdb_id}/videos",
                {"language": CATALOG_LANGUAGE},
                cache_ttl=CACHE_TTL_MEDIUM,
            )
            for video in data.get("results") or []:
                if video.get("site") == "YouTube" and video.get("type") == "Trailer" and video.get("key"):
                    return CatalogResult.success(video["key"])
        except (CatalogError, AttributeError, TypeError) as e:
            return self._failure("trailer", e, None, tmdb_id=tmdb_id)

        return CatalogResult.success(None)

    async def get_series_details(self, tmdb_id: int) -> CatalogResult[SeriesDetails | None]:
        """Get season and episode counts for a TV show."""
        try:
            data = await self._get_json(f"tv/{tmdb_id}", cache_ttl=CACHE_TTL_MEDIUM)
            details = SeriesDetails(
                number_of_seasons=int(data.get("number_of_seasons") or 0),
                number_of_episodes=int(data.get("number_of_episodes") or 0),
            )
        except (CatalogError, TypeError, ValueError) as e:
            return self._failure("series_details", e, None, tmdb_id=tmdb_id)

        return CatalogResult.success(details)

    async def enrich(self, tmdb_id: int, media_kind: MediaKind, region: str) -> Enrichment:
        """Fetch providers, reviews and trailer for a title concurrently.

        Each part degrades to empty on failure; series details are fetched
        separately with ``get_series_details``.
        """
        catalog_type = media_kind.catalog_type
        providers, reviews, trailer = await asyncio.gather(
            self.get_watch_providers(tmdb_id, catalog_type, region),
            self.get_reviews(tmdb_id, catalog_type),
            self.get_trailer(tmdb_id, catalog_type),
        )
        return Enrichment(
            providers=tuple(providers.value),
            reviews=tuple(reviews.value),
            trailer_key=trailer.value,
        )

    def image_url(self, path: str | None, size: str = "poster") -> str:
        return image_url(path, size)


# Singleton instance
tmdb_service = TMDBService()
