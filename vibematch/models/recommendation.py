"""Domain types for the recommendation pipeline."""

import enum
from dataclasses import dataclass, replace

from vibematch.constants import (
    MIN_QUERY_WORDS,
    TMDB_MEDIA_TYPE_MOVIE,
    TMDB_MEDIA_TYPE_TV,
)
from vibematch.exceptions import QueryTooShortError


class MediaKind(str, enum.Enum):
    """Kind of media a user is looking for."""

    MOVIE = "movie"
    TV = "tv"
    ANIME = "anime"

    @property
    def catalog_type(self) -> str:
        """TMDB media type used for lookups (anime lives in the TV catalog)."""
        return TMDB_MEDIA_TYPE_MOVIE if self is MediaKind.MOVIE else TMDB_MEDIA_TYPE_TV


class AccessType(str, enum.Enum):
    """How a streaming provider offers a title, in display priority order."""

    FREE = "free"
    FLATRATE = "flatrate"  # Subscription
    RENT = "rent"
    BUY = "buy"


def count_words(text: str) -> int:
    return len(text.split())


@dataclass(frozen=True)
class RecommendationRequest:
    """A single recommendation request."""

    query: str
    media_kind: MediaKind = MediaKind.MOVIE
    hidden_gems: bool = False
    region: str = "IN"

    @classmethod
    def create(
        cls,
        query: str,
        media_kind: MediaKind | str = MediaKind.MOVIE,
        hidden_gems: bool = False,
        region: str = "IN",
    ) -> "RecommendationRequest":
        """Validate inputs and build a request.

        Raises:
            QueryTooShortError: if the query has fewer than MIN_QUERY_WORDS words
        """
        query = query.strip()
        word_count = count_words(query)
        if word_count < MIN_QUERY_WORDS:
            raise QueryTooShortError(word_count, MIN_QUERY_WORDS)
        return cls(
            query=query,
            media_kind=MediaKind(media_kind),
            hidden_gems=hidden_gems,
            region=region.strip().upper(),
        )


@dataclass(frozen=True)
class AnalyzedSignals:
    """Structured signals extracted from the free-text query."""

    genres: frozenset[str] = frozenset()
    emotions: frozenset[str] = frozenset()
    intensity: int = 5
    language: str | None = None
    wants_recent: bool = False


@dataclass(frozen=True)
class CandidateTitle:
    """A title suggested by the generative recommender."""

    title: str
    year: int | None
    explanation: str


@dataclass(frozen=True)
class CatalogEntry:
    """A title as returned by the catalog."""

    id: int
    title: str
    year: int | None = None
    overview: str = ""
    vote_average: float = 0.0
    popularity: float = 0.0
    genre_ids: tuple[int, ...] = ()
    poster_path: str | None = None
    backdrop_path: str | None = None
    original_language: str | None = None
    media_type: str = TMDB_MEDIA_TYPE_MOVIE


@dataclass(frozen=True)
class StreamingProvider:
    name: str
    logo_url: str
    access_type: AccessType


@dataclass(frozen=True)
class Review:
    author: str
    content: str
    created_at: str = ""
    rating: float | None = None


@dataclass(frozen=True)
class SeriesDetails:
    number_of_seasons: int = 0
    number_of_episodes: int = 0


@dataclass(frozen=True)
class Enrichment:
    """Per-title data fetched on top of a catalog entry."""

    providers: tuple[StreamingProvider, ...] = ()
    reviews: tuple[Review, ...] = ()
    trailer_key: str | None = None


@dataclass(frozen=True)
class Recommendation:
    """A fully assembled recommendation, as shown to the user."""

    id: int
    title: str
    year: int | None
    plot: str
    rating: float
    match_percentage: int
    media_kind: MediaKind
    streaming_providers: tuple[StreamingProvider, ...] = ()
    reviews: tuple[Review, ...] = ()
    trailer_key: str | None = None
    ai_explanation: str | None = None
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None
    poster_url: str = ""
    backdrop_url: str = ""
    genres: tuple[str, ...] = ()

    @property
    def streaming_platforms(self) -> list[str]:
        return [p.name for p in self.streaming_providers]

    @property
    def source(self) -> str:
        return "ai" if self.ai_explanation else "heuristic"

    def with_match(self, match_percentage: int) -> "Recommendation":
        """Return a copy carrying a different match percentage."""
        return replace(self, match_percentage=match_percentage)
