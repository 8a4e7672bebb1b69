"""Pydantic schemas for API validation and serialization."""

from pydantic import BaseModel, ConfigDict, Field, field_validator

from vibematch.models.recommendation import AccessType, MediaKind


# Request schemas
class RecommendationQuery(BaseModel):
    """Body of a recommendation request."""

    query: str = Field(..., min_length=1, max_length=500)
    media_type: MediaKind = MediaKind.MOVIE
    hidden_gems: bool = False
    region: str | None = Field(None, min_length=2, max_length=2)

    @field_validator("region")
    @classmethod
    def normalize_region(cls, v: str | None) -> str | None:
        return v.upper() if v else v


class AnalyzeQuery(BaseModel):
    """Body of an analysis request."""

    query: str = Field(..., max_length=500)


# Response schemas
class StreamingProviderRead(BaseModel):
    """Streaming provider read schema."""

    model_config = ConfigDict(from_attributes=True)

    name: str
    logo_url: str
    access_type: AccessType


class ReviewRead(BaseModel):
    """Review read schema."""

    model_config = ConfigDict(from_attributes=True)

    author: str
    content: str
    created_at: str = ""
    rating: float | None = None


class RecommendationRead(BaseModel):
    """Recommendation read schema."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    year: int | None = None
    plot: str
    genres: list[str] = []
    rating: float
    match_percentage: int = Field(..., ge=0, le=100)
    media_kind: MediaKind
    source: str
    ai_explanation: str | None = None
    streaming_platforms: list[str] = []
    streaming_providers: list[StreamingProviderRead] = []
    reviews: list[ReviewRead] = []
    trailer_key: str | None = None
    poster_url: str = ""
    backdrop_url: str = ""
    # Series-specific
    number_of_seasons: int | None = None
    number_of_episodes: int | None = None


class RecommendationListRead(BaseModel):
    """Recommendation list schema."""

    query: str
    media_type: MediaKind
    hidden_gems: bool
    region: str
    count: int
    results: list[RecommendationRead]


class AnalysisRead(BaseModel):
    """Signals extracted from a query."""

    model_config = ConfigDict(from_attributes=True)

    genres: list[str]
    emotions: list[str]
    intensity: int = Field(..., ge=1, le=10)
    language: str | None = None
    wants_recent: bool

    @field_validator("genres", "emotions", mode="before")
    @classmethod
    def sort_tags(cls, v: object) -> object:
        if isinstance(v, (set, frozenset)):
            return sorted(v)
        return v


class MoodChipRead(BaseModel):
    """Preset mood shortcut."""

    id: str
    label: str
    prompt: str
    icon: str


class RegionRead(BaseModel):
    """Supported streaming region."""

    code: str
    name: str
    language: str
