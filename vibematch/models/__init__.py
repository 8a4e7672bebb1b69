"""Domain types and API schemas."""

from vibematch.models.recommendation import (
    AccessType,
    AnalyzedSignals,
    CandidateTitle,
    CatalogEntry,
    Enrichment,
    MediaKind,
    Recommendation,
    RecommendationRequest,
    Review,
    SeriesDetails,
    StreamingProvider,
)
from vibematch.models.results import CatalogResult, GenerationResult

__all__ = [
    "AccessType",
    "AnalyzedSignals",
    "CandidateTitle",
    "CatalogEntry",
    "CatalogResult",
    "Enrichment",
    "GenerationResult",
    "MediaKind",
    "Recommendation",
    "RecommendationRequest",
    "Review",
    "SeriesDetails",
    "StreamingProvider",
]
