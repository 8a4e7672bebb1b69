"""Recommendations API endpoints."""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException

from vibematch.config import Settings, get_settings
from vibematch.constants import MOOD_CHIPS, SUPPORTED_REGIONS
from vibematch.exceptions import ConfigurationError, QueryTooShortError
from vibematch.models.recommendation import RecommendationRequest
from vibematch.models.schemas import (
    AnalysisRead,
    AnalyzeQuery,
    MoodChipRead,
    RecommendationListRead,
    RecommendationQuery,
    RecommendationRead,
    RegionRead,
)
from vibematch.services.analyzer import analyze
from vibematch.services.recommendations import HybridRecommendationEngine, create_engine

logger = logging.getLogger(__name__)

router = APIRouter()


@lru_cache
def get_engine() -> HybridRecommendationEngine:
    """Shared engine instance (the genre cache and HTTP pool are process-wide anyway)."""
    return create_engine()


@router.post("", response_model=RecommendationListRead)
async def recommend(
    body: RecommendationQuery,
    engine: HybridRecommendationEngine = Depends(get_engine),
    settings: Settings = Depends(get_settings),
) -> RecommendationListRead:
    """Recommend titles for a free-text vibe description."""
    try:
        request = RecommendationRequest.create(
            body.query,
            media_kind=body.media_type,
            hidden_gems=body.hidden_gems,
            region=body.region or settings.default_region,
        )
    except QueryTooShortError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    try:
        results = await engine.get_recommendations(request)
    except ConfigurationError as e:
        logger.error(f"Recommendation service misconfigured: {e}")
        raise HTTPException(status_code=503, detail=str(e)) from e

    return RecommendationListRead(
        query=request.query,
        media_type=request.media_kind,
        hidden_gems=request.hidden_gems,
        region=request.region,
        count=len(results),
        results=[RecommendationRead.model_validate(r) for r in results],
    )


@router.post("/analyze", response_model=AnalysisRead)
async def analyze_query(body: AnalyzeQuery) -> AnalysisRead:
    """Show the signals extracted from a query (no external calls)."""
    return AnalysisRead.model_validate(analyze(body.query))


@router.get("/moods", response_model=list[MoodChipRead])
async def list_moods() -> list[MoodChipRead]:
    """Preset mood prompts."""
    return [MoodChipRead(**chip) for chip in MOOD_CHIPS]


@router.get("/regions", response_model=list[RegionRead])
async def list_regions() -> list[RegionRead]:
    """Regions with streaming availability data."""
    return [RegionRead(**region) for region in SUPPORTED_REGIONS]
