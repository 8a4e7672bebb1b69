"""Hybrid recommendation engine: AI suggestions with a heuristic fallback."""

import logging
import math
import uuid

from vibematch.config import get_settings
from vibematch.constants import (
    HEURISTIC_POPULARITY_BONUS_MAX,
    HEURISTIC_POPULARITY_DIVISOR,
    HEURISTIC_RATING_BONUS_MAX,
    HEURISTIC_SCORE_BASE,
    MATCH_PERCENTAGE_MAX,
    MAX_HEURISTIC_CANDIDATES,
    MAX_RECENT_RELEASES,
    MAX_RESULTS,
    MIN_AI_RESULTS,
    MIN_MATCH_PERCENTAGE,
)
from vibematch.models.recommendation import (
    AnalyzedSignals,
    CandidateTitle,
    CatalogEntry,
    MediaKind,
    Recommendation,
    RecommendationRequest,
)
from vibematch.services.analyzer import analyze
from vibematch.services.generative.gemini import GeminiRecommender, gemini_recommender
from vibematch.services.interfaces import CatalogGateway, GenerativeRecommender
from vibematch.services.metadata.tmdb import SearchOptions, TMDBService, tmdb_service
from vibematch.services.recommendations.builder import RecommendationBuilder
from vibematch.utils.events import EventRecorder, default_recorder
from vibematch.utils.logging import LogContext, get_logger

logger = get_logger(__name__)

COMPONENT = "engine"


def heuristic_score(entry: CatalogEntry) -> int:
    """Score a heuristic candidate from its catalog rating and popularity.

    60 base, plus up to 20 from the rating (x2) and up to 20 from
    popularity (/100), capped at 100.
    """
    score = float(HEURISTIC_SCORE_BASE)
    score += min(HEURISTIC_RATING_BONUS_MAX, entry.vote_average * 2)
    score += min(HEURISTIC_POPULARITY_BONUS_MAX, entry.popularity / HEURISTIC_POPULARITY_DIVISOR)
    # Halves round up
    return math.floor(min(MATCH_PERCENTAGE_MAX, score) + 0.5)


def rank(recommendations: list[Recommendation]) -> list[Recommendation]:
    """Drop weak matches, sort by match (stable) and keep the top results."""
    confident = [r for r in recommendations if r.match_percentage > MIN_MATCH_PERCENTAGE]
    confident.sort(key=lambda r: r.match_percentage, reverse=True)
    return confident[:MAX_RESULTS]


class HybridRecommendationEngine:
    """Engine producing recommendations for a free-text vibe description.

    Strategy:
    1. Analyze the query into genre/emotion/intensity/language/recency signals
    2. If the user wants recent content, fetch now-playing titles as AI context
    3. Ask the generative recommender for candidate titles
    4. Resolve each candidate in the catalog, in the AI's order
    5. With fewer than 3 resolved AI titles, run a catalog search driven by
       the signals and merge its results (AI records win on id collisions)
    6. Drop matches at or below 30%, sort by match and keep the top 7

    Nothing but a configuration error escapes: catalog and AI failures
    degrade to fewer (possibly zero) results.
    """

    def __init__(
        self,
        catalog: CatalogGateway,
        generator: GenerativeRecommender,
        builder: RecommendationBuilder | None = None,
        recorder: EventRecorder | None = None,
    ) -> None:
        self.catalog = catalog
        self.generator = generator
        self.recorder = recorder or default_recorder
        self.builder = builder or RecommendationBuilder(catalog, self.recorder)

    async def get_recommendations(self, request: RecommendationRequest) -> list[Recommendation]:
        """Produce the ranked recommendations for a validated request.

        Raises:
            ConfigurationError: if the generative service is not configured
        """
        log = LogContext(logger, request=uuid.uuid4().hex[:8], media=request.media_kind.value)
        signals = analyze(request.query)
        log.debug(
            f"Analyzed query: genres={sorted(signals.genres)} emotions={sorted(signals.emotions)} "
            f"intensity={signals.intensity} language={signals.language} recent={signals.wants_recent}"
        )

        recent_titles = await self._recent_context(signals, request.media_kind)

        generation = await self.generator.generate(
            request.query,
            request.media_kind,
            request.hidden_gems,
            recent_titles,
        )

        recommendations: list[Recommendation] = []
        if generation.success:
            recommendations = await self._resolve_ai_candidates(generation.candidates, request)
            log.info(f"Resolved {len(recommendations)}/{len(generation.candidates)} AI candidates")
        else:
            self.recorder.record(COMPONENT, "ai_unavailable", logging.WARNING, error=generation.error)
            log.warning(f"AI path unavailable: {generation.error}")

        if len(recommendations) < MIN_AI_RESULTS:
            log.info("Falling back to heuristic search")
            self.recorder.record(COMPONENT, "heuristic_fallback", ai_results=len(recommendations))
            heuristic = await self._heuristic_recommendations(request, signals)
            existing_ids = {r.id for r in recommendations}
            for rec in heuristic:
                if rec.id not in existing_ids:
                    existing_ids.add(rec.id)
                    recommendations.append(rec)

        ranked = rank(recommendations)
        log.info(f"Returning {len(ranked)} recommendations")
        return ranked

    async def _recent_context(self, signals: AnalyzedSignals, media_kind: MediaKind) -> list[str] | None:
        if not signals.wants_recent:
            return None
        result = await self.catalog.get_recent_releases(media_kind, MAX_RECENT_RELEASES)
        return result.value[:MAX_RECENT_RELEASES] or None

    async def _resolve_ai_candidates(
        self,
        candidates: list[CandidateTitle],
        request: RecommendationRequest,
    ) -> list[Recommendation]:
        """Look up each AI candidate in the catalog, one at a time, in order."""
        results: list[Recommendation] = []
        seen: set[int] = set()
        for candidate in candidates:
            match = await self.catalog.search_by_title(candidate.title, candidate.year, request.media_kind)
            if match.value is None:
                continue
            if match.value.id in seen:
                continue
            rec = await self.builder.build(
                match.value,
                request.media_kind,
                request.region,
                candidate.explanation,
            )
            if rec is not None:
                seen.add(rec.id)
                results.append(rec)
        return results

    async def _heuristic_recommendations(
        self,
        request: RecommendationRequest,
        signals: AnalyzedSignals,
    ) -> list[Recommendation]:
        """Keyword-driven catalog search scored by rating and popularity.

        Emotion and intensity signals are not used here; only genres and
        language shape the search.
        """
        options = SearchOptions(
            media_kind=request.media_kind,
            genres=tuple(sorted(signals.genres)),
            language=signals.language,
            region=request.region,
            hidden_gems=request.hidden_gems,
        )
        found = await self.catalog.search_media(request.query, options)

        results: list[Recommendation] = []
        for entry in found.value[:MAX_HEURISTIC_CANDIDATES]:
            rec = await self.builder.build(entry, request.media_kind, request.region)
            if rec is not None:
                results.append(rec.with_match(heuristic_score(entry)))
        return results


def create_engine(recorder: EventRecorder | None = None) -> HybridRecommendationEngine:
    """Engine wired to TMDB and Gemini.

    Without a recorder the shared service instances are used.
    """
    if recorder is None:
        return HybridRecommendationEngine(catalog=tmdb_service, generator=gemini_recommender)
    return HybridRecommendationEngine(
        catalog=TMDBService(recorder=recorder),
        generator=GeminiRecommender(recorder=recorder),
        recorder=recorder,
    )


async def get_recommendations(
    query: str,
    media_kind: MediaKind | str = MediaKind.MOVIE,
    hidden_gems: bool = False,
    region: str | None = None,
    engine: HybridRecommendationEngine | None = None,
) -> list[Recommendation]:
    """Validate a query and return its recommendations.

    Raises:
        QueryTooShortError: before any external call, for queries under 3 words
        ConfigurationError: if the generative service is not configured
    """
    request = RecommendationRequest.create(
        query,
        media_kind=media_kind,
        hidden_gems=hidden_gems,
        region=region or get_settings().default_region,
    )
    return await (engine or create_engine()).get_recommendations(request)
