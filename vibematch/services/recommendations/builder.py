"""Assembles a full recommendation record from one catalog entry."""

import asyncio
import logging

from vibematch.constants import (
    AI_BASE_MATCH,
    HEURISTIC_BASE_MATCH,
    MAX_REVIEWS_DISPLAYED,
)
from vibematch.models.recommendation import (
    CatalogEntry,
    Enrichment,
    MediaKind,
    Recommendation,
    SeriesDetails,
)
from vibematch.models.results import CatalogResult
from vibematch.services.interfaces import CatalogGateway
from vibematch.utils.events import EventRecorder, default_recorder

COMPONENT = "builder"

NO_DESCRIPTION = "No description available."


async def _no_series_details() -> CatalogResult[SeriesDetails | None]:
    return CatalogResult.success(None)


class RecommendationBuilder:
    """Builds ``Recommendation`` records by enriching catalog entries."""

    def __init__(self, catalog: CatalogGateway, recorder: EventRecorder | None = None) -> None:
        self.catalog = catalog
        self.recorder = recorder or default_recorder

    async def build(
        self,
        entry: CatalogEntry,
        media_kind: MediaKind,
        region: str,
        ai_explanation: str | None = None,
    ) -> Recommendation | None:
        """Enrich a catalog entry into a recommendation.

        Enrichment and (for TV and anime) series details are fetched
        concurrently and both awaited before the record is assembled. The
        base match is 85 for AI-sourced entries and 70 otherwise.

        Returns:
            The record, or None if enrichment failed unexpectedly
        """
        is_series = media_kind.catalog_type != MediaKind.MOVIE.value
        try:
            enrichment, series = await asyncio.gather(
                self.catalog.enrich(entry.id, media_kind, region),
                self.catalog.get_series_details(entry.id) if is_series else _no_series_details(),
            )
            return self._assemble(entry, media_kind, enrichment, series.value, ai_explanation)
        except Exception as e:
            self.recorder.record(
                COMPONENT,
                "build_failed",
                logging.ERROR,
                tmdb_id=entry.id,
                title=entry.title,
                error=f"{type(e).__name__}: {e}",
            )
            return None

    def _assemble(
        self,
        entry: CatalogEntry,
        media_kind: MediaKind,
        enrichment: Enrichment,
        series: SeriesDetails | None,
        ai_explanation: str | None,
    ) -> Recommendation:
        return Recommendation(
            id=entry.id,
            title=entry.title,
            year=entry.year,
            plot=entry.overview or NO_DESCRIPTION,
            rating=entry.vote_average or 0.0,
            match_percentage=AI_BASE_MATCH if ai_explanation else HEURISTIC_BASE_MATCH,
            media_kind=media_kind,
            streaming_providers=enrichment.providers,
            reviews=enrichment.reviews[:MAX_REVIEWS_DISPLAYED],
            trailer_key=enrichment.trailer_key,
            ai_explanation=ai_explanation or None,
            number_of_seasons=series.number_of_seasons if series else None,
            number_of_episodes=series.number_of_episodes if series else None,
            poster_url=self.catalog.image_url(entry.poster_path, "poster"),
            backdrop_url=self.catalog.image_url(entry.backdrop_path, "backdrop"),
            genres=tuple(self.catalog.genre_names(entry.genre_ids)),
        )
