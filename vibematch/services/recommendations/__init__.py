"""Recommendation services package."""

from vibematch.services.recommendations.builder import RecommendationBuilder
from vibematch.services.recommendations.engine import (
    HybridRecommendationEngine,
    create_engine,
    get_recommendations,
)

__all__ = ["HybridRecommendationEngine", "RecommendationBuilder", "create_engine", "get_recommendations"]
