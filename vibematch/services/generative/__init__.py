"""Generative recommender services."""

from vibematch.services.generative.gemini import GeminiRecommender, gemini_recommender

__all__ = ["GeminiRecommender", "gemini_recommender"]
