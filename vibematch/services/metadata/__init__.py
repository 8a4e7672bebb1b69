"""Catalog metadata services."""

from vibematch.services.metadata.tmdb import SearchOptions, TMDBService, tmdb_service

__all__ = ["SearchOptions", "TMDBService", "tmdb_service"]
