"""VibeMatch: movie, TV and anime recommendations from a free-text vibe."""

__version__ = "0.1.0"
