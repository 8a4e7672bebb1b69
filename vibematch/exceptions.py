"""Exception hierarchy.

Only ValidationError and ConfigurationError ever reach callers. Catalog and
generation errors are raised inside their gateway and converted into result
objects before they leave it.
"""


class VibeMatchError(Exception):
    """Base class for all application errors."""


class ValidationError(VibeMatchError):
    """The caller supplied an unusable request."""


class QueryTooShortError(ValidationError):
    """The vibe description has fewer words than required."""

    def __init__(self, word_count: int, min_words: int) -> None:
        self.word_count = word_count
        self.min_words = min_words
        super().__init__(
            f"Please provide a more detailed description (at least {min_words} words, got {word_count})"
        )


class ConfigurationError(VibeMatchError):
    """A required credential or setting is missing."""

    def __init__(self, setting: str, message: str | None = None) -> None:
        self.setting = setting
        super().__init__(message or f"{setting} is not set in environment variables")


class CatalogError(VibeMatchError):
    """A catalog (TMDB) request failed."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.status_code = status_code
        super().__init__(message)


class GenerationError(VibeMatchError):
    """The generative service could not produce recommendations."""


class GenerationParseError(GenerationError):
    """The generative service answered with something that is not a candidate list."""
