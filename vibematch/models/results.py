"""Result types returned by the external gateways.

Gateways never raise for remote failures. They return a result that is either
successful or a failure carrying the empty value for the operation, so callers
can branch on ``ok`` explicitly or just use ``value``.
"""

from dataclasses import dataclass, field
from typing import Generic, TypeVar

from vibematch.models.recommendation import CandidateTitle

T = TypeVar("T")


@dataclass(frozen=True)
class CatalogResult(Generic[T]):
    """Outcome of a catalog operation."""

    value: T
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> "CatalogResult[T]":
        return cls(value=value)

    @classmethod
    def failure(cls, error: str, empty: T) -> "CatalogResult[T]":
        return cls(value=empty, error=error)


@dataclass(frozen=True)
class GenerationResult:
    """Outcome of a generative recommender call."""

    candidates: list[CandidateTitle] = field(default_factory=list)
    error: str | None = None

    @property
    def success(self) -> bool:
        return self.error is None and len(self.candidates) > 0

    @classmethod
    def ok(cls, candidates: list[CandidateTitle]) -> "GenerationResult":
        return cls(candidates=candidates)

    @classmethod
    def failure(cls, error: str) -> "GenerationResult":
        return cls(error=error)
