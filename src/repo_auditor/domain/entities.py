"""Domain entities — pure data structures with no external dependencies."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Generic, Mapping, TypeVar

T = TypeVar("T")

NO_LICENSE = "No license"
README_NOT_AVAILABLE = "No README available"
SUMMARY_NO_README = "No README available for analysis"
SUMMARY_FAILED = "Could not generate summary."


class FetchOutcome(str, Enum):
    """How a single upstream read ended."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    RATE_LIMITED = "rate_limited"
    ERROR = "error"


@dataclass(frozen=True, slots=True)
class FetchResult(Generic[T]):
    """Outcome of one upstream call: the data on success, a reason otherwise."""

    outcome: FetchOutcome
    data: T | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.outcome is FetchOutcome.SUCCESS

    @classmethod
    def success(cls, data: T) -> FetchResult[T]:
        return cls(outcome=FetchOutcome.SUCCESS, data=data)

    @classmethod
    def failure(cls, outcome: FetchOutcome, detail: str = "") -> FetchResult[T]:
        return cls(outcome=outcome, detail=detail)


@dataclass(frozen=True, slots=True)
class Principal:
    """The authenticated caller, as vouched for by the session layer."""

    subject: str
    name: str | None = None
    email: str | None = None
    picture: str | None = None


@dataclass(frozen=True, slots=True)
class RepositoryMetadata:
    """Snapshot of the core repository stats returned by GitHub."""

    name: str
    full_name: str
    description: str | None
    url: str
    stars: int
    forks: int
    watchers: int
    open_issues: int
    created_at: str | None
    updated_at: str | None
    default_branch: str
    size: int  # kilobytes, as reported upstream
    license: str = NO_LICENSE


def language_shares(languages: Mapping[str, int]) -> dict[str, float]:
    """Return each language's share of the total byte count, in percent."""
    total = sum(languages.values())
    if total <= 0:
        return {}
    return {lang: count / total * 100 for lang, count in languages.items()}


@dataclass(frozen=True, slots=True)
class AnalysisResult:
    """Everything gathered for one analysis request."""

    repository: RepositoryMetadata
    languages: Mapping[str, int]
    readme: str
    summary: str | None
    analyzed_at: datetime

    @property
    def readme_available(self) -> bool:
        return self.readme != README_NOT_AVAILABLE
