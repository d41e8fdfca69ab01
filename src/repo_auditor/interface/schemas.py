"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from repo_auditor.domain.entities import AnalysisResult


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class AnalyzeRequest(_CamelModel):
    """Request body for ``POST /api/analyze-repo``."""

    repo_url: str | None = Field(default=None, alias="repoUrl")


class RepositoryPayload(_CamelModel):
    name: str
    full_name: str = Field(alias="fullName")
    description: str | None
    url: str
    stars: int
    forks: int
    watchers: int
    issues: int
    created_at: str | None = Field(alias="createdAt")
    updated_at: str | None = Field(alias="updatedAt")
    default_branch: str = Field(alias="defaultBranch")
    size: int
    license: str


class AnalyzeResponse(_CamelModel):
    """Successful response from ``POST /api/analyze-repo``.

    ``aiSummary`` is omitted when no summarization backend is configured.
    """

    repository: RepositoryPayload
    languages: dict[str, int]
    readme: str
    ai_summary: str | None = Field(default=None, alias="aiSummary")
    analyzed_at: datetime = Field(alias="analyzedAt")

    @classmethod
    def from_result(cls, result: AnalysisResult) -> AnalyzeResponse:
        repo = result.repository
        fields: dict[str, object] = {
            "repository": RepositoryPayload(
                name=repo.name,
                full_name=repo.full_name,
                description=repo.description,
                url=repo.url,
                stars=repo.stars,
                forks=repo.forks,
                watchers=repo.watchers,
                issues=repo.open_issues,
                created_at=repo.created_at,
                updated_at=repo.updated_at,
                default_branch=repo.default_branch,
                size=repo.size,
                license=repo.license,
            ),
            "languages": dict(result.languages),
            "readme": result.readme,
            "analyzed_at": result.analyzed_at,
        }
        # Left unset (and so excluded from the payload) when there is no summary.
        if result.summary is not None:
            fields["ai_summary"] = result.summary
        return cls(**fields)


class SummarizeReadmeRequest(BaseModel):
    """Request body for ``POST /api/summarize-readme``."""

    readme: str | None = None


class SummarizeReadmeResponse(BaseModel):
    summary: str


class PrincipalResponse(BaseModel):
    id: str
    name: str | None = None
    email: str | None = None
    picture: str | None = None


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    environment: str


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    error: str
