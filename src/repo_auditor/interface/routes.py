"""API routes — thin controllers that delegate to the services."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import datetime, timezone
from typing import TypeVar

from fastapi import APIRouter, Depends, Request
from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel, ValidationError

from repo_auditor.domain.entities import Principal
from repo_auditor.domain.exceptions import MissingReadmeError, SummarizerUnavailableError
from repo_auditor.infrastructure.config import Settings
from repo_auditor.interface.auth import get_current_principal
from repo_auditor.interface.dependencies import get_app_settings, get_summarizer, get_use_case
from repo_auditor.interface.schemas import (
    AnalyzeRequest,
    AnalyzeResponse,
    ErrorResponse,
    HealthResponse,
    PrincipalResponse,
    SummarizeReadmeRequest,
    SummarizeReadmeResponse,
)
from repo_auditor.services.analyze_repo import AnalyzeRepoUseCase
from repo_auditor.services.summarizer import ReadmeSummarizer

router = APIRouter(prefix="/api")

_BodyModel = TypeVar("_BodyModel", bound=BaseModel)


def _authenticated_body(model: type[_BodyModel]) -> Callable[..., Awaitable[_BodyModel]]:
    """Dependency that parses the JSON body only once the caller is authenticated.

    FastAPI validates declared body parameters before resolving any
    dependency, so a logged-out caller sending garbage would see a 400.
    Reading the body here, behind ``get_current_principal``, keeps the 401 first.
    """

    async def _parse(
        request: Request,
        principal: Principal = Depends(get_current_principal),
    ):
        raw = await request.body()
        try:
            return model.model_validate_json(raw or b"{}")
        except ValidationError as exc:
            raise RequestValidationError(
                [{**err, "loc": ("body", *err["loc"])} for err in exc.errors(include_url=False)]
            ) from exc

    return _parse


def _json_body(model: type[BaseModel]) -> dict:
    return {
        "requestBody": {
            "required": True,
            "content": {"application/json": {"schema": model.model_json_schema(by_alias=True)}},
        }
    }


@router.post(
    "/analyze-repo",
    response_model=AnalyzeResponse,
    response_model_exclude_unset=True,
    openapi_extra=_json_body(AnalyzeRequest),
    responses={
        400: {"model": ErrorResponse, "description": "Missing or invalid GitHub URL"},
        401: {"model": ErrorResponse, "description": "Not logged in"},
        403: {"model": ErrorResponse, "description": "GitHub API rate limit exceeded"},
        404: {"model": ErrorResponse, "description": "Repository not found or private"},
        500: {"model": ErrorResponse, "description": "Upstream or internal failure"},
    },
)
async def analyze_repo(
    body: AnalyzeRequest = Depends(_authenticated_body(AnalyzeRequest)),
    principal: Principal = Depends(get_current_principal),
    use_case: AnalyzeRepoUseCase = Depends(get_use_case),
) -> AnalyzeResponse:
    """Analyze a GitHub repository by URL."""
    result = await use_case.execute(body.repo_url, principal)
    return AnalyzeResponse.from_result(result)


@router.post(
    "/summarize-readme",
    response_model=SummarizeReadmeResponse,
    openapi_extra=_json_body(SummarizeReadmeRequest),
    responses={
        400: {"model": ErrorResponse, "description": "README content missing"},
        401: {"model": ErrorResponse, "description": "Not logged in"},
        503: {"model": ErrorResponse, "description": "No summarization backend"},
    },
)
async def summarize_readme(
    body: SummarizeReadmeRequest = Depends(_authenticated_body(SummarizeReadmeRequest)),
    principal: Principal = Depends(get_current_principal),
    summarizer: ReadmeSummarizer = Depends(get_summarizer),
) -> SummarizeReadmeResponse:
    """Summarize README text supplied directly by the caller."""
    if not body.readme or not body.readme.strip():
        raise MissingReadmeError("README content is required")
    summary = await summarizer.summarize(body.readme)
    if summary is None:
        raise SummarizerUnavailableError("OPENAI_API_KEY is not configured.")
    return SummarizeReadmeResponse(summary=summary)


@router.get("/user", response_model=PrincipalResponse)
async def current_user(
    principal: Principal = Depends(get_current_principal),
) -> PrincipalResponse:
    """Return the logged-in user."""
    return PrincipalResponse(
        id=principal.subject,
        name=principal.name,
        email=principal.email,
        picture=principal.picture,
    )


@router.get("/health", response_model=HealthResponse)
async def health(settings: Settings = Depends(get_app_settings)) -> HealthResponse:
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        environment=settings.environment,
    )
