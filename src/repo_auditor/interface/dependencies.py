"""FastAPI dependency injection wiring."""

from __future__ import annotations

import logging

import httpx
from fastapi import Request

from repo_auditor.infrastructure.config import Settings
from repo_auditor.infrastructure.github_rest_adapter import GitHubRestAdapter
from repo_auditor.infrastructure.openai_adapter import OpenAIAdapter
from repo_auditor.services.analyze_repo import AnalyzeRepoUseCase
from repo_auditor.services.summarizer import ReadmeSummarizer

logger = logging.getLogger(__name__)

_http_client: httpx.AsyncClient | None = None
_openai_adapter: OpenAIAdapter | None = None


async def startup(settings: Settings) -> None:
    """Initialise shared resources — called from the lifespan context manager."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    _http_client = httpx.AsyncClient(timeout=httpx.Timeout(settings.http_timeout_seconds))
    if settings.openai_api_key:
        _openai_adapter = OpenAIAdapter(
            api_key=settings.openai_api_key.get_secret_value(),
            model=settings.openai_model,
            timeout=settings.llm_timeout_seconds,
        )
    else:
        logger.info("OPENAI_API_KEY not set — analyses will carry no AI summary")


async def shutdown() -> None:
    """Release shared resources."""
    global _http_client, _openai_adapter  # noqa: PLW0603

    if _http_client:
        await _http_client.aclose()
        _http_client = None
    if _openai_adapter:
        await _openai_adapter.close()
        _openai_adapter = None


def get_app_settings(request: Request) -> Settings:
    """Return the settings the application was built with."""
    return request.app.state.settings


def get_summarizer(request: Request) -> ReadmeSummarizer:
    """Build the README summarizer around the shared OpenAI adapter (if any)."""
    settings = get_app_settings(request)
    return ReadmeSummarizer(
        llm_gateway=_openai_adapter,
        max_summary_tokens=settings.summary_max_tokens,
        max_readme_tokens=settings.max_readme_tokens,
    )


def get_use_case(request: Request) -> AnalyzeRepoUseCase:
    """Build the use-case with injected adapters."""
    settings = get_app_settings(request)

    assert _http_client is not None, "startup() was not called"

    token = settings.github_token.get_secret_value() if settings.github_token else None
    github_adapter = GitHubRestAdapter(
        client=_http_client,
        token=token,
        base_url=settings.github_api_url,
        timeout=settings.http_timeout_seconds,
    )

    return AnalyzeRepoUseCase(
        repo_fetcher=github_adapter,
        summarizer=get_summarizer(request),
    )
