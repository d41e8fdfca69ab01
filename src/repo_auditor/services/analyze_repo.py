"""Analyze-repository use case — the main orchestration pipeline.

This is the single entry point for the business logic.  It depends only on
the :class:`RepoFetcher` port and the :class:`ReadmeSummarizer` service; the
interface layer injects concrete adapters at runtime.

Stages: validate the URL, fetch metadata / languages / README concurrently,
optionally summarize the README, then assemble an :class:`AnalysisResult`.
Only validation and the metadata / language fetches can fail the request.
"""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Callable, TypeVar

from repo_auditor.domain.entities import (
    README_NOT_AVAILABLE,
    SUMMARY_NO_README,
    AnalysisResult,
    FetchOutcome,
    FetchResult,
    Principal,
    RepositoryMetadata,
    language_shares,
)
from repo_auditor.domain.exceptions import (
    InternalError,
    RepositoryNotFoundError,
    UpstreamRateLimitedError,
)
from repo_auditor.domain.ports.repo_fetcher import RepoFetcher
from repo_auditor.domain.value_objects import RepositoryRef
from repo_auditor.services.summarizer import ReadmeSummarizer

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class AnalyzeRepoUseCase:
    """Orchestrates the URL → report pipeline.

    Parameters
    ----------
    repo_fetcher:
        Adapter that reads metadata, languages and README from GitHub.
    summarizer:
        Best-effort README summarizer.
    clock:
        Source of the ``analyzed_at`` timestamp.
    """

    def __init__(
        self,
        repo_fetcher: RepoFetcher,
        summarizer: ReadmeSummarizer,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._fetcher = repo_fetcher
        self._summarizer = summarizer
        self._clock = clock

    # ── Public entry point ──────────────────────────────────────────────

    async def execute(self, repo_url: str | None, principal: Principal) -> AnalysisResult:
        """Run the full pipeline and return the assembled report."""
        ref = RepositoryRef.from_url(repo_url)
        logger.info("Analyzing %s (requested by %s)", ref.full_name, principal.subject)

        metadata, languages, readme = await self._fetch_all(ref)
        summary = await self._summarize(ref, readme)

        result = AnalysisResult(
            repository=metadata,
            languages=languages,
            readme=readme,
            summary=summary,
            analyzed_at=self._clock(),
        )
        shares = language_shares(languages)
        if shares:
            primary = max(shares, key=shares.__getitem__)
            logger.info(
                "Analysis of %s completed (primary language %s, %.1f%%)",
                ref.full_name,
                primary,
                shares[primary],
            )
        else:
            logger.info("Analysis of %s completed", ref.full_name)
        return result

    # ── Concurrent fetch ────────────────────────────────────────────────

    async def _fetch_all(
        self, ref: RepositoryRef
    ) -> tuple[RepositoryMetadata, dict[str, int], str]:
        """Fetch the three resources concurrently, stopping at the first hard failure.

        A metadata failure ends the wait immediately.  A languages failure
        waits for the metadata verdict, which takes precedence.
        """
        meta_task = asyncio.create_task(self._fetcher.fetch_metadata(ref))
        lang_task = asyncio.create_task(self._fetcher.fetch_languages(ref))
        readme_task = asyncio.create_task(self._fetch_readme(ref))
        tasks = (meta_task, lang_task, readme_task)

        try:
            pending: set[asyncio.Task] = set(tasks)
            while pending:
                _, pending = await asyncio.wait(pending, return_when=asyncio.FIRST_COMPLETED)
                if _failed(meta_task):
                    break
                if _failed(lang_task) and meta_task.done():
                    break
        finally:
            for task in tasks:
                if not task.done():
                    task.cancel()
            await asyncio.gather(*tasks, return_exceptions=True)

        metadata = _unwrap(meta_task, ref, "metadata")
        languages = _unwrap(lang_task, ref, "languages")
        return metadata, languages, readme_task.result()

    async def _fetch_readme(self, ref: RepositoryRef) -> str:
        """Return README text, or the sentinel when it cannot be fetched."""
        try:
            result = await self._fetcher.fetch_readme(ref)
        except Exception:
            logger.warning("README fetch for %s raised", ref.full_name, exc_info=True)
            return README_NOT_AVAILABLE

        if not result.ok or result.data is None:
            logger.info("No README found for %s (%s)", ref.full_name, result.outcome.value)
            return README_NOT_AVAILABLE
        return result.data

    # ── Summarization ───────────────────────────────────────────────────

    async def _summarize(self, ref: RepositoryRef, readme: str) -> str | None:
        if readme == README_NOT_AVAILABLE:
            return SUMMARY_NO_README
        if not readme.strip() or not self._summarizer.configured:
            return None

        logger.info("Generating summary for %s", ref.full_name)
        return await self._summarizer.summarize(readme)


# ── Helpers ─────────────────────────────────────────────────────────────────


def _failed(task: asyncio.Task) -> bool:
    if not task.done() or task.cancelled():
        return False
    return task.exception() is not None or not task.result().ok


def _unwrap(task: asyncio.Task, ref: RepositoryRef, what: str) -> T:
    """Translate a finished fetch into its data or the matching domain error."""
    exc = task.exception()
    if exc is not None:
        raise InternalError(f"Fetching {what} for {ref.full_name} raised: {exc}") from exc

    result: FetchResult[T] = task.result()
    if result.outcome is FetchOutcome.SUCCESS:
        return result.data  # type: ignore[return-value]
    if result.outcome is FetchOutcome.NOT_FOUND:
        raise RepositoryNotFoundError(f"Repository {ref.full_name} not found ({what}).")
    if result.outcome is FetchOutcome.RATE_LIMITED:
        raise UpstreamRateLimitedError(result.detail or "GitHub API rate limit exceeded.")
    raise InternalError(result.detail or f"Fetching {what} for {ref.full_name} failed.")
