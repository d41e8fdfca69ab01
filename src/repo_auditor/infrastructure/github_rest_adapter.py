"""GitHub REST API adapter — implements the RepoFetcher port."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime, timezone
from typing import Any

import httpx

from repo_auditor.domain.entities import (
    NO_LICENSE,
    FetchOutcome,
    FetchResult,
    RepositoryMetadata,
)
from repo_auditor.domain.value_objects import RepositoryRef

logger = logging.getLogger(__name__)

_GITHUB_API = "https://api.github.com"
_USER_AGENT = "GitHub-Repo-Auditor"
_RAW_MEDIA_TYPE = "application/vnd.github.v3.raw"


class GitHubRestAdapter:
    """Concrete RepoFetcher backed by the GitHub v3 REST API.

    Every method issues a single GET and reports the upstream verdict as a
    :class:`FetchResult`; nothing here raises for HTTP or network failures.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        token: str | None = None,
        base_url: str = _GITHUB_API,
        timeout: float | None = None,
    ) -> None:
        self._client = client
        self._timeout = timeout
        self._base_url = base_url.rstrip("/")
        self._api_headers: dict[str, str] = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": _USER_AGENT,
        }
        if token:
            self._api_headers["Authorization"] = f"Bearer {token}"

    async def fetch_metadata(self, ref: RepositoryRef) -> FetchResult[RepositoryMetadata]:
        """GET /repos/{owner}/{repo} → RepositoryMetadata."""
        result = await self._api_get(f"/repos/{ref.owner}/{ref.name}")
        if not result.ok:
            return FetchResult.failure(result.outcome, result.detail)

        try:
            data = result.data.json()  # type: ignore[union-attr]
            return FetchResult.success(_to_metadata(data))
        except (ValueError, KeyError, TypeError) as exc:
            return FetchResult.failure(
                FetchOutcome.ERROR, f"Unexpected repository payload for {ref.full_name}: {exc}"
            )

    async def fetch_languages(self, ref: RepositoryRef) -> FetchResult[dict[str, int]]:
        """GET /repos/{owner}/{repo}/languages → {lang: bytes}."""
        result = await self._api_get(f"/repos/{ref.owner}/{ref.name}/languages")
        if not result.ok:
            return FetchResult.failure(result.outcome, result.detail)

        try:
            data = result.data.json()  # type: ignore[union-attr]
        except ValueError as exc:
            return FetchResult.failure(FetchOutcome.ERROR, f"Invalid languages JSON: {exc}")

        if not isinstance(data, dict) or not all(
            isinstance(k, str) and isinstance(v, int) and not isinstance(v, bool) and v >= 0
            for k, v in data.items()
        ):
            return FetchResult.failure(
                FetchOutcome.ERROR, f"Unexpected languages payload for {ref.full_name}"
            )
        return FetchResult.success(data)

    async def fetch_readme(self, ref: RepositoryRef) -> FetchResult[str]:
        """GET /repos/{owner}/{repo}/readme as raw text."""
        result = await self._api_get(
            f"/repos/{ref.owner}/{ref.name}/readme",
            accept=_RAW_MEDIA_TYPE,
        )
        if not result.ok:
            return FetchResult.failure(result.outcome, result.detail)
        return FetchResult.success(result.data.text)  # type: ignore[union-attr]

    async def _api_get(
        self,
        endpoint: str,
        accept: str | None = None,
    ) -> FetchResult[httpx.Response]:
        """Perform a GitHub API GET request and classify the response."""
        url = f"{self._base_url}{endpoint}"
        headers = dict(self._api_headers)
        if accept:
            headers["Accept"] = accept

        try:
            # Overall deadline; the httpx timeout only bounds each read.
            resp = await asyncio.wait_for(
                self._client.get(url, headers=headers), timeout=self._timeout
            )
        except asyncio.TimeoutError:
            return FetchResult.failure(
                FetchOutcome.ERROR, f"Timed out fetching {url} after {self._timeout}s"
            )
        except httpx.TimeoutException as exc:
            return FetchResult.failure(FetchOutcome.ERROR, f"Timed out fetching {url}: {exc}")
        except httpx.HTTPError as exc:
            return FetchResult.failure(FetchOutcome.ERROR, f"Network error fetching {url}: {exc}")

        if resp.status_code == 200:
            return FetchResult.success(resp)

        if resp.status_code == 404:
            return FetchResult.failure(FetchOutcome.NOT_FOUND, f"{url} returned 404")

        if resp.status_code in (403, 429):
            reset_str = _format_reset(resp.headers.get("x-ratelimit-reset", ""))
            logger.warning(
                "GitHub refused %s with HTTP %d (remaining=%s, resets at %s)",
                url,
                resp.status_code,
                resp.headers.get("x-ratelimit-remaining", "?"),
                reset_str,
            )
            return FetchResult.failure(
                FetchOutcome.RATE_LIMITED,
                f"GitHub API rate limit exceeded. Resets at {reset_str}.",
            )

        return FetchResult.failure(
            FetchOutcome.ERROR, f"GitHub API returned HTTP {resp.status_code} for {url}"
        )


def _format_reset(reset_raw: str) -> str:
    try:
        return datetime.fromtimestamp(int(reset_raw), tz=timezone.utc).strftime(
            "%Y-%m-%d %H:%M:%S UTC"
        )
    except (ValueError, OSError):
        return reset_raw or "unknown"


def _to_metadata(data: Any) -> RepositoryMetadata:
    if not isinstance(data, dict):
        raise TypeError(f"expected a JSON object, got {type(data).__name__}")

    license_info = data.get("license") or {}
    return RepositoryMetadata(
        name=data["name"],
        full_name=data["full_name"],
        description=data.get("description"),
        url=data["html_url"],
        stars=data.get("stargazers_count", 0),
        forks=data.get("forks_count", 0),
        watchers=data.get("watchers_count", 0),
        open_issues=data.get("open_issues_count", 0),
        created_at=data.get("created_at"),
        updated_at=data.get("updated_at"),
        default_branch=data.get("default_branch", "main"),
        size=data.get("size", 0),
        license=license_info.get("name") or NO_LICENSE,
    )
