"""Port: repository fetcher — defined by the domain, implemented by infrastructure."""

from __future__ import annotations

from typing import Protocol

from repo_auditor.domain.entities import FetchResult, RepositoryMetadata
from repo_auditor.domain.value_objects import RepositoryRef


class RepoFetcher(Protocol):
    """Abstract contract for reading repository data from the host.

    Implementations never raise for upstream failures; they report them
    through :class:`FetchResult`.
    """

    async def fetch_metadata(self, ref: RepositoryRef) -> FetchResult[RepositoryMetadata]:
        """Return core repository stats."""
        ...

    async def fetch_languages(self, ref: RepositoryRef) -> FetchResult[dict[str, int]]:
        """Return language → byte-count mapping."""
        ...

    async def fetch_readme(self, ref: RepositoryRef) -> FetchResult[str]:
        """Return the raw README text."""
        ...
