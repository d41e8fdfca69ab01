"""Value objects — self-validating domain primitives."""

from __future__ import annotations

import re
from dataclasses import dataclass

from repo_auditor.domain.exceptions import InvalidUrlFormatError, MissingInputError

_GITHUB_URL_RE = re.compile(
    r"^(?:https?://)?(?:www\.)?github\.com/(?P<owner>[A-Za-z0-9_.-]+)/(?P<name>[A-Za-z0-9_.-]+)/?$",
    re.IGNORECASE,
)


@dataclass(frozen=True, slots=True)
class RepositoryRef:
    """Owner / name pair identifying a repository on GitHub.

    Built from loosely formatted input such as ``github.com/psf/requests``,
    ``https://www.github.com/psf/requests/`` or
    ``https://github.com/psf/requests.git``.  Anything with more or fewer
    than two path segments after the host is rejected rather than truncated.
    """

    owner: str
    name: str

    @classmethod
    def from_url(cls, url: str | None) -> RepositoryRef:
        """Parse and validate a raw URL string."""
        if url is None or not url.strip():
            raise MissingInputError("Repository URL is required")

        url = url.strip()
        match = _GITHUB_URL_RE.match(url)
        if not match:
            raise InvalidUrlFormatError(
                f"Invalid GitHub URL: '{url}'. "
                "Expected format: https://github.com/<owner>/<repo>"
            )

        owner = match["owner"]
        name = match["name"]
        if name.lower().endswith(".git"):
            name = name[: -len(".git")]
        # "." / ".." would resolve to a different API path.
        for segment in (owner, name):
            if not segment.strip("."):
                raise InvalidUrlFormatError(
                    f"Invalid GitHub URL: '{url}'. '{segment}' is not a valid path segment."
                )

        return cls(owner=owner, name=name)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.name}"
