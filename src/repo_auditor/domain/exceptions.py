"""Domain exception hierarchy.

Each exception carries the HTTP status code and the client-facing message
used by the interface layer.  Inner layers raise these; the outermost
error-handler translates them into ``{"error": "..."}`` responses.
"""

from __future__ import annotations


class RepoAuditorError(Exception):
    """Base exception for the entire application."""

    status_code: int = 500
    public_message: str = "Failed to analyze repository"


# ── Input validation ────────────────────────────────────────────────────────


class MissingInputError(RepoAuditorError):
    """No repository URL was supplied."""

    status_code = 400
    public_message = "Repository URL is required"


class MissingReadmeError(MissingInputError):
    """No README text was supplied for direct summarization."""

    public_message = "README content is required"


class InvalidUrlFormatError(RepoAuditorError):
    """The supplied URL does not identify a GitHub repository."""

    status_code = 400
    public_message = "Invalid GitHub URL format"


# ── Authentication ──────────────────────────────────────────────────────────


class AuthenticationRequiredError(RepoAuditorError):
    """The caller did not present a valid session."""

    status_code = 401
    public_message = "Unauthorized. Please login."


# ── GitHub API errors ───────────────────────────────────────────────────────


class RepositoryNotFoundError(RepoAuditorError):
    """The repository does not exist or is private (404)."""

    status_code = 404
    public_message = "Repository not found or is private"


class UpstreamRateLimitedError(RepoAuditorError):
    """GitHub refused the request because of rate limiting (403 / 429)."""

    status_code = 403
    public_message = "GitHub API rate limit exceeded. Please try again later."


class InternalError(RepoAuditorError):
    """Catch-all: network failure, timeout or unexpected upstream shape."""


# ── LLM errors ──────────────────────────────────────────────────────────────


class LlmError(RepoAuditorError):
    """Any error originating from the LLM provider."""

    status_code = 502
    public_message = "Could not generate summary."


class SummarizerUnavailableError(RepoAuditorError):
    """No summarization backend is configured."""

    status_code = 503
    public_message = "Summarization service is not configured"
