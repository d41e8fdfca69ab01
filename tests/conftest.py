"""Shared fixtures for the repo auditor test-suite."""

from unittest.mock import AsyncMock

import pytest
from jose import jwt

from repo_auditor.domain.entities import FetchResult, Principal, RepositoryMetadata
from repo_auditor.infrastructure.config import Settings

SESSION_SECRET = "test-session-secret"

HELLO_WORLD_PAYLOAD = {
    "name": "Hello-World",
    "full_name": "octocat/Hello-World",
    "description": "My first repository on GitHub!",
    "html_url": "https://github.com/octocat/Hello-World",
    "stargazers_count": 2500,
    "forks_count": 2100,
    "watchers_count": 2500,
    "open_issues_count": 900,
    "created_at": "2011-01-26T19:01:12Z",
    "updated_at": "2024-05-01T10:00:00Z",
    "default_branch": "master",
    "size": 1,
    "license": {"key": "mit", "name": "MIT License"},
}


@pytest.fixture
def hello_world_payload():
    """The GitHub /repos payload for octocat/Hello-World, trimmed."""
    return dict(HELLO_WORLD_PAYLOAD)


@pytest.fixture
def make_session_token():
    """Sign session tokens the way the login service does."""

    def _make(subject="user-1", secret=SESSION_SECRET, **claims):
        payload = {"sub": subject, **claims}
        return jwt.encode(payload, secret, algorithm="HS256")

    return _make


@pytest.fixture
def settings():
    return Settings(session_secret=SESSION_SECRET, openai_api_key=None, _env_file=None)


@pytest.fixture
def principal():
    return Principal(subject="user-1", name="Octo Cat", email="octo@example.com")


@pytest.fixture
def metadata():
    return RepositoryMetadata(
        name="Hello-World",
        full_name="octocat/Hello-World",
        description="My first repository on GitHub!",
        url="https://github.com/octocat/Hello-World",
        stars=2500,
        forks=2100,
        watchers=2500,
        open_issues=900,
        created_at="2011-01-26T19:01:12Z",
        updated_at="2024-05-01T10:00:00Z",
        default_branch="master",
        size=1,
        license="MIT License",
    )


@pytest.fixture
def fetcher(metadata):
    """A RepoFetcher whose three reads all succeed."""
    mock = AsyncMock()
    mock.fetch_metadata.return_value = FetchResult.success(metadata)
    mock.fetch_languages.return_value = FetchResult.success({"Python": 7500, "Shell": 2500})
    mock.fetch_readme.return_value = FetchResult.success("# Hello World\n\nA sample repo.")
    return mock


@pytest.fixture
def llm():
    mock = AsyncMock()
    mock.complete.return_value = "A friendly sample repository."
    return mock
