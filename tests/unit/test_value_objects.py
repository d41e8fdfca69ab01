"""Unit tests for repository URL parsing."""

import pytest

from repo_auditor.domain.exceptions import InvalidUrlFormatError, MissingInputError
from repo_auditor.domain.value_objects import RepositoryRef


class TestRepositoryRefValid:
    """Inputs that identify a repository."""

    def test_plain_https_url(self):
        ref = RepositoryRef.from_url("https://github.com/octocat/Hello-World")
        assert ref == RepositoryRef(owner="octocat", name="Hello-World")

    @pytest.mark.parametrize(
        "url",
        [
            "http://github.com/octocat/Hello-World",
            "github.com/octocat/Hello-World",
            "https://www.github.com/octocat/Hello-World",
            "www.github.com/octocat/Hello-World",
            "https://github.com/octocat/Hello-World/",
            "  https://github.com/octocat/Hello-World  ",
            "HTTPS://GitHub.com/octocat/Hello-World",
        ],
    )
    def test_loose_forms(self, url):
        ref = RepositoryRef.from_url(url)
        assert ref.owner == "octocat"
        assert ref.name == "Hello-World"

    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/psf/requests.git",
            "https://github.com/psf/requests.git/",
            "github.com/psf/requests.GIT",
        ],
    )
    def test_git_suffix_is_stripped(self, url):
        ref = RepositoryRef.from_url(url)
        assert ref.name == "requests"
        assert not ref.name.endswith(".git")

    def test_dots_inside_name_survive(self):
        ref = RepositoryRef.from_url("https://github.com/vercel/next.js")
        assert ref.name == "next.js"

    def test_full_name(self):
        assert RepositoryRef.from_url("github.com/a/b").full_name == "a/b"


class TestRepositoryRefInvalid:
    """Inputs that must be rejected."""

    @pytest.mark.parametrize(
        "url",
        [
            "not a url",
            "https://github.com/octocat",
            "https://github.com/octocat/",
            "https://github.com/",
            "https://github.com/octocat/Hello-World/tree/main",
            "https://github.com/octocat/Hello-World/issues",
            "https://github.com//Hello-World",
            "https://gitlab.com/octocat/Hello-World",
            "https://notgithub.com/octocat/Hello-World",
            "https://github.com/octocat/Hello-World?tab=readme",
            "https://github.com/octocat/.git",
            "ftp://github.com/octocat/Hello-World",
            "github.com/octocat/..",
            "github.com/../Hello-World",
            "github.com/./x",
            "github.com/octocat/...git",
            "github.com/octocat/Hello World",
            "github.com/octocat/Hello%2FWorld",
        ],
    )
    def test_rejected(self, url):
        with pytest.raises(InvalidUrlFormatError):
            RepositoryRef.from_url(url)

    @pytest.mark.parametrize("url", [None, "", "   "])
    def test_missing(self, url):
        with pytest.raises(MissingInputError):
            RepositoryRef.from_url(url)
