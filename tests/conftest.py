"""Root conftest — shared fixtures for all tests.

Provides:
- anyio backend pinned to asyncio
- Safety guard: the shared GitHub HTTP client is replaced for every test,
  so nothing ever reaches api.github.com
- An in-memory Git object store and a GitHubBlobCommit wired to it
"""

from __future__ import annotations

from unittest.mock import AsyncMock, patch

import pytest

from blob_commit.services.github.service import GitHubBlobCommit
from tests.helpers.fake_git import FakeGitStore


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


# ─────────────────────────────────────────────────────────────────────────────
# Safety Guard
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture(autouse=True)
def block_github_network():
    """SAFETY: Never talk to the real GitHub API from tests.

    Tests that exercise the HTTP layer patch get_github_client themselves;
    this guard only catches accidental real requests.
    """
    client = AsyncMock()
    client.request.side_effect = AssertionError("Unexpected real GitHub request")
    with patch(
        "blob_commit.services.github.write_operations.get_github_client",
        return_value=client,
    ):
        yield client


# ─────────────────────────────────────────────────────────────────────────────
# Fake Git object store
# ─────────────────────────────────────────────────────────────────────────────


@pytest.fixture
def git_store() -> FakeGitStore:
    """Store holding one branch, main, with a single commit C0 over tree T0."""
    store = FakeGitStore("octocat", "hello-world")
    store.seed_branch("main", {"README.md": b"# hello\n"})
    return store


@pytest.fixture
def committer(git_store: FakeGitStore, tmp_path):
    """GitHubBlobCommit whose Git Data API calls go to git_store."""
    with patch(
        "blob_commit.services.github.service.GitDataOperations",
        return_value=git_store,
    ):
        yield GitHubBlobCommit("octocat", "hello-world", auth="ghp_test", project_root=tmp_path)
