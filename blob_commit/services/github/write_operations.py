"""
GitHub Git Data API write operations.

Low-level calls against the object model of a repository:
- Refs (fetch, forced update)
- Commits (fetch, create)
- Trees and blobs (create)
"""

import logging
from typing import Any
from urllib.parse import quote

import httpx

from blob_commit.config.settings import settings
from blob_commit.services.github.exceptions import GitHubAPIError
from blob_commit.services.github.helpers import handle_error_response
from blob_commit.services.github.http_client import get_github_client
from blob_commit.services.github.types import RepoHandle, TreeEntry

logger = logging.getLogger(__name__)


class GitDataOperations:
    """
    Git Data API operations for one repository.

    Every call goes through the shared HTTP client with the handle's
    credentials. Failures raise GitHubAPIError; nothing is retried here.
    """

    def __init__(self, handle: RepoHandle):
        self.handle = handle
        self._base = f"{settings.github_api_url.rstrip('/')}/repos/{handle.owner}/{handle.repo}/git"
        self._headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": settings.github_api_version,
            **handle.auth.headers(),
        }

    async def _request(self, method: str, path: str, json: Any = None) -> dict[str, Any]:
        client = get_github_client()
        kwargs: dict[str, Any] = {"headers": self._headers}
        if json is not None:
            kwargs["json"] = json
        basic_auth = self.handle.auth.basic_auth()
        if basic_auth is not None:
            kwargs["auth"] = basic_auth

        try:
            response = await client.request(method, f"{self._base}/{path}", **kwargs)
        except httpx.HTTPError as e:
            raise GitHubAPIError(f"GitHub request failed: {method} {path}: {e}") from e

        handle_error_response(response, self.handle.full_name)
        try:
            data: dict[str, Any] = response.json()
        except ValueError as e:
            raise GitHubAPIError(
                f"GitHub returned a non-JSON response: {method} {path}", response.status_code
            ) from e
        return data

    async def fetch_ref(self, branch: str) -> str:
        """Return the commit sha that ``heads/<branch>`` points at."""
        try:
            data = await self._request("GET", f"ref/heads/{quote(branch, safe='/')}")
        except GitHubAPIError as e:
            if e.status_code == 404:
                raise GitHubAPIError(f"Branch '{branch}' not found", 404) from e
            raise
        sha: str = data["object"]["sha"]
        return sha

    async def fetch_commit(self, sha: str) -> str:
        """Return the tree sha of a commit."""
        data = await self._request("GET", f"commits/{sha}")
        tree_sha: str = data["tree"]["sha"]
        return tree_sha

    async def create_blob(self, content: str, encoding: str = "base64") -> str:
        """Create a blob and return its content sha."""
        data = await self._request("POST", "blobs", {"content": content, "encoding": encoding})
        sha: str = data["sha"]
        return sha

    async def create_tree(self, base_tree_sha: str, entries: list[TreeEntry]) -> str:
        """Create a tree layered on ``base_tree_sha`` and return its sha."""
        data = await self._request(
            "POST",
            "trees",
            {"base_tree": base_tree_sha, "tree": [entry.as_dict() for entry in entries]},
        )
        sha: str = data["sha"]
        return sha

    async def create_commit(self, tree_sha: str, parent_shas: list[str], message: str) -> str:
        """Create a commit object and return its sha."""
        data = await self._request(
            "POST",
            "commits",
            {"message": message, "tree": tree_sha, "parents": parent_shas},
        )
        sha: str = data["sha"]
        return sha

    async def update_ref(self, branch: str, sha: str, force: bool = True) -> dict[str, Any]:
        """Point ``heads/<branch>`` at ``sha``. Returns the ref payload."""
        return await self._request(
            "PATCH", f"refs/heads/{quote(branch, safe='/')}", {"sha": sha, "force": force}
        )
