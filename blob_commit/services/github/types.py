"""Data types for Git Data API commits."""

from dataclasses import dataclass, field

import httpx


@dataclass(frozen=True)
class GitHubAuth:
    """Credentials for the GitHub REST API.

    Either a token or a username/password pair (basic auth).
    """

    token: str | None = None
    username: str | None = None
    password: str | None = None

    def headers(self) -> dict[str, str]:
        """Authorization header for token auth, empty otherwise."""
        if self.token:
            return {"Authorization": f"Bearer {self.token}"}
        return {}

    def basic_auth(self) -> httpx.BasicAuth | None:
        """httpx basic auth for username/password credentials."""
        if not self.token and self.username and self.password:
            return httpx.BasicAuth(self.username, self.password)
        return None


@dataclass(frozen=True)
class RepoHandle:
    """Immutable owner/repo identity plus the credentials used for every call."""

    owner: str
    repo: str
    auth: GitHubAuth = field(default_factory=GitHubAuth)

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"


@dataclass
class FileDescriptor:
    """A single file to write.

    When ``content`` is None the bytes are read from disk at ``path``
    (relative to the project root).
    """

    path: str
    content: str | bytes | None = None
    message: str | None = None


@dataclass(frozen=True)
class EncodedFile:
    """A file ready for blob creation."""

    path: str
    content: str  # base64
    message: str | None = None


@dataclass(frozen=True)
class Blob:
    """A created blob, tied back to the path it will be written at."""

    path: str
    sha: str
    message: str | None = None


@dataclass(frozen=True)
class TreeEntry:
    """Entry in a tree-create request."""

    path: str
    sha: str
    mode: str = "100644"  # regular file
    type: str = "blob"

    def as_dict(self) -> dict[str, str]:
        return {"path": self.path, "mode": self.mode, "type": self.type, "sha": self.sha}


@dataclass
class CommitContext:
    """Working state for one commit pipeline run. Never shared between runs."""

    branch: str
    message: str
    blobs: list[Blob]
    head_sha: str | None = None
    base_tree_sha: str | None = None
    tree_sha: str | None = None
    commit_sha: str | None = None


@dataclass(frozen=True)
class RefState:
    """Branch ref after the forced update."""

    ref: str  # e.g. "refs/heads/main"
    sha: str  # commit the ref points at
    url: str | None
    commit_sha: str  # commit created by this invocation

    @property
    def superseded(self) -> bool:
        """True if the ref no longer points at the commit this run created."""
        return self.sha != self.commit_sha
