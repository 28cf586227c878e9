"""
GitHub blob commit package.

Re-exports the public types and classes.
Usage: `from blob_commit.services.github import GitHubBlobCommit, FileDescriptor`

Module structure:
- service.py: GitHubBlobCommit facade (validation, public surface)
- encoding.py: Local reads and base64 payloads
- blobs.py: Concurrent blob creation
- commit_builder.py: Tree/commit/ref sequence
- write_operations.py: Git Data API calls
- helpers.py: Rate limit handling and error utilities
- http_client.py: Shared HTTP client
- types.py: Data types
- exceptions.py: Custom exceptions
"""

from blob_commit.services.github.exceptions import (
    CommitValidationError,
    FileReadError,
    GitHubAPIError,
    GitHubRepoRenamed,
)
from blob_commit.services.github.helpers import RateLimitInfo, handle_error_response
from blob_commit.services.github.http_client import close_github_client
from blob_commit.services.github.service import GitHubBlobCommit
from blob_commit.services.github.types import (
    Blob,
    FileDescriptor,
    GitHubAuth,
    RefState,
    RepoHandle,
    TreeEntry,
)
from blob_commit.services.github.write_operations import GitDataOperations

__all__ = [
    # Service (main entry point)
    "GitHubBlobCommit",
    # Git Data API calls (for direct use if needed)
    "GitDataOperations",
    # HTTP client lifecycle
    "close_github_client",
    # Utilities
    "handle_error_response",
    "RateLimitInfo",
    # Exceptions
    "CommitValidationError",
    "FileReadError",
    "GitHubAPIError",
    "GitHubRepoRenamed",
    # Types
    "Blob",
    "FileDescriptor",
    "GitHubAuth",
    "RefState",
    "RepoHandle",
    "TreeEntry",
]
