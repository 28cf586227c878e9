"""Commit batches of files to a GitHub branch through the Git Data API."""

from blob_commit.services.github import (
    CommitValidationError,
    FileDescriptor,
    FileReadError,
    GitHubAPIError,
    GitHubAuth,
    GitHubBlobCommit,
    RefState,
)

__all__ = [
    "CommitValidationError",
    "FileDescriptor",
    "FileReadError",
    "GitHubAPIError",
    "GitHubAuth",
    "GitHubBlobCommit",
    "RefState",
]
