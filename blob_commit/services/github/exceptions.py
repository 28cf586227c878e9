"""Exceptions for the blob commit pipeline."""


class CommitValidationError(ValueError):
    """Malformed arguments to a commit call. Raised before any I/O."""

    def __init__(self, errors: list[str] | str):
        self.errors = [errors] if isinstance(errors, str) else list(errors)
        super().__init__("\n".join(self.errors))


class FileReadError(OSError):
    """A local file could not be read. Aborts the batch before any blob is created."""

    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class GitHubAPIError(Exception):
    """Error from GitHub API."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        rate_limit_reset: int | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.rate_limit_reset = rate_limit_reset  # Unix timestamp when rate limit resets
        super().__init__(message)


class GitHubRepoRenamed(GitHubAPIError):
    """Repository has been renamed or transferred on GitHub.

    When GitHub returns a 301 redirect, this exception provides the old and new
    repository names so callers can point their handle at the new location.

    GitHub sometimes redirects to a repository ID-based URL instead. In that
    case new_full_name is None and repo_id holds the GitHub repository ID.
    """

    def __init__(
        self,
        old_full_name: str,
        new_full_name: str | None = None,
        repo_id: int | None = None,
    ):
        self.old_full_name = old_full_name
        self.new_full_name = new_full_name
        self.repo_id = repo_id

        if new_full_name:
            message = f"Repository renamed: {old_full_name} → {new_full_name}"
        elif repo_id:
            message = f"Repository {old_full_name} moved (GitHub ID: {repo_id})"
        else:
            message = f"Repository {old_full_name} was moved"

        super().__init__(message, status_code=301)
