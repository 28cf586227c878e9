"""
GitHub API helper utilities.

Rate limit parsing and error response processing shared by every
Git Data API call.
"""

import logging
import re

import httpx

from blob_commit.services.github.exceptions import GitHubAPIError, GitHubRepoRenamed

logger = logging.getLogger(__name__)


class RateLimitInfo:
    """Rate limit information from GitHub API response."""

    def __init__(self, response: httpx.Response) -> None:
        self.remaining = response.headers.get("X-RateLimit-Remaining")
        self.reset = response.headers.get("X-RateLimit-Reset")

    @property
    def reset_timestamp(self) -> int | None:
        """Get reset timestamp as integer, or None if not available."""
        return int(self.reset) if self.reset else None

    @property
    def is_exhausted(self) -> bool:
        """Check if rate limit is exhausted."""
        return self.remaining is not None and int(self.remaining) == 0


def parse_redirect_location(location: str) -> tuple[str, str] | None:
    """
    Extract owner/repo from GitHub redirect Location header.

    Args:
        location: The Location header value, absolute
            ("https://api.github.com/repos/owner/name/...") or relative
            ("/repos/owner/name/...")

    Returns:
        Tuple of (owner, repo) if parseable, None otherwise
    """
    if not location:
        return None

    match = re.match(r"https://api\.github\.com/repos/([^/]+)/([^/]+)", location)
    if match:
        return (match.group(1), match.group(2))

    match = re.match(r"/repos/([^/]+)/([^/]+)", location)
    if match:
        return (match.group(1), match.group(2))

    return None


def parse_redirect_repo_id(location: str) -> int | None:
    """Extract the repository ID from a ``/repositories/{id}/...`` redirect."""
    if not location:
        return None

    match = re.match(r"https://api\.github\.com/repositories/(\d+)", location)
    if match:
        return int(match.group(1))

    match = re.match(r"/repositories/(\d+)", location)
    if match:
        return int(match.group(1))

    return None


def _error_detail(response: httpx.Response) -> str | None:
    """GitHub's own error message from a JSON body, if any."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        return str(message) if message else None
    return None


def handle_error_response(response: httpx.Response, repo_name: str) -> None:
    """
    Raise for any non-2xx GitHub API response.

    Args:
        response: The HTTP response from GitHub API
        repo_name: Repository name for error context (format: "owner/repo")

    Raises:
        GitHubRepoRenamed: If repository was renamed/transferred (301)
        GitHubAPIError: For authentication, authorization, or other API errors
    """
    if response.is_success:
        return

    rate_info = RateLimitInfo(response)

    if response.status_code == 301:
        location = response.headers.get("Location", "")
        logger.debug(f"Got 301 redirect for {repo_name}, Location header: {location!r}")

        new_repo = parse_redirect_location(location)
        if new_repo:
            new_full_name = f"{new_repo[0]}/{new_repo[1]}"
            logger.info(f"Repository redirect detected: {repo_name} → {new_full_name}")
            raise GitHubRepoRenamed(repo_name, new_full_name)

        repo_id = parse_redirect_repo_id(location)
        if repo_id:
            logger.info(f"Repository redirect to ID detected: {repo_name} → ID {repo_id}")
            raise GitHubRepoRenamed(repo_name, new_full_name=None, repo_id=repo_id)

        logger.warning(
            f"Repository {repo_name} returned 301 but Location header couldn't be parsed. "
            f"Location: {location!r}"
        )
        raise GitHubAPIError(
            f"Repository {repo_name} was moved (301), but couldn't parse new location",
            301,
        )
    elif response.status_code == 401:
        raise GitHubAPIError("Invalid or expired GitHub token", 401)
    elif response.status_code == 404:
        raise GitHubAPIError(f"Repository or resource not found: {repo_name}", 404)
    elif response.status_code == 403:
        if rate_info.is_exhausted:
            raise GitHubAPIError(
                "GitHub API rate limit exceeded",
                403,
                rate_limit_reset=rate_info.reset_timestamp,
            )
        raise GitHubAPIError("GitHub API forbidden", 403)
    elif response.status_code == 409:
        detail = _error_detail(response) or "Conflict"
        raise GitHubAPIError(f"GitHub API conflict for {repo_name}: {detail}", 409)
    elif response.status_code == 422:
        detail = _error_detail(response) or "Unprocessable entity"
        raise GitHubAPIError(f"GitHub rejected the request: {detail}", 422)
    else:
        raise GitHubAPIError(
            f"GitHub API error: {response.status_code}", response.status_code
        )
