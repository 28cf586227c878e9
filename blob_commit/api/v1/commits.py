"""
Commit endpoint: land a batch of files on a branch as one commit.
"""

import logging
import time

from fastapi import APIRouter, Header, HTTPException, status
from pydantic import BaseModel, Field

from blob_commit.config.settings import settings
from blob_commit.services.github import (
    CommitValidationError,
    FileDescriptor,
    GitHubAPIError,
    GitHubBlobCommit,
)

router = APIRouter(prefix="/repos", tags=["commits"])
logger = logging.getLogger(__name__)


# --- Request/Response Models ---


class CommitFileRequest(BaseModel):
    """A file to write. Content is required over HTTP."""

    path: str = Field(min_length=1)
    content: str
    message: str | None = None


class CommitRequest(BaseModel):
    """Request to commit a batch of files."""

    branch: str = Field(min_length=1)
    message: str | None = None
    files: list[CommitFileRequest] = Field(min_length=1)


class CommitResponse(BaseModel):
    """Branch ref after the commit landed."""

    ref: str
    sha: str
    url: str | None
    commit_sha: str


def _github_token(authorization: str | None) -> str:
    """Bearer token from the request, falling back to the configured token."""
    if authorization:
        scheme, _, token = authorization.partition(" ")
        if scheme.lower() == "bearer" and token:
            return token
    if settings.github_token:
        return settings.github_token
    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="GitHub token required",
    )


def _transport_error(e: GitHubAPIError) -> HTTPException:
    if e.status_code in (401, 404, 409, 422):
        return HTTPException(status_code=e.status_code, detail=e.message)
    if e.rate_limit_reset:
        reset_in = max(0, e.rate_limit_reset - int(time.time()))
        minutes = reset_in // 60
        return HTTPException(
            status_code=status.HTTP_429_TOO_MANY_REQUESTS,
            detail=f"{e.message}. Rate limit resets in {minutes} minutes.",
        )
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=e.message)


@router.post(
    "/{owner}/{repo}/commits",
    response_model=CommitResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_commit(
    owner: str,
    repo: str,
    data: CommitRequest,
    authorization: str | None = Header(default=None),
) -> CommitResponse:
    """Commit files to a branch, force-moving the branch to the new commit."""
    token = _github_token(authorization)
    files = [
        FileDescriptor(path=f.path, content=f.content, message=f.message) for f in data.files
    ]

    try:
        gh = GitHubBlobCommit(owner, repo, auth=token)
        ref = await gh.commit_files(files, data.branch, data.message)
    except CommitValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from None
    except GitHubAPIError as e:
        raise _transport_error(e) from None

    logger.info(f"Committed {len(files)} file(s) to {owner}/{repo}@{data.branch}")
    return CommitResponse(ref=ref.ref, sha=ref.sha, url=ref.url, commit_sha=ref.commit_sha)
