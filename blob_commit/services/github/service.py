"""
Batch commits to a GitHub branch through the Git Data API.

GitHubBlobCommit is the public entry point: it holds the repository handle
and runs encode → blobs → commit for each call.
"""

import asyncio
import logging
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from blob_commit.config.settings import settings
from blob_commit.services.github.blobs import create_blobs
from blob_commit.services.github.commit_builder import commit_blobs
from blob_commit.services.github.encoding import encode_files
from blob_commit.services.github.exceptions import CommitValidationError
from blob_commit.services.github.types import FileDescriptor, GitHubAuth, RefState, RepoHandle
from blob_commit.services.github.write_operations import GitDataOperations

logger = logging.getLogger(__name__)

CommitCallback = Callable[[BaseException | None, RefState | None], Any]


def _resolve_auth(auth: GitHubAuth | str | None) -> GitHubAuth:
    if isinstance(auth, GitHubAuth):
        return auth
    if isinstance(auth, str):
        return GitHubAuth(token=auth)
    if settings.github_token:
        return GitHubAuth(token=settings.github_token)
    return GitHubAuth()


def _coerce_file(item: object, index: int, errors: list[str]) -> FileDescriptor | None:
    if isinstance(item, FileDescriptor):
        file = item
    elif isinstance(item, Mapping):
        file = FileDescriptor(
            path=item.get("path"),  # type: ignore[arg-type]
            content=item.get("content"),
            message=item.get("message"),
        )
    else:
        errors.append(f"File {index} must be a FileDescriptor or mapping")
        return None

    if not isinstance(file.path, str) or not file.path:
        errors.append(f"File {index} needs a path")
        return None
    if file.content is not None and not isinstance(file.content, str | bytes):
        errors.append(f"File {index} ({file.path}) content must be str or bytes")
        return None
    if file.message is not None and not isinstance(file.message, str):
        file = FileDescriptor(path=file.path, content=file.content, message=str(file.message))
    return file


def validate_commit_args(
    files: object,
    branch: object,
    errors: list[str] | None = None,
) -> list[FileDescriptor]:
    """
    Check commit arguments, collecting every problem before raising.

    Raises:
        CommitValidationError: Listing all problems found
    """
    errors = errors if errors is not None else []
    descriptors: list[FileDescriptor] = []

    if not isinstance(files, list | tuple):
        errors.append("Need files array")
    elif not files:
        errors.append("Need at least one file")
    else:
        for index, item in enumerate(files):
            file = _coerce_file(item, index, errors)
            if file is not None:
                descriptors.append(file)

    if not isinstance(branch, str) or not branch:
        errors.append("Need a branch")

    if errors:
        raise CommitValidationError(errors)
    return descriptors


class GitHubBlobCommit:
    """
    Commit many files to a branch as one commit.

    Works on blobs, trees, commits and refs directly rather than the
    contents endpoint, so large files are fine and a batch lands atomically.
    The branch ref is force-updated: a concurrent writer on the same branch
    can be silently overwritten (compare RefState.sha with commit_sha if
    that matters).

    Example:
        gh = GitHubBlobCommit("octocat", "hello-world", auth="ghp_...")
        ref = await gh.commit_files(
            [{"path": "docs/a.md", "content": "hi"}, {"path": "logo.png"}],
            "main",
        )
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        auth: GitHubAuth | str | None = None,
        project_root: Path | str | None = None,
    ):
        if not owner:
            raise CommitValidationError("Must provide Github repo owner")
        if not repo:
            raise CommitValidationError("Must provide Github repo name")

        self.handle = RepoHandle(owner=owner, repo=repo, auth=_resolve_auth(auth))
        self.project_root = Path(project_root) if project_root is not None else settings.project_root
        self._git = GitDataOperations(self.handle)

    @property
    def repo_name(self) -> str:
        return self.handle.full_name

    async def commit_files(
        self,
        files: list[FileDescriptor] | list[dict[str, Any]],
        branch: str,
        message: str | None = None,
    ) -> RefState:
        """
        Commit a batch of files to ``branch``.

        Args:
            files: FileDescriptors or dicts with "path" and optional
                "content"/"message"; files without content are read from
                the project root
            branch: Branch to commit to
            message: Batch commit message (default from settings)

        Returns:
            The branch ref after the forced update

        Raises:
            CommitValidationError: Bad arguments (before any I/O)
            FileReadError: A local file could not be read (before any blob)
            GitHubAPIError: Any remote step failed
        """
        descriptors = validate_commit_args(files, branch)
        return await self._run(descriptors, branch, self._message(message))

    def submit_commit(
        self,
        files: list[FileDescriptor] | list[dict[str, Any]],
        branch: str,
        callback: CommitCallback,
        message: str | None = None,
    ) -> asyncio.Task[RefState]:
        """
        Schedule a commit and report through ``callback(error, ref)``.

        Validation happens immediately and raises; everything else is
        delivered to the callback exactly once. Must be called with a
        running event loop.
        """
        errors = [] if callable(callback) else ["Need a callback"]
        descriptors = validate_commit_args(files, branch, errors)

        task = asyncio.get_running_loop().create_task(
            self._run(descriptors, branch, self._message(message))
        )

        def _deliver(done: asyncio.Task[RefState]) -> None:
            if done.cancelled():
                callback(asyncio.CancelledError(), None)
                return
            error = done.exception()
            if error is not None:
                callback(error, None)
            else:
                callback(None, done.result())

        task.add_done_callback(_deliver)
        return task

    @staticmethod
    def _message(message: object) -> str:
        return message if isinstance(message, str) else settings.default_commit_message

    async def _run(self, files: list[FileDescriptor], branch: str, message: str) -> RefState:
        try:
            encoded = encode_files(files, self.project_root)
            blobs = await create_blobs(self._git, encoded)
            return await commit_blobs(self._git, blobs, branch, message)
        except Exception as e:
            logger.warning(f"Commit to {self.repo_name}@{branch} failed: {e}")
            raise
