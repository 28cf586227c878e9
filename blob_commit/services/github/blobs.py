"""
Blob creation for a commit batch.

One create-blob call per file, all in flight at once. The batch completes
only when every call has completed; the first failure cancels the rest.
"""

import asyncio
import logging

from blob_commit.services.github.types import Blob, EncodedFile
from blob_commit.services.github.write_operations import GitDataOperations

logger = logging.getLogger(__name__)


async def create_blob(git: GitDataOperations, file: EncodedFile) -> Blob:
    """Create one blob and tie its sha back to the file's path."""
    sha = await git.create_blob(file.content, encoding="base64")
    logger.debug(f"Created blob {sha} for {file.path}")
    return Blob(path=file.path, sha=sha, message=file.message)


async def create_blobs(git: GitDataOperations, files: list[EncodedFile]) -> list[Blob]:
    """
    Create blobs for a whole batch concurrently.

    Args:
        git: Git Data API operations for the target repository
        files: Encoded files, in batch order

    Returns:
        Blobs in the same order as ``files``

    Raises:
        GitHubAPIError: The first blob failure; pending calls are cancelled
    """
    tasks = [asyncio.ensure_future(create_blob(git, file)) for file in files]
    try:
        return list(await asyncio.gather(*tasks))
    except BaseException:
        pending = [task for task in tasks if not task.done()]
        for task in pending:
            task.cancel()
        if pending:
            logger.warning(f"Blob batch aborted, cancelled {len(pending)} pending blob(s)")
            await asyncio.gather(*pending, return_exceptions=True)
        raise
