"""
Commit construction on top of a branch head.

Strictly sequential: ref → head commit → tree → commit → forced ref update.
Any failing step aborts the rest; nothing is rolled back (already created
blobs are left unreferenced).
"""

import logging

from blob_commit.services.github.types import Blob, CommitContext, RefState, TreeEntry
from blob_commit.services.github.write_operations import GitDataOperations

logger = logging.getLogger(__name__)


def dedupe_blobs(blobs: list[Blob]) -> list[Blob]:
    """Collapse duplicate paths. The last occurrence wins, in its own position."""
    by_path: dict[str, Blob] = {}
    for blob in blobs:
        by_path.pop(blob.path, None)
        by_path[blob.path] = blob
    return list(by_path.values())


def build_tree_entries(blobs: list[Blob]) -> list[TreeEntry]:
    return [TreeEntry(path=blob.path, sha=blob.sha) for blob in blobs]


def build_commit_message(message: str, blobs: list[Blob]) -> str:
    """
    Batch message, a blank line, then one line per file.

    Each line is ``path`` or ``path: per-file message``.
    """
    lines = "".join(
        f"{blob.path}: {blob.message}\n" if blob.message else f"{blob.path}\n" for blob in blobs
    )
    return f"{message}\n\n{lines}"


async def commit_blobs(
    git: GitDataOperations,
    blobs: list[Blob],
    branch: str,
    message: str,
) -> RefState:
    """
    Commit already-created blobs to a branch and force the ref onto it.

    Args:
        git: Git Data API operations for the target repository
        blobs: Blobs for every file in the batch
        branch: Branch name (without ``heads/``)
        message: Batch-level commit message

    Returns:
        The updated ref

    Raises:
        GitHubAPIError: From whichever step failed first
    """
    ctx = CommitContext(branch=branch, message=message, blobs=dedupe_blobs(blobs))

    # 1. Current head of the branch
    ctx.head_sha = await git.fetch_ref(branch)
    logger.debug(f"{git.handle.full_name}@{branch} head is {ctx.head_sha}")

    # 2. Its tree
    ctx.base_tree_sha = await git.fetch_commit(ctx.head_sha)

    # 3. New tree on top of the base tree
    ctx.tree_sha = await git.create_tree(ctx.base_tree_sha, build_tree_entries(ctx.blobs))
    logger.debug(f"Created tree {ctx.tree_sha} on base {ctx.base_tree_sha}")

    # 4. Commit with the previous head as sole parent
    ctx.commit_sha = await git.create_commit(
        ctx.tree_sha, [ctx.head_sha], build_commit_message(ctx.message, ctx.blobs)
    )
    logger.debug(f"Created commit {ctx.commit_sha}")

    # 5. Forced ref update, last writer wins
    ref_data = await git.update_ref(branch, ctx.commit_sha, force=True)
    ref = RefState(
        ref=ref_data.get("ref", f"refs/heads/{branch}"),
        sha=ref_data["object"]["sha"],
        url=ref_data.get("url"),
        commit_sha=ctx.commit_sha,
    )

    logger.info(
        f"Committed {len(ctx.blobs)} file(s) to {git.handle.full_name}@{branch}: {ctx.commit_sha}"
    )
    return ref
