"""Unit tests for GitHubBlobCommit — the public commit surface.

Runs the whole pipeline against an in-memory Git object store to verify:
- Argument validation (before any I/O)
- Round-trip of content into the branch tree
- Abort behavior on read and blob failures
- Duplicate paths, large batches and the callback form
"""

from __future__ import annotations

import asyncio

import pytest

from blob_commit.services.github.exceptions import (
    CommitValidationError,
    FileReadError,
    GitHubAPIError,
)
from blob_commit.services.github.service import GitHubBlobCommit
from blob_commit.services.github.types import FileDescriptor, GitHubAuth, RefState
from tests.helpers.fake_git import FakeGitStore


# ═══════════════════════════════════════════════════════════════════════════
# Construction
# ═══════════════════════════════════════════════════════════════════════════


class TestConstruction:
    """The repository handle is validated up front."""

    def test_requires_owner(self):
        with pytest.raises(CommitValidationError, match="owner"):
            GitHubBlobCommit("", "repo")

    def test_requires_repo(self):
        with pytest.raises(CommitValidationError, match="repo name"):
            GitHubBlobCommit("owner", None)  # type: ignore[arg-type]

    def test_string_auth_is_a_token(self):
        gh = GitHubBlobCommit("owner", "repo", auth="ghp_x")

        assert gh.handle.auth == GitHubAuth(token="ghp_x")
        assert gh.repo_name == "owner/repo"

    def test_basic_auth_passes_through(self):
        auth = GitHubAuth(username="u", password="p")
        assert GitHubBlobCommit("owner", "repo", auth=auth).handle.auth is auth


# ═══════════════════════════════════════════════════════════════════════════
# Validation
# ═══════════════════════════════════════════════════════════════════════════


class TestValidation:
    """Bad arguments raise before any remote call."""

    @pytest.mark.anyio
    async def test_collects_all_problems(self, committer, git_store: FakeGitStore):
        with pytest.raises(CommitValidationError) as exc_info:
            await committer.commit_files("not-a-list", 42)  # type: ignore[arg-type]

        assert exc_info.value.errors == ["Need files array", "Need a branch"]
        assert git_store.calls == []

    @pytest.mark.anyio
    async def test_empty_batch_rejected(self, committer):
        with pytest.raises(CommitValidationError, match="at least one file"):
            await committer.commit_files([], "main")

    @pytest.mark.anyio
    async def test_entry_without_path(self, committer, git_store: FakeGitStore):
        with pytest.raises(CommitValidationError, match="File 1 needs a path"):
            await committer.commit_files([{"path": "a", "content": "x"}, {"content": "y"}], "main")

        assert git_store.calls == []

    def test_submit_requires_callback(self, committer):
        with pytest.raises(CommitValidationError, match="Need a callback"):
            committer.submit_commit([{"path": "a", "content": "x"}], "main", None)  # type: ignore[arg-type]

    @pytest.mark.anyio
    async def test_non_string_message_uses_default(self, committer, git_store: FakeGitStore):
        await committer.commit_files([{"path": "a.txt", "content": "x"}], "main", 123)  # type: ignore[arg-type]

        message = git_store.commits[git_store.head("main")]["message"]
        assert message == "Added following files:\n\na.txt\n"


# ═══════════════════════════════════════════════════════════════════════════
# Pipeline
# ═══════════════════════════════════════════════════════════════════════════


class TestCommitFiles:
    """End-to-end behavior against the fake object store."""

    @pytest.mark.anyio
    async def test_single_file_scenario(self, committer, git_store: FakeGitStore):
        """a.txt="hi" on main: new blob, tree T0+a.txt, commit C1 on C0, ref moved."""
        c0 = git_store.head("main")
        t0 = git_store.commits[c0]["tree"]

        ref = await committer.commit_files([{"path": "a.txt", "content": "hi"}], "main")

        c1 = git_store.head("main")
        assert isinstance(ref, RefState)
        assert ref.sha == c1 == ref.commit_sha
        assert not ref.superseded
        assert git_store.commits[c1]["parents"] == [c0]
        assert git_store.tree_of(c1) == {**git_store.trees[t0], "a.txt": ref_blob(git_store, b"hi")}

    @pytest.mark.anyio
    async def test_round_trip_of_inline_and_disk_content(
        self, committer, git_store: FakeGitStore, tmp_path
    ):
        (tmp_path / "assets").mkdir()
        (tmp_path / "assets" / "logo.bin").write_bytes(b"\x89PNG\x00\xff")

        await committer.commit_files(
            [
                FileDescriptor(path="notes.md", content="ünïcode"),
                FileDescriptor(path="assets/logo.bin", message="logo"),
            ],
            "main",
            "Add assets",
        )

        assert git_store.file_at("main", "notes.md") == "ünïcode".encode()
        assert git_store.file_at("main", "assets/logo.bin") == b"\x89PNG\x00\xff"
        assert git_store.commits[git_store.head("main")]["message"] == (
            "Add assets\n\nnotes.md\nassets/logo.bin: logo\n"
        )

    @pytest.mark.anyio
    async def test_same_batch_twice_new_commit_same_tree(self, committer, git_store: FakeGitStore):
        files = [{"path": "a.txt", "content": "same"}]

        first = await committer.commit_files(files, "main")
        second = await committer.commit_files(files, "main")

        assert first.commit_sha != second.commit_sha
        assert git_store.commits[second.commit_sha]["parents"] == [first.commit_sha]
        assert (
            git_store.commits[first.commit_sha]["tree"]
            == git_store.commits[second.commit_sha]["tree"]
        )

    @pytest.mark.anyio
    async def test_duplicate_paths_last_occurrence_wins(self, committer, git_store: FakeGitStore):
        await committer.commit_files(
            [
                {"path": "a.txt", "content": "first"},
                {"path": "b.txt", "content": "b"},
                {"path": "a.txt", "content": "last"},
            ],
            "main",
            "dup",
        )

        assert git_store.file_at("main", "a.txt") == b"last"
        assert git_store.commits[git_store.head("main")]["message"] == "dup\n\nb.txt\na.txt\n"

    @pytest.mark.anyio
    async def test_eleven_files_land_in_one_commit(self, committer, git_store: FakeGitStore):
        c0 = git_store.head("main")
        files = [{"path": f"batch/{i:02d}.txt", "content": f"file {i}"} for i in range(11)]

        await committer.commit_files(files, "main")

        head = git_store.head("main")
        assert git_store.commits[head]["parents"] == [c0]
        assert git_store.calls.count("create_commit") == 1
        tree = git_store.tree_of(head)
        for i in range(11):
            assert git_store.blobs[tree[f"batch/{i:02d}.txt"]] == f"file {i}".encode()

    @pytest.mark.anyio
    async def test_all_blobs_resolve_before_tree(self, committer, git_store: FakeGitStore):
        files = [{"path": f"{i}.txt", "content": str(i)} for i in range(4)]

        await committer.commit_files(files, "main")

        first_ref_step = git_store.calls.index("fetch_ref")
        assert git_store.calls[:first_ref_step] == ["create_blob"] * 4


class TestAbort:
    """No tree, commit or ref change when any earlier stage fails."""

    @pytest.mark.anyio
    async def test_blob_failure_leaves_branch_unchanged(self, committer, git_store: FakeGitStore):
        c0 = git_store.head("main")
        git_store.failing_blobs.add(b"bad")

        with pytest.raises(GitHubAPIError, match="502"):
            await committer.commit_files(
                [{"path": "ok.txt", "content": "ok"}, {"path": "bad.txt", "content": "bad"}],
                "main",
            )

        assert git_store.head("main") == c0
        assert "create_tree" not in git_store.calls
        assert "create_commit" not in git_store.calls

    @pytest.mark.anyio
    async def test_read_failure_creates_no_blobs(self, committer, git_store: FakeGitStore):
        with pytest.raises(FileReadError) as exc_info:
            await committer.commit_files(
                [{"path": "a.txt", "content": "a"}, {"path": "missing.txt"}], "main"
            )

        assert exc_info.value.path == "missing.txt"
        assert git_store.calls == []

    @pytest.mark.anyio
    async def test_missing_branch_returns_not_found(self, committer, git_store: FakeGitStore):
        with pytest.raises(GitHubAPIError, match="Branch 'ghost' not found") as exc_info:
            await committer.commit_files([{"path": "a.txt", "content": "a"}], "ghost")

        assert exc_info.value.status_code == 404
        assert "create_tree" not in git_store.calls
        assert "ghost" not in git_store.refs


class TestConcurrentWriters:
    """Two commits racing on one branch: the last ref update wins."""

    @pytest.mark.anyio
    async def test_last_writer_wins(self, committer, git_store: FakeGitStore):
        c0 = git_store.head("main")

        first, second = await asyncio.gather(
            committer.commit_files([{"path": "a.txt", "content": "a"}], "main"),
            committer.commit_files([{"path": "b.txt", "content": "b"}], "main"),
        )

        # Both started from C0; only one survives on the branch
        assert git_store.commits[first.commit_sha]["parents"] == [c0]
        assert git_store.commits[second.commit_sha]["parents"] == [c0]
        assert git_store.head("main") in (first.commit_sha, second.commit_sha)
        assert first.commit_sha in git_store.commits
        assert second.commit_sha in git_store.commits


# ═══════════════════════════════════════════════════════════════════════════
# Callback form
# ═══════════════════════════════════════════════════════════════════════════


class TestSubmitCommit:
    """submit_commit delivers the outcome to callback(error, ref) once."""

    @pytest.mark.anyio
    async def test_success_delivers_ref(self, committer, git_store: FakeGitStore):
        results: list[tuple[BaseException | None, RefState | None]] = []

        task = committer.submit_commit(
            [{"path": "a.txt", "content": "hi"}],
            "main",
            lambda err, ref: results.append((err, ref)),
        )
        await asyncio.wait([task])
        await asyncio.sleep(0)

        assert len(results) == 1
        err, ref = results[0]
        assert err is None
        assert ref is not None and ref.sha == git_store.head("main")

    @pytest.mark.anyio
    async def test_failure_delivers_error(self, committer, git_store: FakeGitStore):
        results: list[tuple[BaseException | None, RefState | None]] = []

        task = committer.submit_commit(
            [{"path": "a.txt", "content": "hi"}],
            "ghost",
            lambda err, ref: results.append((err, ref)),
        )
        await asyncio.wait([task])
        await asyncio.sleep(0)

        assert len(results) == 1
        err, ref = results[0]
        assert isinstance(err, GitHubAPIError)
        assert ref is None

    @pytest.mark.anyio
    async def test_cancellation_is_reported(self, committer, git_store: FakeGitStore):
        results: list[tuple[BaseException | None, RefState | None]] = []
        git_store.blocked_blobs.add(b"slow")

        task = committer.submit_commit(
            [{"path": "a.txt", "content": "slow"}],
            "main",
            lambda err, ref: results.append((err, ref)),
        )
        await asyncio.sleep(0)
        task.cancel()
        await asyncio.wait([task])
        await asyncio.sleep(0)

        assert len(results) == 1
        assert isinstance(results[0][0], asyncio.CancelledError)
        assert "create_tree" not in git_store.calls


def ref_blob(store: FakeGitStore, raw: bytes) -> str:
    """Sha of the stored blob holding ``raw``."""
    return next(sha for sha, content in store.blobs.items() if content == raw)
