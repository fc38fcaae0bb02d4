"""
Mock provider — in-memory repository for tests and mock mode.

Behaves like a Git host as far as the content store can tell: blob
shas are real Git blob hashes, every write checks the expected sha,
and multi-file commits are applied all-or-nothing. Failures can be
injected per operation (and optionally per path).
"""

from __future__ import annotations

import hashlib
import threading
from collections.abc import Sequence

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.errors import ConflictError, NotFoundError
from pressroom.core.models.tree import (
    BlobContent,
    CommitResult,
    FileChange,
    FileMode,
    ItemType,
    TreeItem,
)
from pressroom.core.services.tree_filter import dirname


def blob_sha(content: str) -> str:
    """Git blob hash of ``content`` (UTF-8)."""
    data = content.encode("utf-8")
    return hashlib.sha1(b"blob %d\0" % len(data) + data).hexdigest()


class MockProvider(RepositoryProvider):
    """In-memory provider.

    Files are kept in insertion order, which is also the tree listing
    order — like a real host, that order is not alphabetical.
    """

    def __init__(self, default_branch: str = "main"):
        self._default_branch = default_branch
        self._files: dict[tuple[str, str], dict[str, str]] = {}
        self._failures: dict[tuple[str, str | None], Exception] = {}
        self._missing: set[str] = set()
        self._call_log: list[tuple[str, str | None]] = []
        self._commits: list[CommitResult] = []
        self._lock = threading.Lock()

    @property
    def name(self) -> str:
        return "mock"

    # ── Test helpers ────────────────────────────────────────────

    @property
    def call_log(self) -> list[tuple[str, str | None]]:
        """Every (operation, path) this provider has received."""
        return self._call_log

    @property
    def commits(self) -> list[CommitResult]:
        """Commits accepted so far, oldest first."""
        return self._commits

    def call_count(self, operation: str) -> int:
        """Number of calls of one operation."""
        return sum(1 for op, _ in self._call_log if op == operation)

    def add_file(self, repo: str, path: str, content: str, branch: str | None = None) -> str:
        """Seed a file directly (no call logged). Returns its blob sha."""
        files = self._files.setdefault((repo, branch or self._default_branch), {})
        files[path] = content
        return blob_sha(content)

    def read_file(self, repo: str, path: str, branch: str | None = None) -> str | None:
        """Current content of a file, bypassing the call log."""
        return self._files.get((repo, branch or self._default_branch), {}).get(path)

    def set_failure(self, operation: str, error: Exception, path: str | None = None) -> None:
        """Make an operation (optionally only for one path) raise ``error``."""
        self._failures[(operation, path)] = error

    def set_missing(self, path: str) -> None:
        """Keep ``path`` in tree listings but make ``get_blob`` return None."""
        self._missing.add(path)

    def reset(self) -> None:
        """Clear call log, injected failures, and missing paths."""
        self._call_log.clear()
        self._failures.clear()
        self._missing.clear()

    # ── Reads ───────────────────────────────────────────────────

    def get_default_branch(self, repo: str) -> str:
        self._record("get_default_branch", None)
        return self._default_branch

    def get_tree(self, repo: str, ref: str) -> list[TreeItem]:
        self._record("get_tree", None)
        files = self._branch(repo, ref)

        items: list[TreeItem] = []
        seen_dirs: set[str] = set()
        for path, content in list(files.items()):
            for folder in _parents(path):
                if folder not in seen_dirs:
                    seen_dirs.add(folder)
                    items.append(TreeItem(
                        path=folder,
                        sha=hashlib.sha1(folder.encode("utf-8")).hexdigest(),
                        mode=FileMode.DIRECTORY,
                        type=ItemType.TREE,
                    ))
            items.append(TreeItem(path=path, sha=blob_sha(content)))
        return items

    def get_blob(self, repo: str, ref: str, path: str) -> BlobContent | None:
        self._record("get_blob", path)
        if path in self._missing:
            return None
        content = self._branch(repo, ref).get(path)
        if content is None:
            return None
        return BlobContent(path=path, content=content, sha=blob_sha(content))

    # ── Writes ──────────────────────────────────────────────────

    def commit(
        self,
        repo: str,
        ref: str,
        files: Sequence[FileChange],
        message: str,
    ) -> CommitResult:
        self._record("commit", None)
        with self._lock:
            current = self._branch(repo, ref)
            updated = dict(current)
            for change in files:
                updated[change.path] = change.content
            current.clear()
            current.update(updated)
            return self._new_commit(message, [f.path for f in files])

    def put_blob(
        self,
        repo: str,
        ref: str,
        path: str,
        content: str,
        message: str,
        *,
        sha: str | None,
    ) -> str:
        self._record("put_blob", path)
        with self._lock:
            files = self._files.setdefault((repo, ref), {})
            existing = files.get(path)
            if existing is None and sha is not None:
                raise ConflictError(f"{path} does not exist at {ref}", path=path)
            if existing is not None:
                if sha is None:
                    raise ConflictError(f"{path} already exists; its sha is required", path=path)
                if sha != blob_sha(existing):
                    raise ConflictError(f"{path} has changed since {sha[:7]}", path=path)
            files[path] = content
            self._new_commit(message, [path])
            return blob_sha(content)

    def rename_blob(
        self,
        repo: str,
        ref: str,
        sha: str,
        old_path: str,
        new_path: str,
        message: str,
    ) -> CommitResult:
        self._record("rename_blob", old_path)
        with self._lock:
            files = self._branch(repo, ref)
            content = files.get(old_path)
            if content is None:
                raise NotFoundError(f"{old_path} not found at {ref}", path=old_path)
            if sha != blob_sha(content):
                raise ConflictError(f"{old_path} has changed since {sha[:7]}", path=old_path)
            del files[old_path]
            files[new_path] = content
            return self._new_commit(message, [old_path, new_path])

    def delete_blob(
        self,
        repo: str,
        ref: str,
        path: str,
        message: str,
        *,
        sha: str | None = None,
    ) -> None:
        self._record("delete_blob", path)
        with self._lock:
            files = self._branch(repo, ref)
            content = files.get(path)
            if content is None:
                raise NotFoundError(f"{path} not found at {ref}", path=path)
            if sha is not None and sha != blob_sha(content):
                raise ConflictError(f"{path} has changed since {sha[:7]}", path=path)
            del files[path]
            self._new_commit(message, [path])

    # ── Internals ───────────────────────────────────────────────

    def _record(self, operation: str, path: str | None) -> None:
        with self._lock:
            self._call_log.append((operation, path))
        error = self._failures.get((operation, path)) or self._failures.get((operation, None))
        if error is not None:
            raise error

    def _branch(self, repo: str, ref: str) -> dict[str, str]:
        files = self._files.get((repo, ref))
        if files is None:
            raise NotFoundError(f"No branch {ref!r} in {repo}")
        return files

    def _new_commit(self, message: str, paths: list[str]) -> CommitResult:
        seed = f"{len(self._commits)}:{message}:{','.join(paths)}"
        result = CommitResult(
            sha=hashlib.sha1(seed.encode("utf-8")).hexdigest(),
            message=message,
            paths=paths,
        )
        self._commits.append(result)
        return result


def _parents(path: str) -> list[str]:
    """Ancestor folders of a path, outermost first."""
    parents = []
    folder = dirname(path)
    while folder:
        parents.append(folder)
        folder = dirname(folder)
    return list(reversed(parents))
