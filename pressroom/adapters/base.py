"""
Provider base — the contract between the content store and a Git host.

The content store only talks to a remote repository through this
interface. Implementations map host failures onto the error taxonomy:

    - missing files        → ``get_blob`` returns None / ``NotFoundError``
    - stale base revisions → ``ConflictError``
    - anything else        → ``ProviderError``

Providers never retry; retry policy belongs to whoever wraps them.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Sequence

from pressroom.core.models.tree import BlobContent, CommitResult, FileChange, TreeItem


class RepositoryProvider(ABC):
    """Abstract base class for repository providers.

    To add a new host:
        1. Subclass RepositoryProvider
        2. Implement every abstract method
        3. Return it from ``pressroom.main.build_provider``

    Implementations must be safe for concurrent read calls: the
    collection loader fetches blobs from worker threads.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """The provider identifier (e.g., 'github', 'mock')."""

    @abstractmethod
    def get_default_branch(self, repo: str) -> str:
        """Default branch of the repository."""

    @abstractmethod
    def get_tree(self, repo: str, ref: str) -> list[TreeItem]:
        """Recursive listing of every entry at ``ref``."""

    @abstractmethod
    def get_blob(self, repo: str, ref: str, path: str) -> BlobContent | None:
        """Content of one file, or None if it does not exist."""

    @abstractmethod
    def commit(
        self,
        repo: str,
        ref: str,
        files: Sequence[FileChange],
        message: str,
    ) -> CommitResult:
        """Apply all file changes as one commit, all or nothing."""

    @abstractmethod
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
        """Create or replace one file and return its new blob sha.

        ``sha`` is the expected current blob sha. None means the file
        must not exist yet; a mismatch raises ``ConflictError``.
        """

    @abstractmethod
    def rename_blob(
        self,
        repo: str,
        ref: str,
        sha: str,
        old_path: str,
        new_path: str,
        message: str,
    ) -> CommitResult:
        """Move a file, keeping its content (identified by ``sha``)."""

    @abstractmethod
    def delete_blob(
        self,
        repo: str,
        ref: str,
        path: str,
        message: str,
        *,
        sha: str | None = None,
    ) -> None:
        """Delete one file. When ``sha`` is given it must be current."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} name={self.name!r}>"
