"""
File mutation primitives — save, rename and delete single files.

Concurrency control is the provider's: every mutation carries the sha
the caller believes is current and stale writes are rejected with
``ConflictError``. Callers that cannot accept last-write-wins must read
the sha immediately before mutating.
"""

from __future__ import annotations

import logging

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.models.tree import CommitResult

logger = logging.getLogger(__name__)


def save_file(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    path: str,
    content: str,
    *,
    expected_sha: str | None,
    message: str | None = None,
) -> str:
    """Create or replace a file.

    ``expected_sha`` is required: pass the current blob sha to replace
    a file, or None to create a new one.

    Returns:
        The new blob sha.
    """
    verb = "Update" if expected_sha else "Create"
    new_sha = provider.put_blob(
        repo, branch, path, content, message or f"{verb} file {path}", sha=expected_sha,
    )
    logger.info("%sd %s in %s@%s", verb, path, repo, branch)
    return new_sha


def rename_file(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    old_path: str,
    new_path: str,
    sha: str,
    message: str | None = None,
) -> CommitResult:
    """Move a file to ``new_path``; ``sha`` must be its current blob sha."""
    if old_path == new_path:
        raise ValueError(f"{old_path} is already at that path")

    result = provider.rename_blob(
        repo, branch, sha, old_path, new_path, message or f"Move file {old_path} to {new_path}",
    )
    logger.info("Moved %s to %s in %s@%s", old_path, new_path, repo, branch)
    return result


def delete_file(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    path: str,
    message: str | None = None,
    *,
    sha: str | None = None,
) -> None:
    """Delete a file. With ``sha``, only if it is still that revision."""
    provider.delete_blob(repo, branch, path, message or f"Delete file {path}", sha=sha)
    logger.info("Deleted %s from %s@%s", path, repo, branch)
