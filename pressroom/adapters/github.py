"""
GitHub provider — repository primitives over the ``gh`` CLI.

Every call goes through ``gh api`` so authentication, host selection and
tokens stay the CLI's business. Multi-file commits use the Git Data API
(tree → commit → non-forced ref update), so a branch that moved since
the commit was built is rejected as a conflict instead of overwritten.
"""

from __future__ import annotations

import base64
import json
import logging
import re
import subprocess
from collections.abc import Callable, Sequence
from typing import Any
from urllib.parse import quote

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.errors import ConflictError, NotFoundError, ProviderError
from pressroom.core.models.tree import (
    BlobContent,
    CommitResult,
    FileChange,
    FileMode,
    ItemType,
    TreeItem,
)

logger = logging.getLogger(__name__)

_HTTP_STATUS_RE = re.compile(r"HTTP (\d{3})")

# 422 messages that mean "your base revision is stale"
_CONFLICT_HINTS = ("sha", "fast forward", "fast-forward")


def run_gh(
    *args: str,
    timeout: int = 30,
    stdin: str | None = None,
) -> subprocess.CompletedProcess[str]:
    """Run a gh CLI command and return the result."""
    return subprocess.run(
        ["gh", *args],
        capture_output=True,
        text=True,
        timeout=timeout,
        input=stdin,
    )


class GitHubProvider(RepositoryProvider):
    """GitHub REST API through ``gh api``.

    Args:
        runner:  Callable with the signature of ``run_gh`` (injectable for tests).
        timeout: Per-call timeout in seconds.
    """

    def __init__(
        self,
        runner: Callable[..., subprocess.CompletedProcess[str]] | None = None,
        timeout: int = 30,
    ):
        self._runner = runner or run_gh
        self._timeout = timeout

    @property
    def name(self) -> str:
        return "github"

    # ── Reads ───────────────────────────────────────────────────

    def get_default_branch(self, repo: str) -> str:
        data = self._api("GET", f"repos/{repo}")
        return data.get("default_branch") or "main"

    def get_tree(self, repo: str, ref: str) -> list[TreeItem]:
        data = self._api("GET", f"repos/{repo}/git/trees/{quote(ref, safe='')}?recursive=1")
        if data.get("truncated"):
            logger.warning("Tree listing for %s@%s was truncated by GitHub", repo, ref)

        items: list[TreeItem] = []
        for entry in data.get("tree", []):
            try:
                mode = FileMode(entry.get("mode", FileMode.FILE.value))
            except ValueError:
                logger.debug("Skipping %s with unknown mode %s", entry.get("path"), entry.get("mode"))
                continue
            # Submodules come back as type "commit"
            kind = ItemType.BLOB if entry.get("type") == "blob" else ItemType.TREE
            items.append(TreeItem(path=entry["path"], sha=entry["sha"], mode=mode, type=kind))
        return items

    def get_blob(self, repo: str, ref: str, path: str) -> BlobContent | None:
        try:
            data = self._api("GET", f"{self._contents_url(repo, path)}?ref={quote(ref, safe='')}")
        except NotFoundError:
            return None

        # A directory listing is not a blob
        if not isinstance(data, dict) or data.get("type") != "file":
            return None

        raw = base64.b64decode(data.get("content", ""))
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProviderError(f"{path} in {repo}@{ref} is not UTF-8 text: {e}") from e

        return BlobContent(
            path=data.get("path", path),
            content=content,
            sha=data["sha"],
        )

    # ── Writes ──────────────────────────────────────────────────

    def commit(
        self,
        repo: str,
        ref: str,
        files: Sequence[FileChange],
        message: str,
    ) -> CommitResult:
        entries = [
            {"path": f.path, "mode": f.mode.value, "type": "blob", "content": f.content}
            for f in files
        ]
        return self._commit_tree(repo, ref, entries, message, [f.path for f in files])

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
        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content.encode("utf-8")).decode("ascii"),
            "branch": ref,
        }
        if sha is not None:
            payload["sha"] = sha

        data = self._api("PUT", self._contents_url(repo, path), payload, path=path)
        return data["content"]["sha"]

    def rename_blob(
        self,
        repo: str,
        ref: str,
        sha: str,
        old_path: str,
        new_path: str,
        message: str,
    ) -> CommitResult:
        current = self.get_blob(repo, ref, old_path)
        if current is None:
            raise NotFoundError(f"{old_path} not found at {ref}", path=old_path)
        if current.sha != sha:
            raise ConflictError(f"{old_path} has changed since {sha[:7]}", path=old_path)

        entries = [
            {"path": new_path, "mode": FileMode.FILE.value, "type": "blob", "sha": sha},
            {"path": old_path, "mode": FileMode.FILE.value, "type": "blob", "sha": None},
        ]
        return self._commit_tree(repo, ref, entries, message, [old_path, new_path])

    def delete_blob(
        self,
        repo: str,
        ref: str,
        path: str,
        message: str,
        *,
        sha: str | None = None,
    ) -> None:
        if sha is None:
            current = self.get_blob(repo, ref, path)
            if current is None:
                raise NotFoundError(f"{path} not found at {ref}", path=path)
            sha = current.sha

        payload = {"message": message, "sha": sha, "branch": ref}
        self._api("DELETE", self._contents_url(repo, path), payload, path=path)

    # ── Internals ───────────────────────────────────────────────

    def _commit_tree(
        self,
        repo: str,
        ref: str,
        entries: list[dict[str, Any]],
        message: str,
        paths: list[str],
    ) -> CommitResult:
        """Build a tree on top of the branch head and fast-forward the branch."""
        head_ref = f"repos/{repo}/git/refs/heads/{quote(ref, safe='/')}"
        head = self._api("GET", f"repos/{repo}/git/ref/heads/{quote(ref, safe='/')}")
        head_sha = head["object"]["sha"]
        base_commit = self._api("GET", f"repos/{repo}/git/commits/{head_sha}")

        tree = self._api("POST", f"repos/{repo}/git/trees", {
            "base_tree": base_commit["tree"]["sha"],
            "tree": entries,
        })
        new_commit = self._api("POST", f"repos/{repo}/git/commits", {
            "message": message,
            "tree": tree["sha"],
            "parents": [head_sha],
        })
        self._api("PATCH", head_ref, {"sha": new_commit["sha"], "force": False})

        logger.info("Committed %d file(s) to %s@%s: %s", len(paths), repo, ref, new_commit["sha"][:7])
        return CommitResult(sha=new_commit["sha"], message=message, paths=paths)

    @staticmethod
    def _contents_url(repo: str, path: str) -> str:
        return f"repos/{repo}/contents/{quote(path, safe='/')}"

    def _api(
        self,
        method: str,
        endpoint: str,
        payload: dict[str, Any] | None = None,
        *,
        path: str = "",
    ) -> Any:
        args = ["api", "--method", method, endpoint, "-H", "Accept: application/vnd.github+json"]
        stdin = None
        if payload is not None:
            args.extend(["--input", "-"])
            stdin = json.dumps(payload)

        logger.debug("gh api %s %s", method, endpoint)
        try:
            r = self._runner(*args, timeout=self._timeout, stdin=stdin)
        except subprocess.TimeoutExpired as e:
            raise ProviderError(f"gh api {method} {endpoint} timed out after {e.timeout}s") from e
        except OSError as e:
            raise ProviderError(f"Cannot run gh: {e}") from e

        if r.returncode != 0:
            raise _map_error(r, method, endpoint, path)

        if not r.stdout.strip():
            return None
        try:
            return json.loads(r.stdout)
        except json.JSONDecodeError as e:
            raise ProviderError(f"Unexpected response from {endpoint}: {e}") from e


def _map_error(
    r: subprocess.CompletedProcess[str],
    method: str,
    endpoint: str,
    path: str,
) -> Exception:
    """Translate a failed ``gh api`` call into the error taxonomy."""
    m = _HTTP_STATUS_RE.search(r.stderr or "")
    status = int(m.group(1)) if m else None

    detail = (r.stderr or "").strip()
    try:
        body = json.loads(r.stdout) if r.stdout.strip() else {}
        if isinstance(body, dict) and body.get("message"):
            detail = body["message"]
    except json.JSONDecodeError:
        pass

    message = f"gh api {method} {endpoint} failed: {detail}"
    if status == 404:
        return NotFoundError(message, path=path)
    if status == 409:
        return ConflictError(message, path=path)
    if status == 422 and any(hint in detail.lower() for hint in _CONFLICT_HINTS):
        return ConflictError(message, path=path)
    return ProviderError(message, status=status)
