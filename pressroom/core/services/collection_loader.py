"""
Collection loader — fetch, parse and order the documents of a collection.

Blob fetches fan out on a thread pool and fan back in before anything
is parsed. The first failure cancels fetches that have not started yet
and is raised as-is: a caller never sees a partial collection.
"""

from __future__ import annotations

import logging
from concurrent.futures import FIRST_EXCEPTION, ThreadPoolExecutor, wait

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.errors import NotFoundError
from pressroom.core.models.document import Document
from pressroom.core.models.project import Project
from pressroom.core.models.tree import BlobContent, TreeItem
from pressroom.core.services.document_codec import parse
from pressroom.core.services.tree_filter import filter_collection

logger = logging.getLogger(__name__)


def load_collection(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    route: str,
    *,
    max_workers: int | None = None,
) -> list[Document]:
    """Load every document of a collection folder, sorted by ``order``.

    Args:
        provider:    Repository provider to read from.
        repo:        Repository identifier ("owner/name").
        branch:      Branch to read.
        route:       Collection folder (leading slash optional).
        max_workers: Concurrent fetch limit. Default: one worker per file.

    Returns:
        Documents sorted ascending by numeric ``order``. Documents without
        a numeric order come last. Ties keep tree-listing order.

    Raises:
        NotFoundError: If any member's content cannot be retrieved.
    """
    tree = provider.get_tree(repo, branch)
    entries = filter_collection(tree, route)
    logger.debug("Collection %r in %s@%s has %d file(s)", route, repo, branch, len(entries))

    blobs = fetch_blobs(provider, repo, branch, entries, max_workers=max_workers)
    documents = [parse(blob.content, blob.path, blob.sha) for blob in blobs]
    return sort_documents(documents)


def load_project_collection(
    provider: RepositoryProvider,
    project: Project,
    collection_id: str,
    *,
    max_workers: int | None = None,
) -> list[Document]:
    """Load a collection declared in the project's config document."""
    from pressroom.core.services.config_ops import read_config
    from pressroom.core.services.project_ops import resolve_branch

    branch = resolve_branch(provider, project)
    config = read_config(provider, project.repo, branch)
    collection = config.get_collection(collection_id)
    if collection is None:
        raise NotFoundError(f"Collection {collection_id!r} is not configured for {project.repo}")

    return load_collection(
        provider, project.repo, branch, collection.route, max_workers=max_workers,
    )


def fetch_blobs(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    entries: list[TreeItem],
    *,
    max_workers: int | None = None,
) -> list[BlobContent]:
    """Fetch blobs concurrently, preserving ``entries`` order.

    Raises the failure of the lowest-indexed failed fetch; queued
    fetches are cancelled and no result is returned.
    """
    if not entries:
        return []

    results: list[BlobContent | None] = [None] * len(entries)
    workers = max_workers or len(entries)

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="pressroom-fetch") as pool:
        futures = {
            pool.submit(_fetch_one, provider, repo, branch, entry): index
            for index, entry in enumerate(entries)
        }
        done, pending = wait(futures, return_when=FIRST_EXCEPTION)

        failed = sorted(
            (futures[f], f) for f in done if f.exception() is not None
        )
        if failed:
            for future in pending:
                future.cancel()
            index, future = failed[0]
            logger.warning("Fetching %s failed: %s", entries[index].path, future.exception())
            raise future.exception()  # type: ignore[misc]

        for future in done:
            results[futures[future]] = future.result()

    return [blob for blob in results if blob is not None]


def sort_documents(documents: list[Document]) -> list[Document]:
    """Stable sort by numeric ``order``; unordered documents go last."""
    def key(doc: Document) -> tuple[int, float]:
        order = doc.order
        return (0, order) if order is not None else (1, 0.0)

    return sorted(documents, key=key)


def _fetch_one(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    entry: TreeItem,
) -> BlobContent:
    blob = provider.get_blob(repo, branch, entry.path)
    if blob is None:
        raise NotFoundError(
            f'Content for file "{entry.path}" was not found in {repo}@{branch}',
            path=entry.path,
        )
    return blob
