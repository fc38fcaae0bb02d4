"""
Collection ordering — renumber a collection and persist it in one commit.

The caller supplies the complete, already reordered document list (for
example from a drag-and-drop editor). Every document gets
``order = <index>`` and the whole collection is written as a single
commit, so readers never see a half-renumbered folder.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.models.document import Document
from pressroom.core.models.tree import CommitResult, FileChange, FileMode
from pressroom.core.services.document_codec import serialize
from pressroom.core.services.tree_filter import dirname, normalize_route

logger = logging.getLogger(__name__)


def order_message(route: str) -> str:
    return f"Updated order for files in {route}"


def renumber(documents: Sequence[Document]) -> list[Document]:
    """Copies of ``documents`` with ``order`` set to their index.

    An existing ``order`` key keeps its position in the attribute
    mapping; otherwise it is appended. Other attributes are untouched.
    """
    renumbered = []
    for index, doc in enumerate(documents):
        attributes = dict(doc.attributes)
        attributes["order"] = index
        renumbered.append(doc.model_copy(update={"attributes": attributes}))
    return renumbered


def build_order_changes(route: str, documents: Sequence[Document]) -> list[FileChange]:
    """Serialize a renumbered collection into commit file changes.

    Raises:
        ValueError: If ``documents`` is empty, lists a path twice, or has a
            document outside ``route``.
    """
    if not documents:
        raise ValueError(f"No documents to reorder in {route}")

    folder = normalize_route(route)
    seen: set[str] = set()
    for doc in documents:
        if dirname(doc.path) != folder:
            raise ValueError(f"{doc.path} is not part of collection {route}")
        if doc.path in seen:
            raise ValueError(f"{doc.path} is listed more than once")
        seen.add(doc.path)

    return [
        FileChange(path=doc.path, content=serialize(doc), mode=FileMode.FILE)
        for doc in renumber(documents)
    ]


def reorder(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    route: str,
    documents: Sequence[Document],
) -> CommitResult:
    """Persist the given document order as one atomic commit.

    Conflicts reported by the provider propagate unchanged; nothing is
    retried or merged.
    """
    changes = build_order_changes(route, documents)
    result = provider.commit(repo, branch, changes, order_message(route))
    logger.info("Reordered %d file(s) in %s (%s)", len(changes), route, result.sha[:7])
    return result
