"""
Repository tree filter — narrows a full tree listing to one collection.

Collections are flat: only direct children of the collection route
are members, nested folders are ignored.
"""

from __future__ import annotations

import posixpath
from collections.abc import Iterable

from pressroom.core.models.tree import TreeItem

MARKDOWN_EXTS = {".md", ".markdown", ".mdown", ".mkdn", ".mkd", ".mdx"}


# ── Path helpers ────────────────────────────────────────────────


def normalize_route(route: str) -> str:
    """Strip leading/trailing slashes; ``'/'`` becomes the root (``''``)."""
    return route.strip().strip("/")


def dirname(path: str) -> str:
    """Parent directory of a repo-relative path (``''`` for root files)."""
    return posixpath.dirname(path)


def basename(path: str) -> str:
    return posixpath.basename(path)


def extension(path: str) -> str:
    """Lower-cased extension including the dot (``''`` if none)."""
    return posixpath.splitext(path)[1].lower()


def stem(path: str) -> str:
    """Base name without extension: ``posts/hello.md`` → ``hello``."""
    return posixpath.splitext(basename(path))[0]


def is_markdown(path: str) -> bool:
    return extension(path) in MARKDOWN_EXTS


# ── Filters ─────────────────────────────────────────────────────


def children(tree: Iterable[TreeItem], folder: str) -> list[TreeItem]:
    """Blob entries whose parent directory is exactly ``folder``."""
    folder = normalize_route(folder)
    return [item for item in tree if item.is_blob and dirname(item.path) == folder]


def filter_collection(tree: Iterable[TreeItem], route: str) -> list[TreeItem]:
    """Select the markdown documents of a collection route.

    Tree order is preserved. An empty list is a valid result.
    """
    return [item for item in children(tree, route) if is_markdown(item.path)]
