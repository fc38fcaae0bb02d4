"""
Media folder operations — list, move and rename uploaded assets.

The media folder comes from the project config; ``'/'`` or an unset
value means the repository root.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.models.project import ProjectConfig
from pressroom.core.models.tree import CommitResult, TreeItem
from pressroom.core.services.file_ops import rename_file
from pressroom.core.services.tree_filter import basename, children, dirname, extension, normalize_route

logger = logging.getLogger(__name__)

IMAGE_EXTS = {".jpg", ".jpeg", ".png", ".gif", ".webp", ".svg", ".bmp", ".ico", ".avif"}
VIDEO_EXTS = {".mp4", ".webm", ".mov", ".avi", ".mkv"}
AUDIO_EXTS = {".mp3", ".wav", ".ogg", ".flac", ".aac"}
DOC_EXTS = {".pdf"}

MEDIA_EXTS = IMAGE_EXTS | VIDEO_EXTS | AUDIO_EXTS | DOC_EXTS


def media_folder(config: ProjectConfig) -> str:
    """Repo-relative media folder (``''`` for the repository root)."""
    return normalize_route(config.media_folder or "")


def is_media(path: str) -> bool:
    return extension(path) in MEDIA_EXTS


def list_media(tree: Iterable[TreeItem], folder: str) -> list[TreeItem]:
    """Media files directly inside ``folder``, in tree order."""
    return [item for item in children(tree, folder) if is_media(item.path)]


def _join(folder: str, name: str) -> str:
    folder = normalize_route(folder)
    return f"{folder}/{name}" if folder else name


def move_target(path: str, folder: str) -> str:
    """New path of ``path`` moved into ``folder`` (name kept)."""
    return _join(folder, basename(path))


def rename_target(path: str, name: str) -> str:
    """New path of ``path`` renamed to ``name`` (folder kept)."""
    name = name.strip()
    if not name or "/" in name:
        raise ValueError(f"Invalid file name: {name!r}")
    return _join(dirname(path), name)


def move_file(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    path: str,
    sha: str,
    folder: str,
) -> CommitResult:
    """Move a file into another folder."""
    return rename_file(provider, repo, branch, path, move_target(path, folder), sha)


def rename_media(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    path: str,
    sha: str,
    name: str,
) -> CommitResult:
    """Rename a file inside its folder."""
    return rename_file(provider, repo, branch, path, rename_target(path, name), sha)
