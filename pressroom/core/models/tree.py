"""
Repository tree models — what the provider hands back.

A tree listing is produced fresh on every request and never cached:
a ``sha`` is only meaningful until the next edit of that path.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class FileMode(str, Enum):
    """Git file modes, as used by tree entries and commit file changes."""

    FILE = "100644"
    EXECUTABLE = "100755"
    SUBMODULE = "160000"
    SYMLINK = "120000"
    DIRECTORY = "040000"


class ItemType(str, Enum):
    """Tree entry kind."""

    BLOB = "blob"
    TREE = "tree"


class TreeItem(BaseModel):
    """One entry of a recursive repository listing."""

    path: str                       # repo-relative, no leading slash
    sha: str
    mode: FileMode = FileMode.FILE
    type: ItemType = ItemType.BLOB

    @property
    def is_blob(self) -> bool:
        return self.type == ItemType.BLOB


class BlobContent(BaseModel):
    """Decoded content of a single file at a given ref."""

    path: str
    content: str
    sha: str


class FileChange(BaseModel):
    """One file of a multi-file commit.

    Attributes:
        path:    Repo-relative path (unchanged for content replacement).
        content: Full new file content.
        mode:    Git file mode for the entry.
    """

    path: str
    content: str
    mode: FileMode = FileMode.FILE


class CommitResult(BaseModel):
    """Outcome of a commit accepted by the provider.

    Once a provider returns this, the change is final — nothing in
    pressroom rolls it back.
    """

    sha: str
    message: str = ""
    paths: list[str] = Field(default_factory=list)
