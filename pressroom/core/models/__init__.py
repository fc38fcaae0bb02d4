"""
Domain models — Pydantic types for the content store.

All models are re-exported here for convenient access:

    from pressroom.core.models import Document, ProjectConfig, TreeItem
"""

from pressroom.core.models.document import Document
from pressroom.core.models.project import (
    FieldConfig,
    Project,
    ProjectCollection,
    ProjectConfig,
    ProjectTemplate,
)
from pressroom.core.models.settings import Settings
from pressroom.core.models.tree import (
    BlobContent,
    CommitResult,
    FileChange,
    FileMode,
    ItemType,
    TreeItem,
)

__all__ = [
    # tree.py
    "BlobContent",
    "CommitResult",
    # document.py
    "Document",
    "FieldConfig",
    "FileChange",
    "FileMode",
    "ItemType",
    # project.py
    "Project",
    "ProjectCollection",
    "ProjectConfig",
    "ProjectTemplate",
    # settings.py
    "Settings",
    "TreeItem",
]
