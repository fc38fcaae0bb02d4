"""
Document model — one parsed collection member.

Built per request from raw file content. The repository is the only
durable store; a Document is never kept beyond the request.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field


class Document(BaseModel):
    """A front-matter document inside a collection folder.

    ``attributes`` is an open, insertion-ordered mapping. Values are the
    YAML scalars found in the metadata block (usually strings and
    numbers); unknown keys are preserved so a rewrite never drops them.
    """

    id: str = ""                    # source blob sha
    title: str
    path: str
    attributes: dict[str, Any] = Field(default_factory=dict)
    body: str = ""

    @property
    def order(self) -> float | None:
        """Numeric value of the ``order`` attribute, if it has one."""
        value = self.attributes.get("order")
        if isinstance(value, bool) or value is None:
            return None
        try:
            return float(value)
        except (TypeError, ValueError):
            return None
