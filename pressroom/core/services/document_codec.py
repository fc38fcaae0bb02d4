"""
Document codec — front-matter parsing and serialization.

On-disk shape::

    ---
    title: Hello
    order: 3
    ---

    Body text...

The metadata block is optional. A block that cannot be parsed is
treated as absent: the document keeps its full text as body and gets
an empty attribute mapping. Parsing never raises.
"""

from __future__ import annotations

import logging
import re
from typing import Any

import yaml

from pressroom.core.errors import FrontMatterError
from pressroom.core.models.document import Document
from pressroom.core.services.tree_filter import stem

logger = logging.getLogger(__name__)

_FRONTMATTER_RE = re.compile(
    r"\A\ufeff?---[ \t]*\r?\n(?P<meta>.*?)^(?:---|\.\.\.)[ \t]*(?:\r?\n|\Z)",
    re.DOTALL | re.MULTILINE,
)

_DELIMITER = "---"


def split_front_matter(raw: str) -> tuple[str | None, str]:
    """Split raw text into (metadata block, body).

    The metadata block is ``None`` when the text has no block. A single
    blank line after the closing delimiter belongs to the delimiter.
    """
    m = _FRONTMATTER_RE.match(raw)
    if not m:
        return None, raw

    body = raw[m.end():]
    if body.startswith("\r\n"):
        body = body[2:]
    elif body.startswith("\n"):
        body = body[1:]
    return m.group("meta"), body


def load_attributes(meta: str) -> dict[str, Any]:
    """Parse a metadata block into an ordered attribute mapping.

    Raises:
        FrontMatterError: If the block is not YAML or not a mapping.
    """
    try:
        data = yaml.safe_load(meta)
    except yaml.YAMLError as e:
        raise FrontMatterError(f"Invalid front matter: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise FrontMatterError(
            f"Front matter must be a mapping, got {type(data).__name__}"
        )
    return {str(key): value for key, value in data.items()}


def parse(raw: str, path: str, sha: str = "") -> Document:
    """Parse raw file content into a Document.

    Args:
        raw:  File content as text.
        path: Repo-relative path of the file (used for the fallback title).
        sha:  Blob sha of the content, used as the document id.
    """
    meta, body = split_front_matter(raw)
    attributes: dict[str, Any] = {}

    if meta is not None:
        try:
            attributes = load_attributes(meta)
        except FrontMatterError as e:
            logger.warning("Ignoring front matter of %s: %s", path, e)
            body = raw

    title = attributes.get("title")
    if title is None or title == "":
        title = stem(path)

    return Document(
        id=sha,
        title=str(title),
        path=path,
        attributes=attributes,
        body=body,
    )


def dump_attributes(attributes: dict[str, Any]) -> str:
    """Render the metadata block as block-style YAML, keys in their original order."""
    if not attributes:
        return ""
    return yaml.safe_dump(
        attributes,
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=2**31 - 1,
    )


def serialize(document: Document) -> str:
    """Render a Document back to its on-disk text."""
    meta = dump_attributes(document.attributes)
    return f"{_DELIMITER}\n{meta}{_DELIMITER}\n\n{document.body}"
