"""
Shared constants and builders for tests.
"""

from __future__ import annotations

REPO = "acme/site"
BRANCH = "main"


def post(title: str, order: int | None = None, body: str = "Body.\n") -> str:
    """Front-matter document text."""
    lines = ["---", f"title: {title}"]
    if order is not None:
        lines.append(f"order: {order}")
    lines.extend(["---", "", body])
    return "\n".join(lines)
