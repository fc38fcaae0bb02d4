"""
Error taxonomy for the content store.

Parsing problems are absorbed where they happen (``FrontMatterError``
never leaves the codec). Existence and concurrency failures always reach
the caller: proceeding on stale or missing state would corrupt ordering
or lose content. Nothing here is retried.
"""

from __future__ import annotations


class PressroomError(Exception):
    """Base class for all content store errors."""


class NotFoundError(PressroomError):
    """A referenced path, collection, or project does not exist."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class ConflictError(PressroomError):
    """A write was rejected because its base revision is stale."""

    def __init__(self, message: str, path: str = "") -> None:
        super().__init__(message)
        self.path = path


class FrontMatterError(PressroomError):
    """The metadata block of a document could not be parsed."""


class ProviderError(PressroomError):
    """The repository provider failed (network, auth, rate limit, ...)."""

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ConfigDocumentError(PressroomError):
    """The in-repository config document is not valid."""
