"""Adapters — bindings to repository hosts and project storage.

Public re-exports for convenient access.
"""

from pressroom.adapters.base import RepositoryProvider
from pressroom.adapters.github import GitHubProvider
from pressroom.adapters.mock import MockProvider
from pressroom.adapters.registry import InMemoryProjectRegistry, ProjectRegistry

__all__ = [
    "GitHubProvider",
    "InMemoryProjectRegistry",
    "MockProvider",
    "ProjectRegistry",
    "RepositoryProvider",
]
