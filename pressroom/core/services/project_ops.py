"""
Project operations — tie registry records to their repositories.
"""

from __future__ import annotations

import logging

from pressroom.adapters.base import RepositoryProvider
from pressroom.adapters.registry import ProjectRegistry
from pressroom.core.models.project import Project
from pressroom.core.services.config_ops import delete_config, ensure_config

logger = logging.getLogger(__name__)


def resolve_branch(provider: RepositoryProvider, project: Project) -> str:
    """The project's working branch, or the repository default branch."""
    return project.branch or provider.get_default_branch(project.repo)


def user_projects(registry: ProjectRegistry, user: str) -> list[Project]:
    """Projects of ``user`` sorted by title (case-insensitive)."""
    return sorted(registry.list_for_user(user), key=lambda p: p.title.casefold())


def setup_project(
    registry: ProjectRegistry,
    provider: RepositoryProvider,
    *,
    user: str,
    title: str,
    repo: str,
    branch: str = "",
) -> Project:
    """Make sure the config document exists, then register the project.

    Nothing is registered when the repository cannot be prepared.
    """
    ensure_config(provider, repo, branch or provider.get_default_branch(repo))
    project_id = registry.create(user=user, title=title, repo=repo, branch=branch)
    project = registry.require(project_id)
    logger.info("Set up project %d (%s) for %s", project_id, repo, user)
    return project


def teardown_project(
    registry: ProjectRegistry,
    provider: RepositoryProvider,
    project: Project,
) -> None:
    """Delete the project's config document, then its registry record."""
    delete_config(provider, project.repo, resolve_branch(provider, project))
    registry.delete(project)
    logger.info("Tore down project %d (%s)", project.id, project.repo)
