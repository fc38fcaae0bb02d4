"""
Project registry — where project records live.

The registry is keyed storage for ``Project`` records with two
secondary indices: user → project ids and repo → project id. Pressroom
reads ``repo``/``branch`` from it and never owns the records.

Listing order is unspecified; callers sort (see
``project_ops.user_projects``).
"""

from __future__ import annotations

import logging
import threading
from abc import ABC, abstractmethod

from pressroom.core.errors import NotFoundError
from pressroom.core.models.project import Project

logger = logging.getLogger(__name__)


class ProjectRegistry(ABC):
    """Abstract project store."""

    @abstractmethod
    def get(self, project_id: int) -> Project | None:
        """Look up a project by id."""

    @abstractmethod
    def get_id_for_repo(self, repo: str) -> int | None:
        """Project id registered for a repository, if any."""

    @abstractmethod
    def create(self, *, user: str, title: str, repo: str, branch: str = "") -> int:
        """Register a new project and return its id."""

    @abstractmethod
    def update(self, project: Project) -> None:
        """Replace a stored project record."""

    @abstractmethod
    def delete(self, project: Project) -> None:
        """Remove a project and its index entries."""

    @abstractmethod
    def list_for_user(self, user: str) -> list[Project]:
        """All projects owned by ``user`` (unordered)."""

    def require(self, project_id: int) -> Project:
        """Like ``get`` but raises ``NotFoundError`` for unknown ids."""
        project = self.get(project_id)
        if project is None:
            raise NotFoundError(f"Project {project_id} not found")
        return project


class InMemoryProjectRegistry(ProjectRegistry):
    """Process-local registry with an incrementing id counter."""

    def __init__(self) -> None:
        self._projects: dict[int, Project] = {}
        self._by_user: dict[str, set[int]] = {}
        self._by_repo: dict[str, int] = {}
        self._next_id = 0
        self._lock = threading.Lock()

    def get(self, project_id: int) -> Project | None:
        project = self._projects.get(project_id)
        return project.model_copy() if project else None

    def get_id_for_repo(self, repo: str) -> int | None:
        return self._by_repo.get(repo)

    def create(self, *, user: str, title: str, repo: str, branch: str = "") -> int:
        with self._lock:
            self._next_id += 1
            project_id = self._next_id
            self._projects[project_id] = Project(
                id=project_id, user=user, title=title, repo=repo, branch=branch,
            )
            self._by_user.setdefault(user, set()).add(project_id)
            self._by_repo[repo] = project_id
        logger.debug("Registered project %d for %s (%s)", project_id, user, repo)
        return project_id

    def update(self, project: Project) -> None:
        with self._lock:
            if project.id not in self._projects:
                raise NotFoundError(f"Project {project.id} not found")
            self._projects[project.id] = project.model_copy()

    def delete(self, project: Project) -> None:
        with self._lock:
            self._by_user.get(project.user, set()).discard(project.id)
            self._projects.pop(project.id, None)
            if self._by_repo.get(project.repo) == project.id:
                del self._by_repo[project.repo]
        logger.debug("Removed project %d", project.id)

    def list_for_user(self, user: str) -> list[Project]:
        ids = self._by_user.get(user, set())
        return [self._projects[i].model_copy() for i in ids if i in self._projects]
