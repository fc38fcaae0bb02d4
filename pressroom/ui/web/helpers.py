"""
Shared helpers for web route modules.
"""

from __future__ import annotations

from typing import Any

from flask import current_app, request

from pressroom.adapters.base import RepositoryProvider
from pressroom.adapters.registry import ProjectRegistry
from pressroom.core.models.project import Project
from pressroom.core.services.project_ops import resolve_branch


def provider() -> RepositoryProvider:
    return current_app.config["PROVIDER"]


def registry() -> ProjectRegistry:
    return current_app.config["REGISTRY"]


def project_target(project_id: int) -> tuple[Project, str]:
    """The project record and the branch to act on."""
    project = registry().require(project_id)
    return project, resolve_branch(provider(), project)


def json_body() -> dict[str, Any]:
    """Request JSON object; anything else is a 400."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object body")
    return data
