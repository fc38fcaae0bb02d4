"""
Projects API — registry records and their setup/teardown.

Blueprint: projects_bp
Prefix: /api

Routes:
    GET    /api/users/<user>/projects  — projects sorted by title
    POST   /api/projects               — register + create config document
    GET    /api/projects/<id>          — one project
    DELETE /api/projects/<id>          — delete config document + record
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from pressroom.core.services.project_ops import setup_project, teardown_project, user_projects

from .helpers import json_body, provider, registry

projects_bp = Blueprint("projects", __name__)


@projects_bp.route("/users/<user>/projects")
def projects_for_user(user: str):  # type: ignore[no-untyped-def]
    projects = user_projects(registry(), user)
    return jsonify({"projects": [p.model_dump(mode="json") for p in projects]})


@projects_bp.route("/projects", methods=["POST"])
def project_create():  # type: ignore[no-untyped-def]
    """Body: ``{"user", "title", "repo", "branch"?}``."""
    body = json_body()
    missing = [k for k in ("user", "title", "repo") if not body.get(k)]
    if missing:
        raise ValueError(f"Missing field(s): {', '.join(missing)}")

    project = setup_project(
        registry(), provider(),
        user=body["user"], title=body["title"], repo=body["repo"], branch=body.get("branch", ""),
    )
    return jsonify({"project": project.model_dump(mode="json")}), 201


@projects_bp.route("/projects/<int:project_id>")
def project_get(project_id: int):  # type: ignore[no-untyped-def]
    return jsonify({"project": registry().require(project_id).model_dump(mode="json")})


@projects_bp.route("/projects/<int:project_id>", methods=["DELETE"])
def project_delete(project_id: int):  # type: ignore[no-untyped-def]
    project = registry().require(project_id)
    teardown_project(registry(), provider(), project)
    return jsonify({"ok": True})
