"""
Project config API — the in-repository pressroom.config.json.

Blueprint: config_bp
Prefix: /api

Routes:
    GET    /api/projects/<id>/config  — config + sha
    POST   /api/projects/<id>/config  — create if absent
    PUT    /api/projects/<id>/config  — replace (optional base "sha")
    DELETE /api/projects/<id>/config  — delete if present
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from pressroom.core.models.project import ProjectConfig
from pressroom.core.services.config_ops import (
    delete_config,
    ensure_config,
    read_config_document,
    update_config,
)

from .helpers import json_body, project_target, provider

config_bp = Blueprint("config", __name__)


@config_bp.route("/projects/<int:project_id>/config", methods=["GET"])
def config_get(project_id: int):  # type: ignore[no-untyped-def]
    project, branch = project_target(project_id)
    conf, sha = read_config_document(provider(), project.repo, branch)
    return jsonify({"config": conf.to_document(), "sha": sha})


@config_bp.route("/projects/<int:project_id>/config", methods=["POST"])
def config_ensure(project_id: int):  # type: ignore[no-untyped-def]
    project, branch = project_target(project_id)
    created = ensure_config(provider(), project.repo, branch)
    return jsonify({"created": created}), 201 if created else 200


@config_bp.route("/projects/<int:project_id>/config", methods=["PUT"])
def config_update(project_id: int):  # type: ignore[no-untyped-def]
    """Body: ``{"config": {...}, "sha": "<base sha>"}`` (sha optional)."""
    project, branch = project_target(project_id)
    body = json_body()
    conf = ProjectConfig.model_validate(body.get("config") or {})

    new_sha = update_config(provider(), project.repo, branch, conf, base_sha=body.get("sha"))
    return jsonify({"ok": True, "sha": new_sha})


@config_bp.route("/projects/<int:project_id>/config", methods=["DELETE"])
def config_delete(project_id: int):  # type: ignore[no-untyped-def]
    project, branch = project_target(project_id)
    return jsonify({"deleted": delete_config(provider(), project.repo, branch)})
