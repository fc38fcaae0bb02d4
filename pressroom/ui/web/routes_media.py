"""
Media folder API.

Blueprint: media_bp
Prefix: /api

Routes:
    GET    /api/projects/<id>/media  — files in the media folder
    PUT    /api/projects/<id>/media  — move or rename a file
    DELETE /api/projects/<id>/media  — delete a file
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from pressroom.core.services.config_ops import read_config
from pressroom.core.services.file_ops import delete_file
from pressroom.core.services.media_ops import list_media, media_folder, move_file, rename_media

from .helpers import json_body, project_target, provider

media_bp = Blueprint("media", __name__)


@media_bp.route("/projects/<int:project_id>/media", methods=["GET"])
def media_list(project_id: int):  # type: ignore[no-untyped-def]
    project, branch = project_target(project_id)
    folder = media_folder(read_config(provider(), project.repo, branch))
    items = list_media(provider().get_tree(project.repo, branch), folder)
    return jsonify({
        "folder": folder,
        "branch": branch,
        "files": [i.model_dump(mode="json") for i in items],
    })


@media_bp.route("/projects/<int:project_id>/media", methods=["PUT"])
def media_move(project_id: int):  # type: ignore[no-untyped-def]
    """Body: ``{"path", "sha", "operation": "move"|"rename", "folder"|"name"}``."""
    project, branch = project_target(project_id)
    body = json_body()
    path, sha = body.get("path"), body.get("sha")
    if not path or not sha:
        raise ValueError("'path' and 'sha' are required")

    operation = body.get("operation")
    if operation == "move":
        result = move_file(provider(), project.repo, branch, path, sha, body.get("folder", ""))
    elif operation == "rename":
        result = rename_media(provider(), project.repo, branch, path, sha, body.get("name", ""))
    else:
        raise ValueError(f"Unknown operation: {operation!r}")

    return jsonify({"ok": True, "commit": result.model_dump(mode="json")})


@media_bp.route("/projects/<int:project_id>/media", methods=["DELETE"])
def media_delete(project_id: int):  # type: ignore[no-untyped-def]
    """Body: ``{"path", "sha"}`` (sha optional)."""
    project, branch = project_target(project_id)
    body = json_body()
    path = body.get("path")
    if not path:
        raise ValueError("'path' is required")

    delete_file(provider(), project.repo, branch, path, sha=body.get("sha"))
    return jsonify({"ok": True})
