"""
Collections API.

Blueprint: collections_bp
Prefix: /api

Routes:
    GET /api/projects/<id>/collections/<cid>        — ordered documents
    PUT /api/projects/<id>/collections/<cid>/order  — commit a new order
"""

from __future__ import annotations

import logging

from flask import Blueprint, current_app, jsonify

from pressroom.core.errors import NotFoundError
from pressroom.core.models.document import Document
from pressroom.core.models.project import ProjectCollection
from pressroom.core.services.collection_loader import load_collection
from pressroom.core.services.collection_order import reorder
from pressroom.core.services.config_ops import read_config

from .helpers import json_body, project_target, provider

logger = logging.getLogger(__name__)

collections_bp = Blueprint("collections", __name__)


def _collection(repo: str, branch: str, collection_id: str) -> ProjectCollection:
    collection = read_config(provider(), repo, branch).get_collection(collection_id)
    if collection is None:
        raise NotFoundError(f"Collection {collection_id!r} is not configured for {repo}")
    return collection


@collections_bp.route("/projects/<int:project_id>/collections/<collection_id>")
def collection_documents(project_id: int, collection_id: str):  # type: ignore[no-untyped-def]
    """Documents of one collection, sorted by order."""
    project, branch = project_target(project_id)
    collection = _collection(project.repo, branch, collection_id)

    documents = load_collection(
        provider(), project.repo, branch, collection.route,
        max_workers=current_app.config.get("MAX_WORKERS"),
    )
    return jsonify({
        "collection": collection.model_dump(mode="json"),
        "branch": branch,
        "documents": [d.model_dump(mode="json") for d in documents],
    })


@collections_bp.route("/projects/<int:project_id>/collections/<collection_id>/order", methods=["PUT"])
def collection_order(project_id: int, collection_id: str):  # type: ignore[no-untyped-def]
    """Commit the order of the submitted document list.

    Body: ``{"documents": [<document>, ...]}`` — the whole collection in
    its new order.
    """
    project, branch = project_target(project_id)
    collection = _collection(project.repo, branch, collection_id)

    raw = json_body().get("documents")
    if not isinstance(raw, list):
        raise ValueError("'documents' must be a list")
    documents = [Document.model_validate(d) for d in raw]

    result = reorder(provider(), project.repo, branch, collection.route, documents)
    return jsonify({"ok": True, "commit": result.model_dump(mode="json")})
