"""
Web API server — Flask app factory.

Creates the Flask application exposing collections, the project config
document and the media folder as a JSON API. The provider and the
project registry are passed in explicitly; nothing is module-global.
"""

from __future__ import annotations

import logging

from flask import Flask, jsonify
from pydantic import ValidationError

from pressroom.adapters.base import RepositoryProvider
from pressroom.adapters.registry import ProjectRegistry
from pressroom.core.errors import (
    ConfigDocumentError,
    ConflictError,
    NotFoundError,
    PressroomError,
    ProviderError,
)

logger = logging.getLogger(__name__)

_STATUS_BY_ERROR: list[tuple[type[Exception], int]] = [
    (NotFoundError, 404),
    (ConflictError, 409),
    (ConfigDocumentError, 422),
    (ProviderError, 502),
]


def create_app(
    provider: RepositoryProvider,
    registry: ProjectRegistry,
    max_workers: int | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        provider: Repository provider used by every request.
        registry: Project registry resolving project ids.
        max_workers: Concurrent blob fetches per collection load.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__)

    app.config["PROVIDER"] = provider
    app.config["REGISTRY"] = registry
    app.config["MAX_WORKERS"] = max_workers

    from pressroom.ui.web.routes_collections import collections_bp
    from pressroom.ui.web.routes_config import config_bp
    from pressroom.ui.web.routes_media import media_bp
    from pressroom.ui.web.routes_projects import projects_bp

    app.register_blueprint(projects_bp, url_prefix="/api")
    app.register_blueprint(collections_bp, url_prefix="/api")
    app.register_blueprint(config_bp, url_prefix="/api")
    app.register_blueprint(media_bp, url_prefix="/api")

    @app.errorhandler(PressroomError)
    def _pressroom_error(e: PressroomError):  # type: ignore[no-untyped-def]
        for error_type, status in _STATUS_BY_ERROR:
            if isinstance(e, error_type):
                break
        else:
            status = 500
        if status >= 500:
            logger.error("Request failed: %s", e)
        return jsonify({"error": str(e)}), status

    @app.errorhandler(ValidationError)
    def _validation_error(e: ValidationError):  # type: ignore[no-untyped-def]
        details = e.errors(include_url=False, include_context=False)
        return jsonify({"error": "Invalid request body", "details": details}), 400

    @app.errorhandler(ValueError)
    def _value_error(e: ValueError):  # type: ignore[no-untyped-def]
        return jsonify({"error": str(e)}), 400

    logger.info("Web API created (provider=%s)", provider.name)
    return app
