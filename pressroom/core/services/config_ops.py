"""
Project config lifecycle — the ``pressroom.config.json`` document.

The config document lives in the project repository and is re-read on
every operation; the remote copy is always authoritative.

    ABSENT ──ensure──▶ CREATED ──read/update──▶ ... ──delete──▶ ABSENT

Create and delete commits carry a ``[skip ci]`` marker so downstream
automation ignores them.
"""

from __future__ import annotations

import json
import logging

from pydantic import ValidationError

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.errors import ConfigDocumentError
from pressroom.core.models.project import ProjectConfig

logger = logging.getLogger(__name__)

CONFIG_FILE_NAME = "pressroom.config.json"
CONFIG_FILE_TEMPLATE = """{
  "collections": [],
  "templates": []
}
"""

SKIP_CI = "[skip ci]"


def _message(verb: str) -> str:
    return f"{SKIP_CI} {verb} config file for Pressroom"


def default_config() -> ProjectConfig:
    return ProjectConfig()


def ensure_config(provider: RepositoryProvider, repo: str, branch: str) -> bool:
    """Create the config document if it does not exist.

    Returns:
        True if the document was written, False if it was already there.
    """
    existing = provider.get_blob(repo, branch, CONFIG_FILE_NAME)
    if existing is not None:
        logger.debug("Config file already present in %s@%s", repo, branch)
        return False

    provider.put_blob(
        repo, branch, CONFIG_FILE_NAME, CONFIG_FILE_TEMPLATE, _message("Create"), sha=None,
    )
    logger.info("Created %s in %s@%s", CONFIG_FILE_NAME, repo, branch)
    return True


def read_config_document(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
) -> tuple[ProjectConfig, str | None]:
    """Read the config document and its blob sha.

    Returns:
        (config, sha). ``sha`` is None when the document does not exist,
        in which case ``config`` is the default structure.

    Raises:
        ConfigDocumentError: If the document is not valid JSON or does
            not have the expected shape.
    """
    blob = provider.get_blob(repo, branch, CONFIG_FILE_NAME)
    if blob is None:
        return default_config(), None

    try:
        data = json.loads(blob.content or CONFIG_FILE_TEMPLATE)
    except json.JSONDecodeError as e:
        raise ConfigDocumentError(f"Invalid JSON in {CONFIG_FILE_NAME}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigDocumentError(
            f"Expected a JSON object in {CONFIG_FILE_NAME}, got {type(data).__name__}"
        )

    try:
        return ProjectConfig.model_validate(data), blob.sha
    except ValidationError as e:
        raise ConfigDocumentError(f"Invalid project configuration: {e}") from e


def read_config(provider: RepositoryProvider, repo: str, branch: str) -> ProjectConfig:
    """Read the project config; a missing document reads as the default."""
    config, _sha = read_config_document(provider, repo, branch)
    return config


def dump_config(config: ProjectConfig) -> str:
    """On-disk JSON text of a config (2-space indent, trailing newline)."""
    return json.dumps(config.to_document(), indent=2, ensure_ascii=False) + "\n"


def update_config(
    provider: RepositoryProvider,
    repo: str,
    branch: str,
    config: ProjectConfig,
    *,
    base_sha: str | None = None,
) -> str:
    """Replace the config document.

    Args:
        base_sha: Sha the caller last read. When omitted, the current sha
            is fetched right before writing.

    Returns:
        The new blob sha of the document.

    Raises:
        ConflictError: If the document changed since ``base_sha``.
    """
    if base_sha is None:
        current = provider.get_blob(repo, branch, CONFIG_FILE_NAME)
        base_sha = current.sha if current else None

    new_sha = provider.put_blob(
        repo, branch, CONFIG_FILE_NAME, dump_config(config), _message("Update"), sha=base_sha,
    )
    logger.info("Updated %s in %s@%s", CONFIG_FILE_NAME, repo, branch)
    return new_sha


def delete_config(provider: RepositoryProvider, repo: str, branch: str) -> bool:
    """Delete the config document. Returns False if there was none."""
    current = provider.get_blob(repo, branch, CONFIG_FILE_NAME)
    if current is None:
        return False

    provider.delete_blob(repo, branch, CONFIG_FILE_NAME, _message("Delete"), sha=current.sha)
    logger.info("Deleted %s from %s@%s", CONFIG_FILE_NAME, repo, branch)
    return True
