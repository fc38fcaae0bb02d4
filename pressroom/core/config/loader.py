"""
Settings loader — reads pressroom.yml into the Settings model.

It reads YAML, validates against the Pydantic schema, and returns a
typed Settings object. The file is optional for commands that get the
repository from the command line.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from pressroom.core.models.settings import Settings

logger = logging.getLogger(__name__)

# Default settings filename
SETTINGS_FILE = "pressroom.yml"


class ConfigError(Exception):
    """Raised when pressroom.yml is invalid or missing."""


def find_settings_file(start_dir: Path | None = None) -> Path | None:
    """Search for pressroom.yml starting from the given directory, walking up.

    Args:
        start_dir: Directory to start searching from (default: cwd).

    Returns:
        Path to pressroom.yml, or None if not found.
    """
    current = (start_dir or Path.cwd()).resolve()

    for _ in range(20):  # safety limit
        candidate = current / SETTINGS_FILE
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            break  # filesystem root
        current = parent

    return None


def load_settings(path: Path | None = None, *, required: bool = True) -> Settings:
    """Load and validate pressroom.yml.

    Args:
        path: Explicit path to pressroom.yml. If None, searches upward.
        required: If False, a missing file yields default settings.

    Returns:
        Validated Settings model.

    Raises:
        ConfigError: If the file is missing (and required) or invalid.
    """
    if path is None:
        path = find_settings_file()

    if path is None:
        if not required:
            return Settings()
        raise ConfigError(
            f"No {SETTINGS_FILE} found. Create one or pass --config / --repo."
        )

    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    logger.debug("Loading settings from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")

    # The YAML may wrap everything under a "pressroom" key or be flat
    data = data.get("pressroom", data)

    try:
        settings = Settings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings: {e}") from e

    logger.info("Loaded settings for %s (provider=%s)", settings.repo or "?", settings.provider)
    return settings
