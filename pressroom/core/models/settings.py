"""
Settings model — local tool configuration loaded from pressroom.yml.

This configures the tool itself (which host, which repository). The
per-project content configuration lives in the repository as
``pressroom.config.json`` and is modeled by ``ProjectConfig``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field


class Settings(BaseModel):
    """Contents of pressroom.yml."""

    provider: Literal["github", "mock"] = "github"
    repo: str = ""                  # "owner/name"
    branch: str = ""                # empty = repository default branch
    log_level: str | None = None
    max_workers: int | None = Field(default=None, ge=1)
    gh_timeout: int = Field(default=30, ge=1)
