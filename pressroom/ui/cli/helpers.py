"""
Shared helpers for CLI command groups.
"""

from __future__ import annotations

import sys
from typing import NoReturn

import click

from pressroom.adapters.base import RepositoryProvider
from pressroom.core.models.settings import Settings


def resolve_target(ctx: click.Context) -> tuple[RepositoryProvider, str, str]:
    """Provider, repository and branch the command should act on."""
    settings: Settings = ctx.obj["settings"]
    if not settings.repo:
        fail("No repository configured (use --repo or pressroom.yml)")

    provider = ctx.obj.get("provider")
    if provider is None:
        from pressroom.main import build_provider

        provider = build_provider(settings)
        ctx.obj["provider"] = provider

    branch = settings.branch or provider.get_default_branch(settings.repo)
    return provider, settings.repo, branch


def fail(message: str) -> NoReturn:
    click.secho(f"❌ {message}", fg="red")
    sys.exit(1)
