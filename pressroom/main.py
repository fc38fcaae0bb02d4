"""
Pressroom — CLI entrypoint.

Usage:
    python -m pressroom.main --help
    python -m pressroom.main --repo owner/site collections list posts
    python -m pressroom.main config init
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from pressroom import __version__
from pressroom.adapters.base import RepositoryProvider
from pressroom.core.config.loader import ConfigError, load_settings
from pressroom.core.models.settings import Settings
from pressroom.core.observability.logging_config import resolve_level, setup_logging


def build_provider(settings: Settings) -> RepositoryProvider:
    """Construct the repository provider named in the settings."""
    if settings.provider == "mock":
        from pressroom.adapters.mock import MockProvider

        return MockProvider()

    from pressroom.adapters.github import GitHubProvider

    return GitHubProvider(timeout=settings.gh_timeout)


@click.group()
@click.version_option(version=__version__, prog_name="pressroom")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to pressroom.yml (default: auto-detect).",
)
@click.option("--repo", "-r", default=None, help="Target repository (owner/name).")
@click.option("--branch", "-b", default=None, help="Target branch (default: repository default).")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    repo: str | None,
    branch: str | None,
) -> None:
    """Pressroom — edit Git-hosted document collections."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet

    try:
        settings = load_settings(Path(config_path) if config_path else None, required=bool(config_path))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red")
        sys.exit(1)

    if repo:
        settings.repo = repo
    if branch:
        settings.branch = branch
    ctx.obj["settings"] = settings
    ctx.obj.setdefault("provider", None)

    # ── Logging setup (once, at process start) ──────────────────
    if debug:
        flag_level = "DEBUG"
    elif verbose:
        flag_level = "INFO"
    elif quiet:
        flag_level = "ERROR"
    else:
        flag_level = None

    setup_logging(
        level=resolve_level(flag_level, settings.log_level),
        quiet_third_party=not debug,
    )


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address.")
@click.option("--port", default=8000, type=int, help="Port number.")
@click.option("--user", default="local", help="Owner of the seeded project.")
@click.pass_context
def web(ctx: click.Context, host: str, port: int, user: str) -> None:
    """Start the JSON API for the configured repository."""
    from pressroom.adapters.registry import InMemoryProjectRegistry
    from pressroom.ui.web.server import create_app

    settings: Settings = ctx.obj["settings"]
    if not settings.repo:
        click.secho("❌ No repository configured (use --repo or pressroom.yml)", fg="red")
        sys.exit(1)

    provider = ctx.obj.get("provider") or build_provider(settings)
    registry = InMemoryProjectRegistry()
    project_id = registry.create(user=user, title=settings.repo, repo=settings.repo, branch=settings.branch)

    app = create_app(provider=provider, registry=registry, max_workers=settings.max_workers)

    click.secho(f"📰 Serving {settings.repo} as project {project_id}", fg="cyan", bold=True)
    click.echo(f"   http://{host}:{port}/api/projects/{project_id}/config")
    app.run(host=host, port=port, threaded=True)


# ── Register sub-command groups from pressroom/ui/cli/ ────────────

from pressroom.ui.cli.collections import collections  # noqa: E402
from pressroom.ui.cli.config import config  # noqa: E402
from pressroom.ui.cli.media import media  # noqa: E402

cli.add_command(collections)
cli.add_command(config)
cli.add_command(media)


if __name__ == "__main__":
    cli()
