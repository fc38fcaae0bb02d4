"""
CLI commands for the media folder.
"""

from __future__ import annotations

import json

import click

from pressroom.core.errors import PressroomError
from pressroom.ui.cli.helpers import fail, resolve_target


@click.group()
def media() -> None:
    """Inspect and move media files."""


@media.command("list")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, as_json: bool) -> None:
    """List files in the configured media folder."""
    from pressroom.core.services.config_ops import read_config
    from pressroom.core.services.media_ops import list_media, media_folder

    provider, repo, branch = resolve_target(ctx)
    try:
        folder = media_folder(read_config(provider, repo, branch))
        items = list_media(provider.get_tree(repo, branch), folder)
    except PressroomError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps([i.model_dump(mode="json") for i in items], indent=2))
        return

    click.secho(f"🖼  {folder or 'root folder'} ({len(items)} files)", fg="cyan", bold=True)
    for item in items:
        click.echo(f"   {item.sha[:7]}  {item.path}")


@media.command()
@click.argument("path")
@click.argument("folder")
@click.pass_context
def move(ctx: click.Context, path: str, folder: str) -> None:
    """Move a file into another folder."""
    from pressroom.core.services.media_ops import move_file

    provider, repo, branch = resolve_target(ctx)
    try:
        blob = provider.get_blob(repo, branch, path)
        if blob is None:
            fail(f"{path} not found")
        result = move_file(provider, repo, branch, path, blob.sha, folder)
    except (PressroomError, ValueError) as e:
        fail(str(e))

    click.secho(f"✅ {result.message}", fg="green", bold=True)
