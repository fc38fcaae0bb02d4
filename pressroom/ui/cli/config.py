"""
CLI commands for the in-repository project config document.

Thin wrappers over ``pressroom.core.services.config_ops``.
"""

from __future__ import annotations

import json

import click

from pressroom.core.errors import PressroomError
from pressroom.ui.cli.helpers import fail, resolve_target


@click.group()
def config() -> None:
    """Create, inspect, edit and delete pressroom.config.json."""


@config.command()
@click.pass_context
def init(ctx: click.Context) -> None:
    """Create the config document if the repository has none."""
    from pressroom.core.services.config_ops import CONFIG_FILE_NAME, ensure_config

    provider, repo, branch = resolve_target(ctx)
    try:
        created = ensure_config(provider, repo, branch)
    except PressroomError as e:
        fail(str(e))

    if created:
        click.secho(f"✅ Created {CONFIG_FILE_NAME} in {repo}@{branch}", fg="green", bold=True)
    else:
        click.echo(f"{CONFIG_FILE_NAME} already exists in {repo}@{branch}")


@config.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def show(ctx: click.Context, as_json: bool) -> None:
    """Show collections, templates and the media folder."""
    from pressroom.core.services.config_ops import dump_config, read_config
    from pressroom.core.services.media_ops import media_folder

    provider, repo, branch = resolve_target(ctx)
    try:
        conf = read_config(provider, repo, branch)
    except PressroomError as e:
        fail(str(e))

    if as_json:
        click.echo(dump_config(conf), nl=False)
        return

    click.secho(f"📋 {repo}@{branch}", fg="cyan", bold=True)
    click.echo(f"   Media folder: {media_folder(conf) or '/'}")
    click.secho(f"   Collections: {len(conf.collections)}", bold=True)
    for c in conf.collections:
        template = f" [{c.template}]" if c.template else ""
        click.echo(f"     • {c.id}: {c.name}{template}  → {c.route}")
    click.secho(f"   Templates: {len(conf.templates)}", bold=True)
    for t in conf.templates:
        click.echo(f"     • {t.id}: {t.name} ({len(t.fields)} fields)")


@config.command("set-media-folder")
@click.argument("folder")
@click.pass_context
def set_media_folder(ctx: click.Context, folder: str) -> None:
    """Set the folder uploads go to ('/' for the repository root)."""
    from pressroom.core.services.config_ops import read_config_document, update_config

    provider, repo, branch = resolve_target(ctx)
    try:
        conf, sha = read_config_document(provider, repo, branch)
        conf.media_folder = folder
        update_config(provider, repo, branch, conf, base_sha=sha)
    except PressroomError as e:
        fail(str(e))

    click.secho(f"✅ Media folder set to {folder}", fg="green", bold=True)


@config.command("add-collection")
@click.argument("collection_id")
@click.argument("route")
@click.option("--name", default=None, help="Display name (default: the id).")
@click.option("--template", default="", help="Template id for the collection.")
@click.pass_context
def add_collection(
    ctx: click.Context,
    collection_id: str,
    route: str,
    name: str | None,
    template: str,
) -> None:
    """Declare a collection folder."""
    from pressroom.core.models.project import ProjectCollection
    from pressroom.core.services.config_ops import read_config_document, update_config

    provider, repo, branch = resolve_target(ctx)
    try:
        conf, sha = read_config_document(provider, repo, branch)
        if conf.get_collection(collection_id):
            fail(f"Collection {collection_id!r} already exists")
        conf.collections.append(ProjectCollection(
            id=collection_id, name=name or collection_id, route=route, template=template,
        ))
        update_config(provider, repo, branch, conf, base_sha=sha)
    except PressroomError as e:
        fail(str(e))

    click.secho(f"✅ Added collection {collection_id} → {route}", fg="green", bold=True)


@config.command()
@click.option("--yes", "-y", is_flag=True, help="Do not ask for confirmation.")
@click.pass_context
def delete(ctx: click.Context, yes: bool) -> None:
    """Delete the config document."""
    from pressroom.core.services.config_ops import CONFIG_FILE_NAME, delete_config

    provider, repo, branch = resolve_target(ctx)
    if not yes:
        click.confirm(f"Delete {CONFIG_FILE_NAME} from {repo}@{branch}?", abort=True)

    try:
        deleted = delete_config(provider, repo, branch)
    except PressroomError as e:
        fail(str(e))

    if deleted:
        click.secho(f"✅ Deleted {CONFIG_FILE_NAME}", fg="green", bold=True)
    else:
        click.echo(f"No {CONFIG_FILE_NAME} in {repo}@{branch}")
