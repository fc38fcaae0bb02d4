"""
CLI commands for document collections.

Thin wrappers over ``pressroom.core.services.collection_loader`` and
``collection_order``.
"""

from __future__ import annotations

import json

import click

from pressroom.core.errors import PressroomError
from pressroom.ui.cli.helpers import fail, resolve_target


@click.group()
def collections() -> None:
    """List and reorder document collections."""


@collections.command("list")
@click.argument("route")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def list_cmd(ctx: click.Context, route: str, as_json: bool) -> None:
    """List the documents of a collection folder in order."""
    from pressroom.core.services.collection_loader import load_collection

    provider, repo, branch = resolve_target(ctx)
    try:
        documents = load_collection(
            provider, repo, branch, route, max_workers=ctx.obj["settings"].max_workers,
        )
    except PressroomError as e:
        fail(str(e))

    if as_json:
        click.echo(json.dumps([d.model_dump(mode="json") for d in documents], indent=2))
        return

    if not documents:
        click.echo(f"No documents in {route}")
        return

    click.secho(f"📚 {route} ({len(documents)} documents)", fg="cyan", bold=True)
    for doc in documents:
        order = doc.attributes.get("order", "-")
        click.echo(f"   {order!s:>3}  {doc.title}  → {doc.path}")


@collections.command()
@click.argument("route")
@click.argument("paths", nargs=-1, required=True)
@click.pass_context
def reorder(ctx: click.Context, route: str, paths: tuple[str, ...]) -> None:
    """Commit a new order for a collection.

    PATHS must list every document of the collection, in the new order.
    """
    from pressroom.core.services.collection_loader import load_collection
    from pressroom.core.services.collection_order import reorder as reorder_collection

    provider, repo, branch = resolve_target(ctx)
    try:
        documents = load_collection(
            provider, repo, branch, route, max_workers=ctx.obj["settings"].max_workers,
        )
        by_path = {doc.path: doc for doc in documents}
        if sorted(paths) != sorted(by_path):
            fail(f"PATHS must be exactly the {len(by_path)} documents of {route}")
        result = reorder_collection(provider, repo, branch, route, [by_path[p] for p in paths])
    except PressroomError as e:
        fail(str(e))

    click.secho(f"✅ {result.message}", fg="green", bold=True)
    click.echo(f"   Commit: {result.sha[:7]}")
