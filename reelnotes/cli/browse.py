"""List CLI command for browsing annotated titles."""

import json as json_module

import click

from ..listing import ListOrdering, build_entries, order_entries
from ..store import AnnotationStore
from .core import cli, load_or_empty
from .display_helpers import format_entry


@cli.command(name="list")
@click.option(
    "--order",
    "-o",
    type=click.Choice([o.value for o in ListOrdering]),
    default=ListOrdering.USER_DEFINED.value,
    help="Ordering (user, alpha, rating-asc, rating-desc)",
)
@click.option("--format", "-f", type=click.Choice(["text", "json"]), default="text", help="Output format")
@click.pass_context
def list_entries(ctx: click.Context, order: str, format: str) -> None:
    """List annotated movies and series together.

    The user order is the order titles were added in.
    """
    store: AnnotationStore = ctx.obj["store"]
    collection = load_or_empty(store)
    entries = order_entries(build_entries(collection.productions()), ListOrdering(order))

    if format == "json":
        click.echo(
            json_module.dumps(
                [
                    {
                        "kind": e.entry_id.kind.value,
                        "id": e.entry_id.id,
                        "name": e.name,
                        "poster_path": e.poster_path,
                        "rating": e.rating,
                    }
                    for e in entries
                ],
                indent=2,
            )
        )
        return

    if not entries:
        click.echo("No annotated titles yet.")
        return

    click.echo(f"\n{len(entries)} titles:\n")
    for i, entry in enumerate(entries, 1):
        click.echo(f"  {i}. {format_entry(entry)}")
    click.echo()
