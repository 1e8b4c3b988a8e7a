"""'firestore:query' and 'firestore:list': Cloud Firestore commands."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from ..actions.query import run_firestore_query
from ..backends.firestore import list_collections
from ..query.syntax import parse_query
from .context import CliContext, pass_cli_context
from .options import output_options, query_options
from .render import dump_json, emit, render_collections, write_json

EPILOG = """
\b
Examples:
  Collection queries (odd number of path segments):
    firebase-tools-cli firestore:query users
    firebase-tools-cli firestore:query users user1 posts
    firebase-tools-cli firestore:query users --where "age,>=,18" --limit 10

\b
  Document reads (even number of path segments):
    firebase-tools-cli firestore:query users user1
    firebase-tools-cli firestore:query users user1 --field profile.settings

\b
  Array fields filtered in memory:
    firebase-tools-cli firestore:query posts post1 --field comments \\
      --where "rating,>=,4" --order-by "timestamp,desc"
"""


@click.command(epilog=EPILOG)
@click.argument("collection")
@click.argument("segments", nargs=-1)
@query_options
@click.option(
    "-f",
    "--field",
    default=None,
    metavar="FIELD_PATH",
    help='Show one field of a document (e.g., "pages" or "pages.0.title")',
)
@output_options
@pass_cli_context
def firestore_query_command(
    ctx: CliContext,
    collection: str,
    segments: tuple[str, ...],
    where: str | None,
    order_by: str | None,
    limit: str | None,
    field: str | None,
    as_json: bool,
    output: str | None,
) -> None:
    """Query a collection or fetch a specific document."""
    descriptor = parse_query(where=where, order_by=order_by, limit=limit)
    with ctx.connect() as connection:
        envelope = run_firestore_query(
            connection, [collection, *segments], descriptor, field=field
        )
    emit(envelope, as_json=as_json, output=output)


@click.command()
@output_options
@pass_cli_context
def firestore_list_command(ctx: CliContext, as_json: bool, output: str | None) -> None:
    """List root collections with document counts."""
    with ctx.connect() as connection:
        collections = list_collections(connection.firestore())
        project = connection.project_id

    payload = {
        "project": project,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {"totalCollections": len(collections)},
        "collections": collections,
    }
    if output:
        write_json(payload, output)
    if as_json:
        click.echo(dump_json(payload))
    elif not output:
        render_collections(collections)
