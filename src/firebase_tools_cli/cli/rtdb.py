"""'rtdb:query' and 'rtdb:list': Realtime Database commands."""

from __future__ import annotations

from datetime import datetime, timezone

import click

from ..actions.query import run_rtdb_query
from ..backends.rtdb import count_nodes, read_tree, summarize_nodes
from ..query.syntax import parse_query
from .console import console, print_warning
from .context import CliContext, pass_cli_context
from .options import output_options, query_options
from .render import dump_json, emit, render_nodes, write_json

database_url_option = click.option(
    "--database-url",
    envvar="FIREBASE_DATABASE_URL",
    default=None,
    help="Realtime Database URL (https://<name>.firebaseio.com)",
)


@click.command()
@click.argument("path")
@query_options
@output_options
@database_url_option
@pass_cli_context
def rtdb_query_command(
    ctx: CliContext,
    path: str,
    where: str | None,
    order_by: str | None,
    limit: str | None,
    as_json: bool,
    output: str | None,
    database_url: str | None,
) -> None:
    """Query Realtime Database data at PATH."""
    descriptor = parse_query(where=where, order_by=order_by, limit=limit)
    with ctx.connect(database_url=database_url) as connection:
        envelope = run_rtdb_query(connection, path, descriptor)
    emit(envelope, as_json=as_json, output=output)


@click.command()
@output_options
@database_url_option
@pass_cli_context
def rtdb_list_command(
    ctx: CliContext,
    as_json: bool,
    output: str | None,
    database_url: str | None,
) -> None:
    """List top-level nodes of the Realtime Database."""
    with ctx.connect(database_url=database_url) as connection:
        data = read_tree(connection.reference)
        database = connection.database_url

    if not data:
        print_warning("No data found in Realtime Database")
        return

    nodes = summarize_nodes(data)
    total = count_nodes(data)
    payload = {
        "database": database,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "summary": {
            "totalTopLevelNodes": len(nodes),
            "totalNodes": total,
        },
        "nodes": nodes,
    }
    if output:
        write_json(payload, output)
    if as_json:
        click.echo(dump_json(payload))
    elif not output:
        render_nodes(nodes)
        console.print("[info]Database Summary[/info]")
        console.print(f"   [dim]└──[/dim] Total top-level nodes: {len(nodes)}")
        console.print(f"   [dim]└──[/dim] Total nodes (including nested): {total}")
        console.print(f"   [dim]└──[/dim] Database URL: {database}")
