"""'config:show' and 'config:set': inspect and edit saved defaults."""

from __future__ import annotations

import click
from rich.markup import escape
from rich.table import Table

from ..config import config_file
from .console import console
from .context import CliContext, pass_cli_context


@click.command()
@pass_cli_context
def config_show_command(ctx: CliContext) -> None:
    """Show the saved configuration and where it lives."""
    table = Table(title="Configuration", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    for key, value in ctx.config.model_dump().items():
        table.add_row(key, escape(str(value)) if value is not None else "[dim]-[/dim]")
    console.print(table)
    console.print(f"[dim]{escape(str(config_file()))}[/dim]")


@click.command()
@click.option("--project", "default_project", default=None, help="Default project id")
@click.option("--database-url", default=None, help="Default Realtime Database URL")
@click.option(
    "--service-account",
    "service_account_path",
    default=None,
    type=click.Path(dir_okay=False),
    help="Default service account key file",
)
@pass_cli_context
def config_set_command(
    ctx: CliContext,
    default_project: str | None,
    database_url: str | None,
    service_account_path: str | None,
) -> None:
    """Save default values for later invocations."""
    if not any((default_project, database_url, service_account_path)):
        raise click.UsageError(
            "Nothing to set; pass --project, --database-url or --service-account"
        )
    updated = ctx.config.merged(
        default_project=default_project,
        database_url=database_url,
        service_account_path=service_account_path,
    )
    path = updated.save()
    ctx.config = updated
    console.print(f"[success]✓ Configuration saved to {escape(str(path))}[/success]")
