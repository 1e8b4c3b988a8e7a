"""firebase-tools-cli: query Firestore and the Realtime Database."""

from __future__ import annotations

import logging
from typing import Any

import click
from rich.logging import RichHandler

from .. import __version__
from ..config import CliConfig
from ..exceptions import FirebaseToolsError, QueryValidationError
from .console import err_console, print_error
from .context import CliContext

logger = logging.getLogger("firebase_tools_cli.cli")


def configure_logging(verbose: bool) -> None:
    """Route package logs through Rich on stderr; DEBUG when verbose."""
    package_logger = logging.getLogger("firebase_tools_cli")
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
    handler = RichHandler(
        console=err_console,
        show_time=False,
        show_path=False,
        rich_tracebacks=verbose,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


class FirebaseToolsCLI(click.Group):
    """Click group that reports package errors instead of tracebacks."""

    def invoke(self, ctx: click.Context) -> Any:
        try:
            return super().invoke(ctx)
        except QueryValidationError as e:
            print_error("Invalid query", e)
            ctx.exit(1)
        except FirebaseToolsError as e:
            logger.debug("Command failed", exc_info=True)
            print_error("Command failed", e)
            ctx.exit(1)


@click.group(cls=FirebaseToolsCLI)
@click.version_option(__version__, prog_name="firebase-tools-cli")
@click.option(
    "--service-account",
    envvar="GOOGLE_APPLICATION_CREDENTIALS",
    type=click.Path(dir_okay=False),
    default=None,
    help="Path to a service account key file",
)
@click.option(
    "--project",
    envvar="FIREBASE_PROJECT",
    default=None,
    help="Google Cloud project id",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(
    ctx: click.Context,
    service_account: str | None,
    project: str | None,
    verbose: bool,
) -> None:
    """CLI tool for Firebase Firestore, Realtime Database and Remote Config."""
    configure_logging(verbose)
    ctx.obj = CliContext(
        service_account=service_account,
        project=project,
        config=CliConfig.load(),
    )


# Import and register commands
from .config import config_set_command, config_show_command  # noqa: E402
from .firestore import firestore_list_command, firestore_query_command  # noqa: E402
from .remote_config import remote_config_convert_command  # noqa: E402
from .rtdb import rtdb_list_command, rtdb_query_command  # noqa: E402

cli.add_command(firestore_query_command, name="firestore:query")
cli.add_command(firestore_list_command, name="firestore:list")
cli.add_command(rtdb_query_command, name="rtdb:query")
cli.add_command(rtdb_list_command, name="rtdb:list")
cli.add_command(remote_config_convert_command, name="remote-config:convert")
cli.add_command(config_show_command, name="config:show")
cli.add_command(config_set_command, name="config:set")


def main() -> None:
    cli(prog_name="firebase-tools-cli")
