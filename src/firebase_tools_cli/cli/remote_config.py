"""'remote-config:convert': turn a JSON file into a Remote Config template."""

from __future__ import annotations

import json
from pathlib import Path

import click
from rich.markup import escape

from ..actions.remote_config import (
    DEFAULT_USER_EMAIL,
    convert_to_remote_config,
    default_output_name,
)
from ..exceptions import ConfigurationError
from .console import console
from .render import write_json


@click.command()
@click.argument("file", type=click.Path(dir_okay=False, path_type=Path))
@click.option("-o", "--output", default=None, metavar="FILE", help="Output file name")
@click.option(
    "--version-number", default="1", show_default=True, help="Template version number"
)
@click.option(
    "--user-email",
    default=DEFAULT_USER_EMAIL,
    show_default=True,
    help="User email recorded in the version block",
)
@click.option("--description", default=None, help="Description prefix for parameters")
@click.option(
    "--add-conditions", is_flag=True, help="Add default iOS/Android conditions"
)
def remote_config_convert_command(
    file: Path,
    output: str | None,
    version_number: str,
    user_email: str,
    description: str | None,
    add_conditions: bool,
) -> None:
    """Convert a JSON FILE to Firebase Remote Config format."""
    if not file.exists():
        raise ConfigurationError(f"Input file not found: {file}")
    try:
        data = json.loads(file.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Invalid JSON file {file}: {e}") from e

    template = convert_to_remote_config(
        data,
        version_number=version_number,
        user_email=user_email,
        description=description,
        add_conditions=add_conditions,
    )

    console.print(f"[info]Converting {escape(str(file))} to Remote Config format[/info]")
    for key, parameter in template["parameters"].items():
        console.print(f"   [dim]└──[/dim] {escape(key)}: {parameter['valueType']}")

    write_json(template, output or default_output_name())
    console.print(f"   [dim]└──[/dim] Parameters converted: {len(template['parameters'])}")
    console.print(f"   [dim]└──[/dim] Conditions added: {len(template['conditions'])}")
