"""Reusable click options shared by the query commands."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, TypeVar

import click

F = TypeVar("F", bound=Callable[..., Any])


def query_options(func: F) -> F:
    """Add ``--where`` / ``--order-by`` / ``--limit``."""
    func = click.option(
        "-l",
        "--limit",
        type=str,
        default=None,
        help="Limit number of results",
    )(func)
    func = click.option(
        "-o",
        "--order-by",
        "order_by",
        default=None,
        metavar="FIELD[,DIRECTION]",
        help='Order by field (e.g., "name,asc")',
    )(func)
    func = click.option(
        "-w",
        "--where",
        default=None,
        metavar="FIELD,OPERATOR,VALUE",
        help='Where clause (e.g., "age,>=,18")',
    )(func)
    return func


def output_options(func: F) -> F:
    """Add ``--json`` / ``--output``."""
    func = click.option(
        "--output",
        default=None,
        metavar="FILE",
        help="Save JSON output to file",
    )(func)
    func = click.option(
        "--json", "as_json", is_flag=True, help="Output results as JSON"
    )(func)
    return func

