"""Human-readable rendering and file output for command results."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Any

import click
from rich.markup import escape
from rich.table import Table

from .console import console

if TYPE_CHECKING:
    from ..query.envelope import ResultEnvelope

MAX_RECORDS = 10
MAX_FIELDS = 5
MAX_VALUE_LENGTH = 50


def display_value(value: Any) -> str:
    """Short one-line form of a value."""
    if isinstance(value, Mapping):
        return f"[Object with {len(value)} keys]"
    if isinstance(value, list):
        return f"[Array with {len(value)} items]"
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    text = str(value)
    if len(text) > MAX_VALUE_LENGTH:
        return f"{text[:MAX_VALUE_LENGTH]}..."
    return text


def _print_fields(fields: Mapping[str, Any]) -> None:
    items = list(fields.items())
    for name, value in items[:MAX_FIELDS]:
        console.print(f"   [dim]└──[/dim] {escape(str(name))}: {escape(display_value(value))}")
    if len(items) > MAX_FIELDS:
        console.print(f"   [dim]└── ... and {len(items) - MAX_FIELDS} more fields[/dim]")


def _print_record(label: str, record: Any) -> None:
    console.print(f"[key]{escape(label)}[/key]")
    if isinstance(record, Mapping):
        _print_fields(record)
    else:
        console.print(f"   [dim]└──[/dim] {escape(display_value(record))}")


def _is_document(value: Any) -> bool:
    return isinstance(value, Mapping) and "id" in value and "data" in value


def _records(results: Any) -> list[tuple[str, Any]]:
    if isinstance(results, Mapping):
        return [(str(k), v) for k, v in results.items()]
    entries: list[tuple[str, Any]] = []
    for index, record in enumerate(results):
        # Firestore documents carry their id beside the field data
        if _is_document(record):
            entries.append((str(record["id"]), record["data"]))
        else:
            entries.append((str(index), record))
    return entries


def render_results(envelope: ResultEnvelope) -> None:
    """Print at most ``MAX_RECORDS`` records, then the query summary."""
    results = envelope.results
    if results is None or (isinstance(results, Mapping | list) and not results):
        console.print(f"[warning]No data found at {escape(envelope.path)}[/warning]")
    elif envelope.summary.is_primitive:
        console.print(f"[key]Value:[/key] {escape(display_value(results))}")
    elif _is_document(results):
        _print_record(str(results["id"]), results["data"])
    else:
        entries = _records(results)
        console.print(f"[success]✓ Found {len(entries)} result(s)[/success]\n")
        for label, record in entries[:MAX_RECORDS]:
            _print_record(label, record)
        if len(entries) > MAX_RECORDS:
            console.print(f"[dim]... and {len(entries) - MAX_RECORDS} more results[/dim]")
    console.print()
    render_summary(envelope)


def render_summary(envelope: ResultEnvelope) -> None:
    table = Table(title="Query Summary", show_header=False, border_style="dim")
    table.add_column("Key", style="info")
    table.add_column("Value")
    table.add_row("Database", escape(envelope.database or "-"))
    table.add_row("Path", escape(envelope.path))
    table.add_row("Total results", str(envelope.summary.total_results))
    if envelope.query.where:
        table.add_row("Where", escape(envelope.query.where))
    if envelope.query.order_by:
        table.add_row("Order by", escape(envelope.query.order_by))
    if envelope.query.limit is not None:
        table.add_row("Limit", str(envelope.query.limit))
    console.print(table)


def dump_json(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False)


def output_path(name: str) -> Path:
    """``.json`` is appended when the name lacks it."""
    return Path(name if name.endswith(".json") else f"{name}.json")


def write_json(payload: Any, name: str) -> Path:
    """Write *payload* as indented JSON and report the file size."""
    path = output_path(name)
    path.write_text(dump_json(payload), encoding="utf-8")
    size_kb = path.stat().st_size / 1024
    console.print(f"[success]✓ Saved to {escape(str(path))}[/success]")
    console.print(f"   [dim]└── File size: {size_kb:.2f} KB[/dim]")
    return path


def emit(
    envelope: ResultEnvelope,
    *,
    as_json: bool = False,
    output: str | None = None,
) -> None:
    """Route an envelope to a file, stdout as JSON, or the rich renderer."""
    if output:
        write_json(envelope.to_dict(), output)
    if as_json:
        click.echo(envelope.to_json())
    elif not output:
        render_results(envelope)


def render_nodes(nodes: list[dict[str, Any]]) -> None:
    for node in nodes:
        console.print(f"[key]{escape(node['name'])}[/key]")
        if node["type"] == "object":
            console.print(f"   [dim]└──[/dim] Children: {node['childCount']}")
            if node["sampleKeys"]:
                more = "..." if node.get("hasMoreKeys") else ""
                sample = ", ".join(node["sampleKeys"])
                console.print(f"   [dim]└──[/dim] Sample keys: {escape(sample)}{more}")
        else:
            more = "..." if node.get("truncated") else ""
            console.print(f"   [dim]└──[/dim] Type: {node['type']}")
            console.print(f"   [dim]└──[/dim] Value: {escape(node['value'])}{more}")
        console.print()


def render_collections(collections: list[dict[str, Any]]) -> None:
    console.print(f"[info]Found {len(collections)} collections[/info]\n")
    for summary in collections:
        console.print(f"[key]{escape(summary['name'])}[/key]")
        console.print(f"   [dim]└──[/dim] Documents: {summary['documentCount']}")
        if summary["sampleFields"]:
            more = "..." if summary["hasMoreFields"] else ""
            fields = ", ".join(summary["sampleFields"])
            console.print(f"   [dim]└──[/dim] Sample fields: {escape(fields)}{more}")
        console.print()
