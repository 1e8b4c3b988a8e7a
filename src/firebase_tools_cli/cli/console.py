"""Shared Rich consoles for CLI output."""

from __future__ import annotations

from typing import TYPE_CHECKING

from rich.console import Console
from rich.markup import escape
from rich.theme import Theme

if TYPE_CHECKING:
    from ..exceptions import FirebaseToolsError

THEME = Theme({
    "info": "cyan",
    "success": "bold green",
    "warning": "bold yellow",
    "error": "bold red",
    "key": "bold white",
    "dim": "dim",
})

console = Console(theme=THEME)
err_console = Console(theme=THEME, stderr=True, soft_wrap=True)


def print_error(title: str, error: FirebaseToolsError) -> None:
    """Print a failure and any remediation hints attached to it."""
    err_console.print(f"[error]✗ {escape(title)}:[/error] {escape(str(error))}")
    hints = getattr(error, "hints", None)
    if hints:
        err_console.print("[warning]Make sure:[/warning]")
        for hint in hints:
            err_console.print(f"  [dim]•[/dim] {escape(hint)}")


def print_warning(message: str) -> None:
    err_console.print(f"[warning]![/warning] {escape(message)}")
