"""Rich utilities: shared console, themes, and helpers."""

from __future__ import annotations

import json
from typing import Any

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table
from rich.theme import Theme
from rich.traceback import install as rich_traceback_install

_console: Console | None = None


def get_console() -> Console:
    """Return a shared Rich Console instance.

    Creates the console on first use with a pleasant default theme.
    """
    global _console
    if _console is None:
        theme = Theme(
            {
                "info": "cyan",
                "warning": "yellow",
                "error": "red",
                "success": "green",
                "muted": "grey62",
            }
        )
        _console = Console(theme=theme, highlight=False, soft_wrap=False)
    return _console


def install_rich_tracebacks() -> None:
    """Enable rich tracebacks globally for nicer error output."""
    rich_traceback_install(show_locals=False, word_wrap=True, suppress=["click"])


def print_http_response(response: dict[str, Any]) -> None:
    """Print a Lambda proxy response: status line, then the JSON body."""
    console = get_console()
    status = response.get("statusCode")
    style = "success" if isinstance(status, int) and status < 400 else "error"
    console.print(f"Status: {status}", style=style)

    body = response.get("body", "")
    try:
        pretty = json.dumps(json.loads(body), indent=2)
    except (TypeError, ValueError):
        console.print(f"Body: {body}")
        return
    console.print(Syntax(pretty, "json", theme="ansi_dark", word_wrap=True))


def print_settings(settings: dict[str, str], missing: list[str]) -> None:
    """Print resolved settings as a table, listing unset keys last."""
    table = Table(title="Resolved settings")
    table.add_column("Key", style="info")
    table.add_column("Value")
    for key, value in sorted(settings.items()):
        table.add_row(key, value)
    for key in missing:
        table.add_row(key, "[muted](unset)[/muted]")
    get_console().print(table)
