"""Shared helpers for the bundle creator.

JSON state files, duration formatting and the Rich console reporting used by
the CLI and ``ConsoleNotifier``.  Everything printed goes through the
module-level ``console``, so a caller (or a test) can swap it in one place.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.rule import Rule
from rich.table import Table

console = Console()

# ---------------------------------------------------------------------------
# JSON state files
# ---------------------------------------------------------------------------


def load_json(path: str | Path) -> dict[str, Any]:
    """Read a JSON state file.

    A document whose top level is not an object comes back as
    ``{"_root": <document>}``.

    Raises:
        FileNotFoundError: When *path* is missing.
        json.JSONDecodeError: When the content is not JSON.
    """
    document = json.loads(Path(path).read_text(encoding="utf-8"))
    return document if isinstance(document, dict) else {"_root": document}


def save_json(data: dict[str, Any] | list[Any], path: str | Path) -> Path:
    """Write *data* as indented UTF-8 JSON, creating missing parent folders."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(
        json.dumps(data, indent=2, ensure_ascii=False, default=str), encoding="utf-8"
    )
    return target


# ---------------------------------------------------------------------------
# Formatting
# ---------------------------------------------------------------------------


def format_duration(seconds: float) -> str:
    """Render a run duration, e.g. ``"3.7s"`` or ``"1m 5s"``."""
    if seconds < 0:
        return "0.0s"

    minutes, rest = divmod(seconds, 60)
    if minutes:
        return f"{int(minutes)}m {int(rest)}s"
    return f"{rest:.1f}s"


# ---------------------------------------------------------------------------
# Console reporting
# ---------------------------------------------------------------------------


def print_step_header(title: str, color: str = "bright_green") -> None:
    """Print a full-width rule announcing a generation step."""
    console.print()
    console.print(Rule(f"[bold {color}] {title} [/bold {color}]", style=color))
    console.print()


def print_summary_table(data: dict[str, str], title: str = "Summary") -> None:
    """Print *data* as a two-column table, one row per entry."""
    table = Table(title=title, header_style="bold cyan")
    table.add_column("Item", style="dim", no_wrap=True)
    table.add_column("Value")
    for label, value in data.items():
        table.add_row(label, str(value))

    console.print(table)
    console.print()


def print_info(message: str) -> None:
    console.print(f"  [green]+[/green] {message}")


def print_success(message: str) -> None:
    console.print(f"[bold green]{message}[/bold green]")


def print_error(message: str) -> None:
    console.print(f"[bold red]{message}[/bold red]")


def print_warning(message: str) -> None:
    console.print(f"[bold yellow]{message}[/bold yellow]")
