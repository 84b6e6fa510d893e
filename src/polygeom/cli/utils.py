"""Shared utilities for CLI commands."""

from __future__ import annotations

import json
import sys
import traceback
from typing import TYPE_CHECKING, Any

from polygeom.exceptions import PolygeomError
from polygeom.io import polygon_to_dict, save_polygon

if TYPE_CHECKING:
    from rich.console import Console

    from polygeom.polygon import Polygon

__all__ = [
    "format_error",
    "print_error",
    "get_error_console",
    "print_json",
    "print_polygon",
    "write_polygon",
]

# Module-level console for error output, created lazily
_error_console: Console | None = None


def get_error_console() -> Console:
    """Get or create the Rich console for error output.

    The console writes to stderr and is cached for reuse.
    """
    global _error_console
    if _error_console is None:
        from rich.console import Console

        _error_console = Console(stderr=True, force_terminal=None)
    return _error_console


def print_error(
    e: Exception,
    verbose: bool = False,
    use_rich: bool | None = None,
) -> None:
    """
    Print an exception with Rich formatting when attached to a terminal.

    Args:
        e: The exception to print
        verbose: If True, print the full stack trace instead
        use_rich: Override automatic TTY detection (None = auto-detect)
    """
    console = get_error_console()

    if use_rich is None:
        use_rich = console.is_terminal

    if verbose:
        print(traceback.format_exc(), file=sys.stderr)
        return

    if use_rich:
        from rich.text import Text

        # Text keeps brackets in messages from being read as markup
        console.print(Text("Error: ", style="bold red") + Text(str(e)))
    else:
        print(format_error(e), file=sys.stderr)


def format_error(e: Exception) -> str:
    """Plain-text form of an exception for non-TTY output."""
    if isinstance(e, PolygeomError):
        return f"Error: {e}"
    return f"Error: {type(e).__name__}: {e}"


def print_json(data: dict[str, Any]) -> None:
    print(json.dumps(data, indent=2))


def print_polygon(polygon: Polygon, title: str, output_format: str) -> None:
    """Print a polygon's vertices as a Rich table or as JSON."""
    if output_format == "json":
        print_json(polygon_to_dict(polygon))
        return

    from rich.console import Console
    from rich.table import Table

    table = Table(title=title)
    table.add_column("#", justify="right", style="dim")
    table.add_column("x", justify="right")
    table.add_column("y", justify="right")
    for index, v in enumerate(polygon.vertices):
        table.add_row(str(index), f"{v.x:g}", f"{v.y:g}")
    Console().print(table)


def write_polygon(polygon: Polygon, path: str, quiet: bool = False) -> None:
    """Save a result polygon and report where it went."""
    save_polygon(polygon, path)
    if not quiet:
        print(f"Wrote {len(polygon)}-edge polygon to {path}")
