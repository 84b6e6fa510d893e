"""Single-shape commands: info, contains, swell.

Usage:
    polygeom info square.json
    polygeom contains square.json 0.5 0.5
    polygeom swell square.yaml --amount 2 -o grown.yaml
"""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.table import Table

from polygeom.config import Config
from polygeom.io import load_polygon
from polygeom.polygon import is_clockwise

from .utils import print_json, print_polygon, write_polygon

__all__ = ["run_info", "run_contains", "run_swell"]


def run_info(args: argparse.Namespace, config: Config) -> int:
    """Print edge count, winding, bounds and measures of a polygon."""
    polygon = load_polygon(args.shape)
    bounds = polygon.get_bounds()
    middle = polygon.middle()

    if args.format == "json":
        print_json(
            {
                "file": str(args.shape),
                "edges": len(polygon),
                "clockwise": is_clockwise(polygon.line_segments),
                "area": polygon.area(),
                "perimeter": polygon.perimeter(),
                "bounds": {
                    "x": bounds.x,
                    "y": bounds.y,
                    "width": bounds.width,
                    "height": bounds.height,
                },
                "middle": [middle.x, middle.y],
            }
        )
        return 0

    table = Table(title=Path(args.shape).name, show_header=False)
    table.add_column("Metric", style="dim")
    table.add_column("Value")
    table.add_row("Edges", str(len(polygon)))
    table.add_row("Clockwise", "yes" if is_clockwise(polygon.line_segments) else "no")
    table.add_row("Area", f"{polygon.area():g}")
    table.add_row("Perimeter", f"{polygon.perimeter():g}")
    table.add_row(
        "Bounds",
        f"x={bounds.x:g} y={bounds.y:g} w={bounds.width:g} h={bounds.height:g}",
    )
    table.add_row("Middle", str(middle))
    Console().print(table)
    return 0


def run_contains(args: argparse.Namespace, config: Config) -> int:
    """Report whether a point lies strictly inside a polygon."""
    polygon = load_polygon(args.shape)
    point = (args.x, args.y)
    inside = polygon.contains_point(point)
    on_boundary = polygon.on_boundary(point)

    if args.format == "json":
        print_json({"point": [args.x, args.y], "inside": inside, "on_boundary": on_boundary})
    elif on_boundary:
        print(f"({args.x:g}, {args.y:g}) is on the boundary")
    else:
        print(f"({args.x:g}, {args.y:g}) is {'inside' if inside else 'outside'}")
    return 0


def run_swell(args: argparse.Namespace, config: Config) -> int:
    """Offset a polygon outward by ``--amount`` or the configured default."""
    polygon = load_polygon(args.shape)
    amount = config.swell.amount if args.amount is None else args.amount

    swollen = polygon.swell(amount)

    if args.output:
        write_polygon(swollen, args.output, quiet=args.quiet)
    else:
        print_polygon(swollen, f"Swell by {amount:g}", args.format)
    return 0
