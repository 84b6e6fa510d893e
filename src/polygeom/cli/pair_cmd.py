"""Two-shape commands: overlap, merge, separate.

Usage:
    polygeom overlap a.json b.json
    polygeom merge a.json b.json -o union.json
    polygeom separate a.json b.json --direction 0 1
"""

from __future__ import annotations

import argparse

from polygeom.config import Config
from polygeom.io import load_polygon, polygon_to_dict
from polygeom.primitives import Vector

from .utils import print_json, print_polygon, write_polygon

__all__ = ["run_overlap", "run_merge", "run_separate"]


def run_overlap(args: argparse.Namespace, config: Config) -> int:
    """Report whether two polygons overlap; the exit code is 0 either way."""
    first = load_polygon(args.first)
    second = load_polygon(args.second)
    overlapping = first.overlap(second)

    if args.format == "json":
        print_json({"overlap": overlapping})
    else:
        print("overlap" if overlapping else "no overlap")
    return 0


def run_merge(args: argparse.Namespace, config: Config) -> int:
    first = load_polygon(args.first)
    second = load_polygon(args.second)

    merged = first.merge(second)

    if args.output:
        write_polygon(merged, args.output, quiet=args.quiet)
    else:
        print_polygon(merged, "Merged", args.format)
    return 0


def run_separate(args: argparse.Namespace, config: Config) -> int:
    """Move the first polygon along an axis until it no longer overlaps the second."""
    first = load_polygon(args.first)
    second = load_polygon(args.second)
    dx, dy = config.separate.direction if args.direction is None else args.direction

    moved = first.separate_from(second, Vector(dx, dy))
    # Translation keeps vertex order, so the first vertices give the shift
    shift = first.vertices[0].to(moved.vertices[0])

    if args.output:
        write_polygon(moved, args.output, quiet=args.quiet)
    elif args.format == "json":
        print_json({"shift": [shift.x, shift.y], **polygon_to_dict(moved)})
    else:
        if not args.quiet:
            print(f"Shift: {shift}")
        print_polygon(moved, "Separated", args.format)
    return 0
