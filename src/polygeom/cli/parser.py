"""
Argument parser for the polygeom CLI.

Each subcommand is registered by its own ``register_*`` function so the
parser can be built and inspected in tests without running anything.
"""

from __future__ import annotations

import argparse

from polygeom import __version__

__all__ = ["create_parser"]


def _common_options() -> argparse.ArgumentParser:
    """Options shared by every geometry subcommand."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--format",
        "-f",
        choices=["table", "json"],
        default=None,
        help="Output format (default: from config, else table)",
    )
    common.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    common.add_argument("-q", "--quiet", action="store_true", help="Suppress informational output")
    return common


def register_shape_parsers(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> None:
    """Register subcommands that act on a single shape file."""
    info = subparsers.add_parser("info", parents=[common], help="Summarize a polygon")
    info.add_argument("shape", help="Shape file (.json, .yaml, .yml)")

    contains = subparsers.add_parser(
        "contains", parents=[common], help="Test whether a point is inside a polygon"
    )
    contains.add_argument("shape", help="Shape file (.json, .yaml, .yml)")
    contains.add_argument("x", type=float, help="Point x coordinate")
    contains.add_argument("y", type=float, help="Point y coordinate")

    swell = subparsers.add_parser("swell", parents=[common], help="Offset a polygon outward")
    swell.add_argument("shape", help="Shape file (.json, .yaml, .yml)")
    swell.add_argument(
        "--amount",
        "-a",
        type=float,
        default=None,
        help="Offset distance (default: swell.amount from config)",
    )
    swell.add_argument("-o", "--output", help="Write the result to this shape file")


def register_pair_parsers(
    subparsers: argparse._SubParsersAction, common: argparse.ArgumentParser
) -> None:
    """Register subcommands that act on two shape files."""
    overlap = subparsers.add_parser(
        "overlap", parents=[common], help="Test whether two polygons overlap"
    )
    overlap.add_argument("first", help="First shape file")
    overlap.add_argument("second", help="Second shape file")

    merge = subparsers.add_parser("merge", parents=[common], help="Union of two polygons")
    merge.add_argument("first", help="First shape file")
    merge.add_argument("second", help="Second shape file")
    merge.add_argument("-o", "--output", help="Write the result to this shape file")

    separate = subparsers.add_parser(
        "separate", parents=[common], help="Move the first polygon off the second"
    )
    separate.add_argument("first", help="Shape file of the polygon to move")
    separate.add_argument("second", help="Shape file of the fixed polygon")
    separate.add_argument(
        "--direction",
        "-d",
        type=float,
        nargs=2,
        metavar=("DX", "DY"),
        default=None,
        help="Separation axis (default: separate.direction from config)",
    )
    separate.add_argument("-o", "--output", help="Write the result to this shape file")


def register_config_parser(subparsers: argparse._SubParsersAction) -> None:
    """Register the config subcommand."""
    parser = subparsers.add_parser("config", help="View and manage configuration")
    action_group = parser.add_mutually_exclusive_group()
    action_group.add_argument(
        "--show", action="store_true", help="Show effective configuration with sources"
    )
    action_group.add_argument("--init", action="store_true", help="Create template config file")
    action_group.add_argument("--paths", action="store_true", help="Show config file paths")
    parser.add_argument("--user", action="store_true", help="Use user config for --init")


def create_parser() -> argparse.ArgumentParser:
    """Build the top-level ``polygeom`` parser."""
    parser = argparse.ArgumentParser(
        prog="polygeom",
        description="2D simple-polygon overlap testing and resolution",
    )
    parser.add_argument("--version", action="version", version=f"polygeom {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")
    common = _common_options()
    register_shape_parsers(subparsers, common)
    register_pair_parsers(subparsers, common)
    register_config_parser(subparsers)

    return parser
