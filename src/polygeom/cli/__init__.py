"""
Command-line interface for polygeom.

Provides the ``polygeom`` command:

    polygeom info <shape>                 - Edge count, winding, bounds, area
    polygeom contains <shape> X Y         - Point containment
    polygeom swell <shape>                - Outward offset
    polygeom overlap <a> <b>              - Overlap test
    polygeom merge <a> <b>                - Union contour
    polygeom separate <a> <b>             - Translate <a> off <b>
    polygeom config                       - View and manage configuration

Shape files are JSON or YAML lists of [x, y] pairs, optionally under a
``points`` key.

Examples:
    polygeom info board.json --format json
    polygeom swell keepout.yaml --amount 0.5 -o keepout-grown.yaml
    polygeom separate part.json obstacle.json --direction 0 1
"""

import sys
from typing import List, Optional

from polygeom.config import Config
from polygeom.exceptions import PolygeomError
from polygeom.logging import disable_verbose, enable_verbose

from .parser import create_parser
from .utils import print_error

__all__ = ["main"]


def dispatch_command(args, config: Config) -> int:
    """Dispatch to the appropriate command handler."""
    if args.command == "info":
        from .shape_cmd import run_info

        return run_info(args, config)

    elif args.command == "contains":
        from .shape_cmd import run_contains

        return run_contains(args, config)

    elif args.command == "swell":
        from .shape_cmd import run_swell

        return run_swell(args, config)

    elif args.command == "overlap":
        from .pair_cmd import run_overlap

        return run_overlap(args, config)

    elif args.command == "merge":
        from .pair_cmd import run_merge

        return run_merge(args, config)

    elif args.command == "separate":
        from .pair_cmd import run_separate

        return run_separate(args, config)

    return 1


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the polygeom CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "config":
        from .config_cmd import run_config

        return run_config(args)

    try:
        config = Config.load()
    except PolygeomError as e:
        print_error(e)
        return 1

    # Command-line flags override the [defaults] section
    args.format = args.format or config.defaults.format
    args.quiet = args.quiet or config.defaults.quiet
    verbose = args.verbose or config.defaults.verbose

    if verbose:
        enable_verbose("DEBUG")
    try:
        return dispatch_command(args, config)
    except (PolygeomError, ValueError) as e:
        print_error(e)
        return 1
    finally:
        if verbose:
            disable_verbose()


if __name__ == "__main__":
    sys.exit(main())
