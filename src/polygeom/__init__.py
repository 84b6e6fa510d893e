"""
polygeom: 2D simple-polygon kernel for overlap testing and resolution.

This package provides immutable, clockwise-normalized polygons and the
segment math behind them, for use by physics and collision layers.

Modules:
    primitives: Point, Vector and Rectangle value types
    line_segment: Directed segments, intersection and projection
    polygon: Polygon construction, queries, merge, swell and separation
    io: JSON/YAML shape files
    config: TOML configuration for the command line tool
    cli: The ``polygeom`` command

Quick Start::

    from polygeom import Polygon, Vector

    a = Polygon([(-1, 0), (0, 1), (1, 0), (0, -1)])
    b = a.transpose(1, 0)

    a.overlap(b)                      # True
    len(a.merge(b))                   # 8
    a.separate_from(b, Vector(1, 0))  # moved copy that only touches b
"""

__version__ = "0.1.0"

from polygeom.exceptions import (
    DisjointMergeError,
    FileFormatError,
    InvalidPolygonError,
    MergeError,
    PolygeomError,
    SegmentNotFoundError,
)
from polygeom.line_segment import LineSegment
from polygeom.logging import disable_verbose, enable_verbose
from polygeom.polygon import Polygon, is_clockwise, line_segments_intersect_themselves
from polygeom.primitives import Point, Rectangle, Vector

__all__ = [
    # Version
    "__version__",
    # Value types
    "Point",
    "Vector",
    "Rectangle",
    # Geometry
    "LineSegment",
    "Polygon",
    "is_clockwise",
    "line_segments_intersect_themselves",
    # Logging
    "enable_verbose",
    "disable_verbose",
    # Errors
    "PolygeomError",
    "InvalidPolygonError",
    "SegmentNotFoundError",
    "MergeError",
    "DisjointMergeError",
    "FileFormatError",
]
