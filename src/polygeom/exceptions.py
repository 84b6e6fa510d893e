"""
Custom exception hierarchy for polygeom.

Every error raised by the geometry kernel is a precondition or
construction-time violation; none are transient. All exceptions include:
- Context information (offending points, segment, counts, etc.)
- Suggestions for how to fix the input
- Clear, formatted error messages

Example::

    from polygeom.exceptions import InvalidPolygonError

    raise InvalidPolygonError(
        "Polygon boundary intersects itself",
        context={"first": "(0, 0) -> (1, 1)", "second": "(1, 0) -> (0, 1)"},
        suggestions=["Order the points as a single walk around the boundary"],
    )
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List, Optional, Union


class PolygeomError(Exception):
    """
    Base exception for all polygeom errors.

    Provides consistent formatting with context and suggestions.

    Attributes:
        context: Dictionary of contextual information (points, segments, etc.)
        suggestions: List of actionable suggestions for fixing the error
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
    ):
        self.message = message
        self.context = context or {}
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format the error message with context and suggestions."""
        parts = [self.message]

        if self.context:
            parts.append("\n\nContext:")
            for key, value in self.context.items():
                parts.append(f"\n  {key}: {value}")

        if self.suggestions:
            parts.append("\n\nSuggestions:")
            for suggestion in self.suggestions:
                parts.append(f"\n  - {suggestion}")

        return "".join(parts)

    def __str__(self) -> str:
        return self._format_message()


class InvalidPolygonError(PolygeomError):
    """
    Polygon construction failed.

    Raised for fewer than three points, repeated consecutive vertices,
    a boundary with zero area, or a boundary that crosses itself.
    No partially built polygon is ever returned.

    Example::

        raise InvalidPolygonError(
            "A polygon needs at least 3 points",
            context={"points": 2},
        )
    """

    pass


class SegmentNotFoundError(PolygeomError):
    """
    A segment or start point is not part of the polygon boundary.

    Raised by neighbour lookups (``next_line_segment``,
    ``previous_line_segment``) and by ``line_segment_from``.
    """

    pass


class MergeError(PolygeomError):
    """
    Union of two polygons could not be computed.

    The boundary walk only supports simple polygon pairs whose union is a
    single contour reachable from a vertex lying outside the other shape.
    """

    pass


class DisjointMergeError(MergeError):
    """
    Merge requested for two polygons that do not overlap.

    Example::

        raise DisjointMergeError(
            "Cannot merge polygons that do not overlap",
            context={"first_bounds": "...", "second_bounds": "..."},
            suggestions=["Check overlap() before merging"],
        )
    """

    pass


class FileFormatError(PolygeomError):
    """
    Shape file not recognized or malformed.

    Raised when a file exists but does not hold a list of ``[x, y]``
    pairs (either bare or under a ``points`` key).
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        suggestions: Optional[List[str]] = None,
        file_path: Optional[Union[str, Path]] = None,
    ):
        ctx = context or {}
        if file_path and "file" not in ctx:
            ctx["file"] = str(file_path)

        super().__init__(message, ctx, suggestions)


__all__ = [
    "PolygeomError",
    "InvalidPolygonError",
    "SegmentNotFoundError",
    "MergeError",
    "DisjointMergeError",
    "FileFormatError",
]
