"""Directed line segments.

A :class:`LineSegment` runs from ``p1`` to ``p2``.  Two segments joining
the same points in opposite order are distinct values.  The class owns the
segment-level math the polygon algorithms are expressed in: parametric
intersection, projection of an external point and the shoelace term used
for orientation.

Example::

    from polygeom import LineSegment, Point

    a = LineSegment.from_values(0, 0, 2, 2)
    b = LineSegment.from_values(0, 2, 2, 0)
    a.intersect(b)                      # Point(x=1.0, y=1.0)
    a.closest_point(Point(2, 0))        # Point(x=1.0, y=1.0)
"""

from __future__ import annotations

from dataclasses import dataclass

from .primitives import Point, Vector

__all__ = ["LineSegment"]


@dataclass(frozen=True)
class LineSegment:
    """Directed segment from ``p1`` to ``p2``.

    Attributes:
        p1: Start ("from") point.
        p2: End ("to") point.
    """

    p1: Point
    p2: Point

    @classmethod
    def from_values(cls, x1: float, y1: float, x2: float, y2: float) -> LineSegment:
        """Create a segment from raw coordinates."""
        return cls(Point(x1, y1), Point(x2, y2))

    # ------------------------------------------------------------------
    # Basic measures
    # ------------------------------------------------------------------

    @property
    def direction(self) -> Vector:
        """Displacement from ``p1`` to ``p2``."""
        return self.p1.to(self.p2)

    def length(self) -> float:
        return self.p1.distance_to(self.p2)

    def midpoint(self) -> Point:
        return self.p1.midpoint(self.p2)

    def reversed(self) -> LineSegment:
        """Same segment walked in the opposite direction."""
        return LineSegment(self.p2, self.p1)

    def shoelace_term(self) -> float:
        """Contribution of this edge to a polygon's shoelace sum."""
        return self.p1.x * self.p2.y - self.p2.x * self.p1.y

    # ------------------------------------------------------------------
    # Intersection
    # ------------------------------------------------------------------

    def intersection_parameters(self, other: LineSegment) -> tuple[float, float] | None:
        """Solve ``p1 + t * r == other.p1 + u * s`` for the supporting lines.

        Args:
            other: Segment to intersect with.

        Returns:
            ``(t, u)`` where ``t`` is the parameter along this segment and
            ``u`` the parameter along ``other``, or ``None`` when the
            segments are parallel or collinear.
        """
        r = self.direction
        s = other.direction
        denominator = r.cross(s)
        if denominator == 0:
            return None

        offset = self.p1.to(other.p1)
        t = offset.cross(s) / denominator
        u = offset.cross(r) / denominator
        return t, u

    def intersect(self, other: LineSegment, include_endpoints: bool = False) -> Point | None:
        """Intersection point with another segment.

        By default only true crossings count: both parameters must lie
        strictly inside ``(0, 1)``, so segments that merely touch at an
        endpoint do not intersect.  With ``include_endpoints`` the closed
        interval ``[0, 1]`` is used instead.  Parallel and collinear
        segments never intersect.

        Args:
            other: Segment to intersect with.
            include_endpoints: Count contacts at either segment's endpoints.

        Returns:
            The intersection point, or ``None``.
        """
        params = self.intersection_parameters(other)
        if params is None:
            return None

        t, u = params
        if include_endpoints:
            if not (0 <= t <= 1 and 0 <= u <= 1):
                return None
        elif not (0 < t < 1 and 0 < u < 1):
            return None

        # Snap to exact vertices so contacts at endpoints compare equal
        if t == 0:
            return self.p1
        if t == 1:
            return self.p2
        if u == 0:
            return other.p1
        if u == 1:
            return other.p2
        return self.p1 + self.direction * t

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def contains_point(self, p: Point) -> bool:
        """Exact test for ``p`` lying on the segment, endpoints included."""
        if self.direction.cross(self.p1.to(p)) != 0:
            return False
        return (
            min(self.p1.x, self.p2.x) <= p.x <= max(self.p1.x, self.p2.x)
            and min(self.p1.y, self.p2.y) <= p.y <= max(self.p1.y, self.p2.y)
        )

    def closest_point(self, p: Point) -> Point:
        """Project ``p`` onto the segment, clamped to its endpoints."""
        r = self.direction
        length_sq = r.dot(r)
        if length_sq == 0:
            return self.p1

        t = self.p1.to(p).dot(r) / length_sq
        t = min(1.0, max(0.0, t))
        if t == 0:
            return self.p1
        if t == 1:
            return self.p2
        return self.p1 + r * t

    def distance_to(self, p: Point) -> float:
        """Shortest distance from ``p`` to any point of the segment."""
        return self.closest_point(p).distance_to(p)

    def __str__(self) -> str:
        return f"{self.p1} -> {self.p2}"
