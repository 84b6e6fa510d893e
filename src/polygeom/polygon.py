"""
Simple clockwise polygons.

Provides the :class:`Polygon` type used for overlap testing and resolution
between closed, non-self-intersecting shapes:

* **construction** -- points are closed into a ring of directed
  :class:`LineSegment` edges, checked for self-intersection and normalized
  to clockwise winding.
* **queries** -- containment (boundary exclusive), bounds, closest point,
  intersection with external segments and rays.
* **overlap handling** -- ``overlap``, ``merge`` (union contour of two
  overlapping polygons), ``swell`` (outward offset), ``furthest_projection``
  and ``separate_from`` (translation along an axis that removes overlap).

Polygons are immutable; every transformation returns a new instance.
Neighbour lookups use index arithmetic modulo the edge count.

Example::

    from polygeom import Polygon, Vector

    square = Polygon([(0, 0), (0, 1), (1, 1), (1, 0)])
    square.contains_point((0.5, 0.5))        # True
    square.swell(1).get_bounds()             # Rectangle(x=-1.0, y=-1.0, width=3.0, height=3.0)
    square.separate_from(square, Vector(1, 0)) == square.transpose(1, 0)  # True
"""

from __future__ import annotations

import logging
from itertools import pairwise
from typing import Iterable, Iterator, Sequence

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .exceptions import (
    DisjointMergeError,
    InvalidPolygonError,
    MergeError,
    SegmentNotFoundError,
)
from .line_segment import LineSegment
from .primitives import Point, PointLike, Rectangle, Vector, as_point

logger = logging.getLogger(__name__)

__all__ = ["Polygon", "is_clockwise", "line_segments_intersect_themselves"]


# ---------------------------------------------------------------------------
# Segment-sequence helpers
# ---------------------------------------------------------------------------


def _close_ring(points: Sequence[Point]) -> tuple[LineSegment, ...]:
    """Join consecutive points, wrapping the last back to the first."""
    n = len(points)
    return tuple(LineSegment(points[i], points[(i + 1) % n]) for i in range(n))


def _shoelace_sum(segments: Iterable[LineSegment]) -> float:
    return sum(ls.shoelace_term() for ls in segments)


def is_clockwise(segments: Sequence[LineSegment]) -> bool:
    """Whether a closed ring of segments winds clockwise.

    Uses the sign of the shoelace sum: negative means clockwise in a
    right-handed (y-up) coordinate system.
    """
    return _shoelace_sum(segments) < 0


def _first_self_intersection(
    segments: Sequence[LineSegment],
) -> tuple[LineSegment, LineSegment] | None:
    n = len(segments)
    for i in range(n):
        for j in range(i + 2, n):
            # First and last segments meet through the wrap-around
            if i == 0 and j == n - 1:
                continue
            if segments[i].intersect(segments[j]) is not None:
                return segments[i], segments[j]
    return None


def line_segments_intersect_themselves(segments: Sequence[LineSegment]) -> bool:
    """Whether any two non-adjacent segments of a closed ring cross.

    Adjacent segments (consecutive, including last/first) share an endpoint
    and are skipped.  Only strict crossings count.
    """
    return _first_self_intersection(segments) is not None


# ---------------------------------------------------------------------------
# Polygon
# ---------------------------------------------------------------------------


class Polygon:
    """
    Closed, simple, clockwise-oriented polygon.

    Built from an ordered sequence of at least three ``(x, y)`` pairs (or
    :class:`Point` objects).  The insertion order is the boundary walk;
    counter-clockwise input is reversed so the stored ring is always
    clockwise.

    Two polygons are equal when they have the same set of boundary
    segments, independent of the starting vertex.

    Raises:
        InvalidPolygonError: For fewer than three points, a repeated
            consecutive vertex, a self-intersecting boundary or a
            boundary with zero area.
    """

    __slots__ = ("_segments", "_segment_set", "_positions", "_starts")

    def __init__(self, points: Iterable[PointLike]):
        vertices = [as_point(p) for p in points]
        n = len(vertices)
        if n < 3:
            raise InvalidPolygonError(
                "A polygon needs at least 3 points",
                context={"points": n},
            )

        for i, p in enumerate(vertices):
            if p == vertices[(i + 1) % n]:
                raise InvalidPolygonError(
                    "Polygon has a repeated consecutive vertex",
                    context={"index": i, "point": str(p)},
                    suggestions=["Remove duplicate points from the input"],
                )

        segments = _close_ring(vertices)

        crossing = _first_self_intersection(segments)
        if crossing is not None:
            raise InvalidPolygonError(
                "Polygon boundary intersects itself",
                context={"first": str(crossing[0]), "second": str(crossing[1])},
                suggestions=["Order the points as a single walk around the boundary"],
            )

        area2 = _shoelace_sum(segments)
        if area2 == 0:
            raise InvalidPolygonError(
                "Polygon boundary encloses no area",
                context={"points": n},
                suggestions=["Check that the points are not all collinear"],
            )
        if area2 > 0:
            logger.debug(f"Reversing counter-clockwise input with {n} points")
            segments = _close_ring(vertices[::-1])

        self._init_segments(segments)

    def _init_segments(self, segments: tuple[LineSegment, ...]) -> None:
        self._segments = segments
        self._segment_set = frozenset(segments)
        self._positions = {ls: i for i, ls in enumerate(segments)}
        self._starts: dict[Point, LineSegment] = {}
        for ls in segments:
            self._starts.setdefault(ls.p1, ls)

    @classmethod
    def _from_segments(cls, segments: tuple[LineSegment, ...]) -> Polygon:
        """Wrap segments already known to form a valid clockwise ring."""
        polygon = cls.__new__(cls)
        polygon._init_segments(segments)
        return polygon

    @classmethod
    def from_array(cls, array: ArrayLike) -> Polygon:
        """Create a polygon from an ``N x 2`` array of vertices."""
        vertices = np.asarray(array, dtype=float)
        if vertices.ndim != 2 or vertices.shape[1] != 2:
            raise InvalidPolygonError(
                "Vertex array must have shape (N, 2)",
                context={"shape": vertices.shape},
            )
        return cls(vertices.tolist())

    # ------------------------------------------------------------------
    # Structure
    # ------------------------------------------------------------------

    @property
    def line_segments(self) -> tuple[LineSegment, ...]:
        """Boundary segments in clockwise order."""
        return self._segments

    @property
    def vertices(self) -> tuple[Point, ...]:
        """Boundary vertices in clockwise order."""
        return tuple(ls.p1 for ls in self._segments)

    def line_segments_as_set(self) -> frozenset[LineSegment]:
        """Boundary segments, ignoring order and starting vertex."""
        return self._segment_set

    def to_array(self) -> NDArray[np.float64]:
        """Vertices as an ``N x 2`` float array."""
        return np.array([v.tuple() for v in self.vertices], dtype=float)

    def __len__(self) -> int:
        return len(self._segments)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Polygon):
            return NotImplemented
        return len(self) == len(other) and self._segment_set == other._segment_set

    def __hash__(self) -> int:
        return hash(self._segment_set)

    def __repr__(self) -> str:
        return f"Polygon({[v.tuple() for v in self.vertices]!r})"

    def next_line_segment(self, ls: LineSegment) -> LineSegment:
        """Cyclic successor of ``ls`` in boundary order."""
        return self._segments[(self._position(ls) + 1) % len(self._segments)]

    def previous_line_segment(self, ls: LineSegment) -> LineSegment:
        """Cyclic predecessor of ``ls`` in boundary order."""
        return self._segments[(self._position(ls) - 1) % len(self._segments)]

    def _position(self, ls: LineSegment) -> int:
        position = self._positions.get(ls)
        if position is None:
            raise SegmentNotFoundError(
                "Line segment is not part of this polygon",
                context={"segment": str(ls)},
            )
        return position

    def line_segment_from(self, p: PointLike) -> LineSegment:
        """Boundary segment whose start point is ``p``."""
        point = as_point(p)
        ls = self._starts.get(point)
        if ls is None:
            raise SegmentNotFoundError(
                "No line segment starts at this point",
                context={"point": str(point)},
            )
        return ls

    # ------------------------------------------------------------------
    # Measures
    # ------------------------------------------------------------------

    def signed_area(self) -> float:
        """Shoelace area; negative because the ring is clockwise."""
        return _shoelace_sum(self._segments) / 2

    def area(self) -> float:
        return abs(self.signed_area())

    def perimeter(self) -> float:
        return sum(ls.length() for ls in self._segments)

    def get_bounds(self) -> Rectangle:
        """Axis-aligned bounding box over all vertices."""
        xs = [v.x for v in self.vertices]
        ys = [v.y for v in self.vertices]
        min_x, min_y = min(xs), min(ys)
        return Rectangle(min_x, min_y, max(xs) - min_x, max(ys) - min_y)

    def middle(self) -> Point:
        """Center of the bounding box (not the vertex centroid)."""
        return self.get_bounds().center

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def on_boundary(self, p: PointLike) -> bool:
        """Whether ``p`` lies exactly on an edge or vertex."""
        point = as_point(p)
        return any(ls.contains_point(point) for ls in self._segments)

    def contains_point(self, p: PointLike) -> bool:
        """Strict point-in-polygon test (crossing number).

        Points on the boundary, vertices included, are outside.  The
        half-open ``y`` comparison means a ray grazing a vertex is
        counted once or not at all, never twice.
        """
        point = as_point(p)
        if self.on_boundary(point):
            return False

        inside = False
        for ls in self._segments:
            a, b = ls.p1, ls.p2
            if (a.y > point.y) != (b.y > point.y):
                x_cross = a.x + (point.y - a.y) * (b.x - a.x) / (b.y - a.y)
                if point.x < x_cross:
                    inside = not inside
        return inside

    def contains_polygon(self, other: Polygon) -> bool:
        """Whether ``other`` lies entirely in this polygon's interior."""
        if not all(self.contains_point(v) for v in other.vertices):
            return False
        return not self._crosses(other)

    def closest_point(self, p: PointLike) -> Point:
        """Closest point on the boundary; ties go to the earliest edge."""
        point = as_point(p)
        candidates = [ls.closest_point(point) for ls in self._segments]
        return min(candidates, key=point.distance_to)

    # ------------------------------------------------------------------
    # External segment queries
    # ------------------------------------------------------------------

    def _intersections(self, ls: LineSegment) -> list[tuple[LineSegment, Point]]:
        """Edge contacts with ``ls`` in boundary order, endpoints included."""
        hits = []
        for edge in self._segments:
            point = edge.intersect(ls, include_endpoints=True)
            if point is not None:
                hits.append((edge, point))
        return hits

    def intersection_segment_and_points(self, ls: LineSegment) -> set[tuple[LineSegment, Point]]:
        """Every boundary edge touched by ``ls`` with the contact point."""
        return set(self._intersections(ls))

    def intersect(self, ls: LineSegment) -> set[Point]:
        """Points where ``ls`` meets the boundary."""
        return {point for _, point in self._intersections(ls)}

    def first_intersection_segment_and_point(
        self, ls: LineSegment
    ) -> tuple[LineSegment, Point] | None:
        """Contact closest to ``ls.p1``, or ``None`` if ``ls`` misses the boundary."""
        hits = self._intersections(ls)
        if not hits:
            return None
        return min(hits, key=lambda hit: ls.p1.distance_to(hit[1]))

    def first_intersection(self, ls: LineSegment) -> Point | None:
        hit = self.first_intersection_segment_and_point(ls)
        return None if hit is None else hit[1]

    def distance_to_perimeter(self, origin: PointLike, direction: Vector) -> float | None:
        """Distance along a ray from ``origin`` to the first boundary contact.

        Args:
            origin: Ray start.
            direction: Ray direction; only its orientation is used.

        Returns:
            The distance, or ``None`` if the ray never reaches the boundary.

        Raises:
            ValueError: If ``direction`` is the zero vector.
        """
        start = as_point(origin)
        axis = direction.normalized()
        # Long enough to pass every vertex, so the segment acts as a ray
        reach = max(start.distance_to(v) for v in self.vertices) + 1.0
        point = self.first_intersection(LineSegment(start, start + axis * reach))
        return None if point is None else start.distance_to(point)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def transpose(self, dx: float, dy: float) -> Polygon:
        """Translated copy; winding and segment order are preserved."""
        return self.transpose_vector(Vector(dx, dy))

    def transpose_vector(self, v: Vector) -> Polygon:
        return Polygon._from_segments(
            tuple(LineSegment(ls.p1 + v, ls.p2 + v) for ls in self._segments)
        )

    def swell(self, amount: float) -> Polygon:
        """Offset the boundary outward by ``amount``.

        Every edge is pushed along its outward normal, and each new vertex
        is the intersection of two consecutive pushed edges.  Only convex
        input is guaranteed to give a simple result.

        Raises:
            ValueError: If ``amount`` is negative.
            InvalidPolygonError: If the offset boundary intersects itself.
        """
        if amount < 0:
            raise ValueError(f"Swell amount must be positive, got {amount}")
        if amount == 0:
            return self

        pushed = []
        for ls in self._segments:
            d = ls.direction
            # Interior is to the right of a clockwise edge, so outward is left
            normal = Vector(-d.y, d.x).normalized() * amount
            pushed.append(LineSegment(ls.p1 + normal, ls.p2 + normal))

        points = []
        for i, ls in enumerate(pushed):
            previous = pushed[i - 1]
            params = previous.intersection_parameters(ls)
            if params is None:
                points.append(ls.p1)
            else:
                points.append(previous.p1 + previous.direction * params[0])
        return Polygon(points)

    # ------------------------------------------------------------------
    # Polygon pairs
    # ------------------------------------------------------------------

    def _crosses(self, other: Polygon) -> bool:
        return any(a.intersect(b) is not None for a in self._segments for b in other._segments)

    def _piece_midpoints(self, other: Polygon) -> Iterator[Point]:
        """Midpoints of this boundary cut at every contact with ``other``.

        A piece between two cuts is entirely inside, outside or on the
        other boundary, so its midpoint decides where the piece lies.
        """
        for edge in self._segments:
            cuts = {edge.p1, edge.p2}
            for ls in other._segments:
                point = edge.intersect(ls, include_endpoints=True)
                if point is not None:
                    cuts.add(point)
            cuts.update(v for v in other.vertices if edge.contains_point(v))

            ordered = sorted(cuts, key=edge.p1.distance_to)
            for a, b in pairwise(ordered):
                yield a.midpoint(b)

    def _boundary_enters(self, other: Polygon) -> bool:
        """Whether part of this boundary runs through ``other``'s interior."""
        return any(other.contains_point(m) for m in self._piece_midpoints(other))

    def _covers(self, other: Polygon) -> bool:
        """Whether ``other`` lies in this polygon, boundary contact allowed."""
        return all(
            self.contains_point(m) or self.on_boundary(m) for m in other._piece_midpoints(self)
        )

    def overlap(self, other: Polygon) -> bool:
        """Whether the interiors of the two polygons intersect.

        Boundaries that only touch (shared edges or vertices without any
        interior in common) do not overlap.
        """
        if self == other:
            return True
        if any(other.contains_point(v) for v in self.vertices):
            return True
        if any(self.contains_point(v) for v in other.vertices):
            return True
        if self._crosses(other):
            return True
        return self._boundary_enters(other) or other._boundary_enters(self)

    def merge(self, other: Polygon) -> Polygon:
        """Union contour of two overlapping polygons.

        If one polygon contains the other, touching its boundary or not,
        the containing instance itself is returned.  Otherwise the
        boundaries are walked from a vertex outside the other polygon,
        switching to the other boundary whenever the walk would enter it.
        Vertices where the result runs straight on are dropped.

        Raises:
            DisjointMergeError: If the polygons do not overlap.
            MergeError: If the walk cannot produce a single simple contour.
        """
        if self == other or self._covers(other):
            logger.debug("Merge target already contains the other polygon")
            return self
        if other._covers(self):
            logger.debug("Merge target is contained by the other polygon")
            return other
        if not self.overlap(other):
            raise DisjointMergeError(
                "Cannot merge polygons that do not overlap",
                context={"first": str(self.get_bounds()), "second": str(other.get_bounds())},
                suggestions=["Check overlap() before merging"],
            )

        contour = _drop_straight_vertices(_union_contour(self, other))
        try:
            merged = Polygon(contour)
        except InvalidPolygonError as e:
            raise MergeError(
                "Union walk produced an invalid contour",
                context={"points": len(contour), "reason": e.message},
            ) from e

        logger.debug(f"Merged {len(self)}-edge and {len(other)}-edge polygons into {len(merged)} edges")
        return merged

    def furthest_projection(self, direction: Vector) -> Vector:
        """Furthest reach of the vertices along ``direction``.

        The largest projection of ``vertex - middle()`` onto the unit
        direction, returned as a vector along that direction.
        """
        axis = direction.normalized()
        center = self.middle()
        reach = max(center.to(v).dot(axis) for v in self.vertices)
        return axis * reach

    def _span(self, axis: Vector) -> tuple[float, float]:
        """Projected extent ``(low, high)`` onto a unit axis."""
        center = self.middle().to_vector().dot(axis)
        high = center + self.furthest_projection(axis).dot(axis)
        low = center - self.furthest_projection(-axis).dot(-axis)
        return low, high

    def separate_from(self, other: Polygon, direction: Vector) -> Polygon:
        """Translated copy that no longer overlaps ``other``.

        The move is along the line of ``direction`` (its length is
        ignored), forward or backward, whichever is shorter; a tie moves
        forward.  The distance makes the projected extents of the two
        polygons on that axis meet end to end.

        Returns:
            ``self`` if there is no overlap, otherwise the moved copy.

        Raises:
            ValueError: If ``direction`` is the zero vector.
        """
        axis = direction.normalized()
        if not self.overlap(other):
            return self

        low, high = self._span(axis)
        other_low, other_high = other._span(axis)
        forward = other_high - low
        backward = other_low - high
        shift = forward if forward <= -backward else backward

        logger.debug(f"Separating along {axis} by {shift:g}")
        return self.transpose_vector(axis * shift)


# ---------------------------------------------------------------------------
# Union walk
# ---------------------------------------------------------------------------


def _walk_start(first: Polygon, second: Polygon) -> tuple[Polygon, Polygon, Point] | None:
    """A vertex strictly outside the other polygon, with its owner."""
    for current, other in ((first, second), (second, first)):
        for v in current.vertices:
            if not other.on_boundary(v) and not other.contains_point(v):
                return current, other, v
    return None


def _next_event(
    segment: LineSegment,
    other: Polygon,
    skip: frozenset[LineSegment],
) -> tuple[Point, frozenset[LineSegment]]:
    """Nearest contact of ``segment`` with ``other`` past its start point.

    Returns the contact point and every edge of ``other`` touching it, or
    ``segment.p2`` and an empty set when nothing is hit.
    """
    best: Point | None = None
    best_distance = 0.0
    contact: set[LineSegment] = set()
    for edge in other.line_segments:
        if edge in skip:
            continue
        point = edge.intersect(segment, include_endpoints=True)
        if point is None or point == segment.p1:
            continue
        distance = segment.p1.distance_to(point)
        if best is None or distance < best_distance:
            best, best_distance, contact = point, distance, {edge}
        elif distance == best_distance:
            contact.add(edge)

    if best is None:
        return segment.p2, frozenset()
    return best, frozenset(contact)


def _edges_through(
    polygon: Polygon, point: Point, known: frozenset[LineSegment]
) -> frozenset[LineSegment]:
    """Edges of ``polygon`` that ``point`` lies on, plus ``known``.

    Collinear edges never register as intersections, so contact along a
    shared line is only found this way.
    """
    return known | frozenset(ls for ls in polygon.line_segments if ls.contains_point(point))


def _drop_straight_vertices(points: list[Point]) -> list[Point]:
    """Remove vertices where the contour continues in the same direction."""
    kept = []
    for i, p in enumerate(points):
        incoming = points[i - 1].to(p)
        outgoing = p.to(points[(i + 1) % len(points)])
        if incoming.cross(outgoing) == 0 and incoming.dot(outgoing) > 0:
            continue
        kept.append(p)
    return kept


def _outgoing_edge(polygon: Polygon, point: Point, touching: frozenset[LineSegment]) -> LineSegment:
    """Edge of ``polygon`` that leaves ``point`` in boundary direction."""
    ordered = [ls for ls in polygon.line_segments if ls in touching]
    for ls in ordered:
        if ls.p2 != point:
            return ls
    return polygon.next_line_segment(ordered[0])


def _union_contour(first: Polygon, second: Polygon) -> list[Point]:
    """Walk the outer boundary of two overlapping clockwise polygons."""
    start = _walk_start(first, second)
    if start is None:
        raise MergeError(
            "No vertex of either polygon lies outside the other",
            suggestions=["Both boundaries coincide; use either polygon"],
        )

    current, other, origin = start
    edge = current.line_segment_from(origin)
    point = origin
    # Edges of `other` that `point` is known to lie on
    touching: frozenset[LineSegment] = frozenset()
    contour = [origin]

    size = len(first) + len(second)
    for _ in range(2 * size * (size + 1)):
        target, contact = _next_event(LineSegment(point, edge.p2), other, touching)

        if other.contains_point(point.midpoint(target)):
            # Heading into the other polygon: follow its boundary instead
            if not touching:
                raise MergeError(
                    "Union walk entered the other polygon away from its boundary",
                    context={"point": str(point)},
                )
            next_edge = _outgoing_edge(other, point, touching)
            touching = _edges_through(current, point, frozenset({edge}))
            current, other, edge = other, current, next_edge
            continue

        point = target
        if point == origin:
            logger.debug(f"Union walk closed after {len(contour)} vertices")
            return contour
        contour.append(point)
        if point == edge.p2:
            edge = current.next_line_segment(edge)
        touching = _edges_through(other, point, contact)

    raise MergeError(
        "Union walk did not return to its starting point",
        context={"start": str(origin), "visited": len(contour)},
        suggestions=["Merging is only supported for simple, mostly convex pairs"],
    )
