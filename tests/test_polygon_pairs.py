"""Tests for operations between two polygons: overlap, merge, separate_from."""

from __future__ import annotations

import logging

import pytest

from polygeom import (
    DisjointMergeError,
    MergeError,
    Point,
    Polygon,
    Rectangle,
    Vector,
)
from polygeom.polygon import _drop_straight_vertices


@pytest.fixture
def offset_squares(two_square):
    """Two 2x2 squares overlapping in the unit square (1, 1) to (2, 2)."""
    return two_square, two_square.transpose(1, 1)


class TestOverlap:
    """Interior intersection between polygons."""

    def test_separate_squares(self):
        a = Polygon([(0, 0), (1, 0), (1, 1), (0, 1)])
        b = Polygon([(3, 0), (4, 0), (4, 1), (3, 1)])
        assert not a.overlap(b)
        assert not b.overlap(a)

    def test_self(self):
        polygon = Polygon([(0, 0), (20, 0), (20, 20), (0, 20)])
        assert polygon.overlap(polygon)

    def test_containment_both_ways(self):
        outer = Polygon([(0, 0), (20, 0), (20, 20), (0, 20)])
        inner = Polygon([(1, 1), (2, 1), (2, 2), (1, 2)])
        assert outer.overlap(inner)
        assert inner.overlap(outer)

    def test_half_shifted_squares(self, two_square):
        shifted = two_square.transpose(-1, 0)
        assert two_square.overlap(shifted)
        assert shifted.overlap(two_square)

    def test_crossing_strip(self, two_square):
        strip = Polygon([(-1, 0), (4, 0), (4, 1), (-1, 1)])
        assert two_square.overlap(strip)
        assert strip.overlap(two_square)

    def test_plus_sign_without_vertices_inside(self):
        horizontal = Polygon([(0, 1), (0, 2), (3, 2), (3, 1)])
        vertical = Polygon([(1, 0), (1, 3), (2, 3), (2, 0)])
        assert horizontal.overlap(vertical)

    def test_adjacent_squares_do_not_overlap(self, two_square):
        assert not two_square.overlap(two_square.transpose(-2, 0))

    def test_corner_touch_does_not_overlap(self, two_square):
        assert not two_square.overlap(two_square.transpose(2, 2))

    def test_inscribed_diamond(self, two_square):
        diamond = Polygon([(1, 0), (2, 1), (1, 2), (0, 1)])
        assert diamond.overlap(two_square)
        assert two_square.overlap(diamond)


class TestMerge:
    """Union contour of overlapping polygons."""

    def test_disjoint_raises(self, unit_square):
        with pytest.raises(DisjointMergeError, match="do not overlap"):
            unit_square.merge(unit_square.transpose(2, 0))

    def test_disjoint_error_is_merge_error(self, unit_square):
        with pytest.raises(MergeError):
            unit_square.merge(unit_square.transpose(2, 0))

    def test_returns_containing_polygon(self, unit_square):
        swollen = unit_square.swell(5)
        assert unit_square.merge(swollen) is swollen
        assert swollen.merge(unit_square) is swollen

    def test_merge_with_self(self, unit_square):
        assert unit_square.merge(unit_square) is unit_square

    def test_two_diamonds(self, diamond):
        merged = diamond.merge(diamond.transpose(1, 0))
        assert len(merged.line_segments) == 8

    def test_two_diamonds_bounds(self, diamond):
        merged = diamond.merge(diamond.transpose(1, 0))
        assert merged.get_bounds() == Rectangle(-1, -1, 3, 2)

    def test_offset_squares(self, offset_squares):
        a, b = offset_squares
        expected = Polygon([(0, 0), (0, 2), (1, 2), (1, 3), (3, 3), (3, 1), (2, 1), (2, 0)])
        assert a.merge(b) == expected
        assert b.merge(a) == expected

    def test_offset_squares_area(self, offset_squares):
        a, b = offset_squares
        assert a.merge(b).area() == pytest.approx(7.0)

    def test_merged_polygon_is_clockwise(self, offset_squares):
        a, b = offset_squares
        assert a.merge(b).signed_area() < 0

    def test_squares_sharing_edge_lines(self, two_square):
        shifted = two_square.transpose(1, 0)
        expected = Rectangle(0, 0, 3, 2).to_polygon()
        assert two_square.merge(shifted) == expected
        assert shifted.merge(two_square) == expected

    def test_half_shifted_squares(self, two_square):
        shifted = two_square.transpose(-1, 0)
        expected = Rectangle(-1, 0, 3, 2).to_polygon()
        assert two_square.merge(shifted) == expected
        assert shifted.merge(two_square) == expected

    def test_stacked_rectangles(self):
        low = Rectangle(0, 0, 4, 2).to_polygon()
        high = Rectangle(0, 1, 4, 2).to_polygon()
        assert low.merge(high) == Rectangle(0, 0, 4, 3).to_polygon()

    def test_plus_sign(self):
        horizontal = Polygon([(0, 1), (0, 2), (3, 2), (3, 1)])
        vertical = Polygon([(1, 0), (1, 3), (2, 3), (2, 0)])
        merged = horizontal.merge(vertical)
        assert len(merged) == 12
        assert merged.area() == pytest.approx(5.0)

    def test_contained_in_corner_returns_container(self, two_square):
        corner = Rectangle(0, 0, 1, 1).to_polygon()
        assert two_square.merge(corner) is two_square
        assert corner.merge(two_square) is two_square

    def test_inscribed_diamond_returns_square(self, two_square):
        diamond = Polygon([(1, 0), (2, 1), (1, 2), (0, 1)])
        assert two_square.merge(diamond) is two_square
        assert diamond.merge(two_square) is two_square

    def test_merge_is_logged(self, offset_squares, caplog):
        a, b = offset_squares
        with caplog.at_level(logging.DEBUG, logger="polygeom"):
            a.merge(b)
        assert "Merged" in caplog.text


class TestSeparateFrom:
    """Translation along an axis that removes overlap."""

    def test_no_overlap_returns_self(self, unit_square):
        other = unit_square.transpose(3, 0)
        assert unit_square.separate_from(other, Vector(1, 0)) is unit_square

    @pytest.mark.parametrize("direction", [Vector(1, 0), Vector(2, 0)])
    def test_separate_from_self(self, unit_square, direction):
        result = unit_square.separate_from(unit_square, direction)
        assert result == unit_square.transpose_vector(Vector(1, 0))

    def test_diamond_inside_square(self, two_square):
        diamond = Polygon([(1, 0), (2, 1), (1, 2), (0, 1)])
        result = diamond.separate_from(two_square, Vector(1, 0))
        assert result == diamond.transpose_vector(Vector(2, 0))

    def test_prefers_shorter_backward_move(self, offset_squares):
        a, b = offset_squares
        result = a.separate_from(b, Vector(1, 0))
        assert result == a.transpose(-1, 0)
        assert not result.overlap(b)

    def test_vertical_axis(self, offset_squares):
        a, b = offset_squares
        assert a.separate_from(b, Vector(0, 1)) == a.transpose(0, -1)

    def test_prefers_shorter_forward_move(self, offset_squares):
        a, b = offset_squares
        assert b.separate_from(a, Vector(1, 0)) == b.transpose(1, 0)

    def test_zero_direction_raises(self, unit_square):
        with pytest.raises(ValueError):
            unit_square.separate_from(unit_square, Vector(0, 0))


class TestFurthestProjectionSpan:
    """Projected extents used by separation."""

    def test_span_of_square(self, two_square):
        assert two_square._span(Vector(1, 0)) == (0, 2)

    def test_span_of_moved_square(self, two_square):
        assert two_square.transpose(3, 0)._span(Vector(1, 0)) == (3, 5)


class TestDropStraightVertices:
    """Cleanup of union contours."""

    def test_removes_vertices_on_a_straight_run(self):
        points = [Point(0, 0), Point(0, 2), Point(1, 2), Point(2, 2), Point(2, 0), Point(1, 0)]
        assert _drop_straight_vertices(points) == [Point(0, 0), Point(0, 2), Point(2, 2), Point(2, 0)]

    def test_keeps_corners(self):
        points = [Point(0, 0), Point(0, 1), Point(1, 1), Point(1, 0)]
        assert _drop_straight_vertices(points) == points
