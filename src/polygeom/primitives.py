"""
Value types for the polygon kernel.

This module provides the plain 2D types the kernel is built on:
- Point: immutable location
- Vector: immutable displacement with the usual vector algebra
- Rectangle: axis-aligned box given as origin plus size
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Sequence, Union

if TYPE_CHECKING:
    from .polygon import Polygon

__all__ = ["Point", "Vector", "Rectangle", "PointLike", "as_point"]


@dataclass(frozen=True)
class Vector:
    """2D displacement."""

    x: float
    y: float

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    def __rmul__(self, scalar: float) -> Vector:
        return self.__mul__(scalar)

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def dot(self, other: Vector) -> float:
        """Dot product."""
        return self.x * other.x + self.y * other.y

    def cross(self, other: Vector) -> float:
        """2D cross product (returns scalar z-component)."""
        return self.x * other.y - self.y * other.x

    def length(self) -> float:
        """Euclidean length."""
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector:
        """Unit vector in the same direction.

        Raises:
            ValueError: If the vector has zero length.
        """
        length = self.length()
        if length == 0:
            raise ValueError("Cannot normalize a zero-length vector")
        return self / length

    def __str__(self) -> str:
        return f"<{self.x:g}, {self.y:g}>"


@dataclass(frozen=True)
class Point:
    """2D point."""

    x: float
    y: float

    def __add__(self, other: Vector) -> Point:
        return Point(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Union[Point, Vector]) -> Union[Point, Vector]:
        # Point - Point is the displacement between them, Point - Vector moves back.
        if isinstance(other, Point):
            return Vector(self.x - other.x, self.y - other.y)
        return Point(self.x - other.x, self.y - other.y)

    def to(self, other: Point) -> Vector:
        """Displacement from this point to ``other``."""
        return Vector(other.x - self.x, other.y - self.y)

    def to_vector(self) -> Vector:
        """Position vector relative to the origin."""
        return Vector(self.x, self.y)

    def distance_to(self, other: Point) -> float:
        return math.hypot(other.x - self.x, other.y - self.y)

    def midpoint(self, other: Point) -> Point:
        return Point((self.x + other.x) / 2, (self.y + other.y) / 2)

    def tuple(self) -> tuple[float, float]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x:g}, {self.y:g})"


PointLike = Union[Point, Sequence[float]]


def as_point(value: PointLike) -> Point:
    """Coerce a ``Point`` or an ``(x, y)`` pair into a ``Point``."""
    if isinstance(value, Point):
        return value
    if len(value) != 2:
        raise ValueError(f"Expected an (x, y) pair, got {value!r}")
    return Point(float(value[0]), float(value[1]))


@dataclass(frozen=True)
class Rectangle:
    """Axis-aligned box with its origin at the minimum corner."""

    x: float
    y: float
    width: float
    height: float

    @property
    def min_x(self) -> float:
        return self.x

    @property
    def min_y(self) -> float:
        return self.y

    @property
    def max_x(self) -> float:
        return self.x + self.width

    @property
    def max_y(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point:
        return Point((self.min_x + self.max_x) / 2, (self.min_y + self.max_y) / 2)

    def to_polygon(self) -> Polygon:
        """Return the equivalent four-edge clockwise polygon."""
        from .polygon import Polygon

        return Polygon(
            [
                (self.min_x, self.min_y),
                (self.min_x, self.max_y),
                (self.max_x, self.max_y),
                (self.max_x, self.min_y),
            ]
        )
