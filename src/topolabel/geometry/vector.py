"""Two-dimensional vector algebra.

Vectors double as points.  Every operation returns a new Vector; nothing
is mutated in place.
"""

from __future__ import annotations

__all__ = ["Vector"]

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass


@dataclass(frozen=True)
class Vector:
    """An (x, y) pair with value equality."""

    x: float
    y: float

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def __add__(self, other: Vector) -> Vector:
        return Vector(self.x + other.x, self.y + other.y)

    def __sub__(self, other: Vector) -> Vector:
        return Vector(self.x - other.x, self.y - other.y)

    def __mul__(self, scalar: float) -> Vector:
        return Vector(self.x * scalar, self.y * scalar)

    __rmul__ = __mul__

    def __truediv__(self, scalar: float) -> Vector:
        return Vector(self.x / scalar, self.y / scalar)

    def __neg__(self) -> Vector:
        return Vector(-self.x, -self.y)

    def scale(self, k: float) -> Vector:
        return self * k

    def dot(self, other: Vector) -> float:
        return self.x * other.x + self.y * other.y

    def perp(self) -> Vector:
        """Rotate 90 degrees anticlockwise: (x, y) -> (-y, x)."""
        return Vector(-self.y, self.x)

    def cross(self, other: Vector) -> float:
        """Z component of the 3-D cross product."""
        return self.x * other.y - self.y * other.x

    def norm(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> Vector:
        """Unit vector in the same direction.

        Raises ZeroDivisionError for the zero vector; callers must not
        pass zero-length edges.
        """
        length = self.norm()
        if length == 0:
            raise ZeroDivisionError("cannot normalize a zero-length vector")
        return self / length

    def angle(self) -> float:
        return math.atan2(self.y, self.x)

    def rotate(self, angle: float) -> Vector:
        """Rotate anticlockwise by *angle* radians."""
        cos, sin = math.cos(angle), math.sin(angle)
        return Vector(self.x * cos - self.y * sin, self.x * sin + self.y * cos)

    def rotate_degrees(self, angle: float) -> Vector:
        return self.rotate(math.radians(angle))

    def within(self, polygon: Sequence[Vector]) -> bool:
        """Point-in-polygon test by winding number.

        The ring is implicitly closed and may be non-convex or wound
        either way.  Edges are half-open in y (an upward edge includes
        its lower end, a downward edge its upper end), so a point level
        with a vertex or a horizontal edge is counted exactly once.
        """
        winding = 0
        count = len(polygon)
        for index, v0 in enumerate(polygon):
            v1 = polygon[(index + 1) % count]
            side = (v1 - v0).cross(self - v0)
            if v0.y <= self.y:
                if v1.y > self.y and side > 0:
                    winding += 1
            elif v1.y <= self.y and side < 0:
                winding -= 1
        return winding != 0

    @classmethod
    def of(cls, point: Sequence[float]) -> Vector:
        """Coerce an (x, y) sequence (or a Vector) to a Vector."""
        if isinstance(point, Vector):
            return point
        x, y = point
        return cls(float(x), float(y))
