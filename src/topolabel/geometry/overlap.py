"""Narrow-phase overlap tests with a clearance buffer.

Two shapes overlap when the minimum distance between them is no greater
than the buffer.  With a zero buffer this is ordinary intersection.
"""

from __future__ import annotations

__all__ = ["overlaps", "segments_within", "separated"]

import warnings
from collections.abc import Sequence

from topolabel.geometry.constants import GJK_MAX_ITERATIONS
from topolabel.geometry.vector import Vector


def _check_buffer(buffer: float) -> None:
    if buffer < 0:
        raise ValueError(f"buffer must be non-negative, got {buffer}")


def _simplex_distance(simplex: list[Vector]) -> float:
    """Distance from the origin to a one- or two-point simplex."""
    if len(simplex) == 1:
        return simplex[0].norm()
    s0, s1 = simplex
    edge = s0 - s1
    if edge.dot(s1) > 0:
        return s1.norm()
    if edge.dot(s0) < 0:
        return s0.norm()
    length = edge.norm()
    if length == 0:
        return s0.norm()
    return abs(s0.cross(s1)) / length


def overlaps(
    polygon_a: Sequence[Vector],
    polygon_b: Sequence[Vector],
    buffer: float = 0.0,
    max_iterations: int = GJK_MAX_ITERATIONS,
) -> bool:
    """Return True if two convex polygons come within *buffer* of each other.

    Gilbert-Johnson-Keerthi over the Minkowski difference A - B, which
    contains a point within *buffer* of the origin exactly when the
    polygons are that close.  The simplex holds one or two support
    points; each iteration either proves separation, proves overlap, or
    moves the simplex strictly closer to the origin.

    Polygons are vertex sequences of either winding, implicitly closed.
    Degenerate polygons (repeated points, two-point segments) are fine.
    """
    _check_buffer(buffer)
    simplex = [polygon_a[0] - polygon_b[0]]
    perp = simplex[0].perp()

    for _ in range(max_iterations):
        if _simplex_distance(simplex) <= buffer:
            return True

        # Support point: extremal along perp.perp() in A, opposite in B
        far = max(polygon_a, key=perp.cross)
        near = min(polygon_b, key=perp.cross)
        support = far - near

        # No progress past the simplex: the origin is out of reach
        if not (simplex[0] - support).cross(perp) > 0:
            return False

        rays = [point - support for point in simplex]
        if len(simplex) == 1:
            if rays[0].dot(support) > 0:
                simplex, perp = [support], support.perp()
            elif rays[0].cross(support) < 0:
                simplex, perp = [support, simplex[0]], rays[0]
            else:
                simplex, perp = [simplex[0], support], -rays[0]
        else:
            if rays[0].cross(support) > 0 and rays[0].dot(support) < 0:
                simplex, perp = [simplex[0], support], -rays[0]
            elif rays[1].cross(support) < 0 and rays[1].dot(support) < 0:
                simplex, perp = [support, simplex[1]], rays[1]
            elif rays[0].cross(support) <= 0 and rays[1].cross(support) >= 0:
                # Origin enclosed by the triangle
                return True
            else:
                simplex, perp = [support], support.perp()

    warnings.warn(
        f"Overlap test did not converge after {max_iterations} iterations; "
        "treating the shapes as overlapping",
        stacklevel=2,
    )
    return True


def separated(
    polygon_a: Sequence[Vector],
    polygon_b: Sequence[Vector],
    buffer: float = 0.0,
) -> bool:
    """Return True if the polygons are strictly further apart than *buffer*."""
    return not overlaps(polygon_a, polygon_b, buffer)


def _point_segment_distance(point: Vector, p0: Vector, p1: Vector) -> float:
    edge = p1 - p0
    length_sq = edge.dot(edge)
    if length_sq == 0:
        return (point - p0).norm()
    t = max(0.0, min(1.0, (point - p0).dot(edge) / length_sq))
    return (point - (p0 + edge * t)).norm()


def _segments_cross(
    a0: Vector, a1: Vector, b0: Vector, b1: Vector
) -> bool:
    """True if the segments properly intersect (straddle each other)."""
    da, db = a1 - a0, b1 - b0
    s1 = da.cross(b0 - a0)
    s2 = da.cross(b1 - a0)
    s3 = db.cross(a0 - b0)
    s4 = db.cross(a1 - b0)
    return s1 * s2 < 0 and s3 * s4 < 0


def segments_within(
    segment_a: Sequence[Vector],
    segment_b: Sequence[Vector],
    buffer: float = 0.0,
) -> bool:
    """Return True if two line segments come within *buffer* of each other.

    A direct two-simplex test: crossing segments are at distance zero,
    otherwise the closest approach involves an endpoint of one of them.
    Zero-length segments (points) are accepted.
    """
    _check_buffer(buffer)
    a0, a1 = segment_a
    b0, b1 = segment_b
    if _segments_cross(a0, a1, b0, b1):
        return True
    distance = min(
        _point_segment_distance(a0, b0, b1),
        _point_segment_distance(a1, b0, b1),
        _point_segment_distance(b0, a0, a1),
        _point_segment_distance(b1, a0, a1),
    )
    return distance <= buffer
