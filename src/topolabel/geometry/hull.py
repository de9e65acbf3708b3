"""Convex hull construction and ring measures."""

from __future__ import annotations

__all__ = ["convex_hull", "is_convex", "signed_area"]

from collections.abc import Iterable, Sequence

from topolabel.geometry.vector import Vector


def convex_hull(points: Iterable[Vector]) -> list[Vector]:
    """Return the convex hull of *points*, anticlockwise.

    Graham-style sweep: points are sorted by angle, then distance, about
    the lowest (then leftmost) point, and the last point is popped off
    the stack whenever the last three fail to make a strict left turn.
    Duplicates and collinear points are dropped.  Inputs with two or
    fewer distinct points are returned unchanged (deduplicated).
    """
    unique = list(dict.fromkeys(points))
    if len(unique) <= 2:
        return unique

    start = min(unique, key=lambda p: (p.y, p.x))
    remaining = sorted(
        (p for p in unique if p != start),
        key=lambda p: ((p - start).angle(), (p - start).norm()),
    )

    hull = [start]
    for p3 in remaining:
        while len(hull) > 1:
            p1, p2 = hull[-2], hull[-1]
            if (p2 - p1).cross(p3 - p1) > 0:
                break
            hull.pop()
        hull.append(p3)
    return hull


def signed_area(ring: Sequence[Vector]) -> float:
    """Shoelace area; positive when the ring winds anticlockwise."""
    count = len(ring)
    return 0.5 * sum(
        ring[i].cross(ring[(i + 1) % count]) for i in range(count)
    )


def is_convex(ring: Sequence[Vector]) -> bool:
    """True if the implicitly closed ring never turns both ways."""
    count = len(ring)
    if count < 3:
        return True
    turns = set()
    for i in range(count):
        a, b, c = ring[i], ring[(i + 1) % count], ring[(i + 2) % count]
        turn = (b - a).cross(c - b)
        if turn > 0:
            turns.add(1)
        elif turn < 0:
            turns.add(-1)
    return len(turns) < 2
