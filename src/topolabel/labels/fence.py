"""Fences: plain segment obstacles tested without convex outlines."""

from __future__ import annotations

__all__ = ["Fence", "fence_conflicts", "fences_for"]

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from topolabel.geometry.overlap import segments_within
from topolabel.geometry.rtree import Bounds, RTree
from topolabel.geometry.vector import Vector
from topolabel.labels.outlines import (
    Collection,
    Geometry,
    Point,
    Polygon,
    Polyline,
    Ring,
    Segment,
)


@dataclass(frozen=True)
class Fence:
    """A single buffered segment.

    *index* is an identifier owned by the caller, typically the position
    of the fence in the list it was built into.
    """

    segment: tuple[Vector, Vector]
    buffer: float = 0.0
    index: Any = None
    bounds: Bounds = field(init=False, compare=False)

    def __post_init__(self) -> None:
        if self.buffer < 0:
            raise ValueError(f"buffer must be non-negative, got {self.buffer}")
        p0, p1 = (Vector.of(p) for p in self.segment)
        object.__setattr__(self, "segment", (p0, p1))
        object.__setattr__(self, "bounds", Bounds.of((p0, p1)).expand(self.buffer))

    def conflicts_with(self, segment: Sequence[Vector], buffer: float = 0.0) -> bool:
        """Check if *segment* comes within the combined buffer of this fence."""
        segment = tuple(Vector.of(p) for p in segment)
        if not self.bounds.overlaps(Bounds.of(segment), buffer):
            return False
        return segments_within(self.segment, segment, self.buffer + buffer)


def _segments(geometry: Geometry) -> Iterator[tuple[Vector, Vector]]:
    if isinstance(geometry, Point):
        yield geometry.position, geometry.position
    elif isinstance(geometry, Segment):
        yield geometry.start, geometry.end
    elif isinstance(geometry, Polyline):
        yield from zip(geometry.points[:-1], geometry.points[1:])
    elif isinstance(geometry, Ring):
        points = list(geometry.points)
        if points and points[0] != points[-1]:
            points.append(points[0])
        yield from zip(points[:-1], points[1:])
    elif isinstance(geometry, Polygon):
        for ring in geometry.rings:
            yield from _segments(ring)
    elif isinstance(geometry, Collection):
        for member in geometry.members:
            yield from _segments(member)
    else:
        raise TypeError(f"cannot build fences from {type(geometry).__name__}")


def fences_for(geometry: Geometry, buffer: float = 0.0, start: int = 0) -> list[Fence]:
    """Split *geometry* into one fence per segment, indexed from *start*.

    A point becomes a zero-length fence.
    """
    return [
        Fence(segment, buffer, index)
        for index, segment in enumerate(_segments(geometry), start)
    ]


def fence_conflicts(
    index: RTree,
    segment: Sequence[Vector],
    buffer: float = 0.0,
) -> Iterator[Fence]:
    """Yield fences in *index* (built over Fence.bounds) that *segment* hits."""
    segment = tuple(Vector.of(p) for p in segment)
    for fence in index.search(Bounds.of(segment), buffer):
        if fence.conflicts_with(segment, buffer):
            yield fence
