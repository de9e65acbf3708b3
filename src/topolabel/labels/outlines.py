"""Buffered convex outlines for geometric features.

Each geometry variant is turned into one or more convex polygons that
cover its footprint grown by a clearance buffer.  Lines are broken into
one piece per segment rather than hulled whole, which keeps the pieces
tight around bends while every piece stays convex.
"""

from __future__ import annotations

__all__ = [
    "Collection",
    "Geometry",
    "Point",
    "PointCloud",
    "Polygon",
    "Polyline",
    "Ring",
    "Segment",
    "buffered_outlines",
    "line_pieces",
]

from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Union

from topolabel.geometry.hull import convex_hull
from topolabel.geometry.vector import Vector


def _vectors(points: Sequence) -> tuple[Vector, ...]:
    return tuple(Vector.of(p) for p in points)


@dataclass(frozen=True)
class Point:
    position: Vector

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", Vector.of(self.position))


@dataclass(frozen=True)
class Segment:
    start: Vector
    end: Vector

    def __post_init__(self) -> None:
        object.__setattr__(self, "start", Vector.of(self.start))
        object.__setattr__(self, "end", Vector.of(self.end))


@dataclass(frozen=True)
class Polyline:
    """Open line.  A polyline whose ends meet is buffered as a ring."""

    points: tuple[Vector, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _vectors(self.points))


@dataclass(frozen=True)
class Ring:
    """Closed line; the closing vertex may be given or left implicit."""

    points: tuple[Vector, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _vectors(self.points))


@dataclass(frozen=True)
class Polygon:
    exterior: tuple[Vector, ...]
    holes: tuple[tuple[Vector, ...], ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "exterior", _vectors(self.exterior))
        object.__setattr__(self, "holes", tuple(_vectors(h) for h in self.holes))

    @property
    def rings(self) -> tuple[Ring, ...]:
        return (Ring(self.exterior), *(Ring(hole) for hole in self.holes))


@dataclass(frozen=True)
class PointCloud:
    """Vertices of outlines that were already buffered."""

    points: tuple[Vector, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "points", _vectors(self.points))


@dataclass(frozen=True)
class Collection:
    members: tuple = field(default_factory=tuple)

    def __post_init__(self) -> None:
        object.__setattr__(self, "members", tuple(self.members))


Geometry = Union[Point, Segment, Polyline, Ring, Polygon, PointCloud, Collection]


def _square(centre: Vector, buffer: float) -> list[Vector]:
    x, y = centre
    return [
        Vector(x - buffer, y - buffer),
        Vector(x + buffer, y - buffer),
        Vector(x + buffer, y + buffer),
        Vector(x - buffer, y + buffer),
    ]


def _dedupe(points: Sequence[Vector]) -> list[Vector]:
    """Drop consecutive duplicate vertices so no edge has zero length."""
    result: list[Vector] = []
    for point in points:
        if not result or point != result[-1]:
            result.append(point)
    return result


def line_pieces(
    points: Sequence[Vector],
    buffer: float,
    closed: bool = False,
) -> list[list[Vector]]:
    """Buffer a line into one convex piece per segment.

    Each segment becomes a quadrilateral offset by *buffer* either side.
    Where consecutive offsets turn, a mitre point at distance *buffer*
    from the shared vertex is added on the outside of the turn, filling
    the gap between neighbouring pieces.  Open lines get flat end caps;
    closed lines wrap the mitre round the first vertex.

    Args:
        points: Line vertices.  For closed lines the closing vertex
            (equal to the first) must be included.
        buffer: Clearance distance, non-negative.
        closed: Whether the line is a ring.
    """
    points = _dedupe(points)
    if len(points) < 2:
        return [_square(points[0], buffer)] if points else []

    pairs = list(zip(points[:-1], points[1:]))
    offsets = [(p1 - p0).perp().normalized() * buffer for p0, p1 in pairs]

    if closed:
        extended = [offsets[-1], *offsets, offsets[0]]
    else:
        extended = [offsets[0], *offsets, offsets[-1]]

    corners: list[Vector | None] = []
    for o01, o12 in zip(extended[:-1], extended[1:]):
        turn = o12.cross(o01)
        if turn == 0:
            corners.append(None)
        else:
            sign = 1 if turn > 0 else -1
            corners.append((o01 + o12).normalized() * (buffer * sign))

    pieces = []
    for index, ((p0, p1), offset) in enumerate(zip(pairs, offsets)):
        c0, c1 = corners[index], corners[index + 1]
        piece = [p0 + offset]
        if c0 is not None:
            piece.append(p0 + c0)
        piece += [p0 - offset, p1 - offset]
        if c1 is not None:
            piece.append(p1 + c1)
        piece.append(p1 + offset)
        pieces.append(piece)
    return pieces


def _ring_points(points: Sequence[Vector]) -> list[Vector]:
    points = list(points)
    if points and points[0] != points[-1]:
        points.append(points[0])
    return points


def _point_outlines(geometry: Point, buffer: float) -> list[list[Vector]]:
    return [_square(geometry.position, buffer)]


def _segment_outlines(geometry: Segment, buffer: float) -> list[list[Vector]]:
    return line_pieces([geometry.start, geometry.end], buffer)


def _polyline_outlines(geometry: Polyline, buffer: float) -> list[list[Vector]]:
    points = geometry.points
    closed = len(points) > 2 and points[0] == points[-1]
    return line_pieces(points, buffer, closed=closed)


def _ring_outlines(geometry: Ring, buffer: float) -> list[list[Vector]]:
    points = _ring_points(geometry.points)
    if len(_dedupe(points)) < 3:
        return line_pieces(points, buffer)
    return line_pieces(points, buffer, closed=True)


def _polygon_outlines(geometry: Polygon, buffer: float) -> list[list[Vector]]:
    return [
        piece for ring in geometry.rings for piece in _ring_outlines(ring, buffer)
    ]


def _cloud_outlines(geometry: PointCloud, buffer: float) -> list[list[Vector]]:
    hull = convex_hull(geometry.points)
    return [hull] if hull else []


def _collection_outlines(geometry: Collection, buffer: float) -> list[list[Vector]]:
    return [
        piece
        for member in geometry.members
        for piece in buffered_outlines(member, buffer)
    ]


_BUILDERS = {
    Point: _point_outlines,
    Segment: _segment_outlines,
    Polyline: _polyline_outlines,
    Ring: _ring_outlines,
    Polygon: _polygon_outlines,
    PointCloud: _cloud_outlines,
    Collection: _collection_outlines,
}


def buffered_outlines(geometry: Geometry, buffer: float) -> list[list[Vector]]:
    """Return convex polygons covering *geometry* grown by *buffer*.

    Raises ValueError for a negative buffer and TypeError for anything
    that is not one of the geometry variants.
    """
    if buffer < 0:
        raise ValueError(f"buffer must be non-negative, got {buffer}")
    try:
        builder = _BUILDERS[type(geometry)]
    except KeyError:
        raise TypeError(
            f"cannot buffer {type(geometry).__name__}; expected one of "
            + ", ".join(cls.__name__ for cls in _BUILDERS)
        ) from None
    return builder(geometry, buffer)
