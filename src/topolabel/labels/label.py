"""Candidate label placements and label-label overlap detection."""

from __future__ import annotations

__all__ = ["Label", "point_candidates", "viable_candidates"]

from collections.abc import Callable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any

from topolabel.geometry.hull import convex_hull
from topolabel.geometry.overlap import overlaps as convex_overlaps
from topolabel.geometry.rtree import Bounds, RTree
from topolabel.geometry.vector import Vector
from topolabel.labels.constants import (
    DEFAULT_MARGIN,
    DIAGONAL_MARGIN_FACTOR,
    FONT_BUFFER_FRACTION,
    HULL_PREFILTER_MAX_PIECES,
    POINT_POSITIONS,
)
from topolabel.labels.outlines import line_pieces

BarrierQuery = Callable[[Sequence[Vector]], Iterable[Any]]


@dataclass(eq=False)
class Label:
    """A candidate label placement.

    Holds one convex piece per baseline segment (or per text box for
    point labels) and a convex summary hull over all of them.  Labels
    compare by identity; ordering is by ordinal, fewest barrier
    conflicts first, then lowest priority.
    """

    pieces: tuple[tuple[Vector, ...], ...]
    priority: Any = 0
    barriers: frozenset = frozenset()
    text: str = ""
    layer_name: str = ""
    optional: bool = False
    fixed: bool = False
    coexist: tuple[str, ...] = ()
    along: float | None = None
    attributes: Mapping[str, Any] = field(default_factory=dict)
    hull: tuple[Vector, ...] = field(init=False)
    bounds: Bounds = field(init=False)

    def __post_init__(self) -> None:
        self.pieces = tuple(tuple(piece) for piece in self.pieces)
        self.barriers = frozenset(self.barriers)
        self.coexist = tuple(self.coexist)
        points = [point for piece in self.pieces for point in piece]
        self.hull = tuple(convex_hull(points))
        self.bounds = Bounds.of(points)

    @classmethod
    def from_baseline(
        cls,
        baseline: Sequence[Vector],
        font_size: float,
        priority: Any = 0,
        barrier_query: BarrierQuery | None = None,
        buffer_fraction: float = FONT_BUFFER_FRACTION,
        **kwargs: Any,
    ) -> Label:
        """Build a label that follows *baseline*.

        Each baseline segment is buffered by half the font size.  When
        *barrier_query* is given it is called once per piece and the
        barriers it returns are merged into the label's barrier set.
        """
        baseline = [Vector.of(p) for p in baseline]
        pieces = line_pieces(baseline, font_size * buffer_fraction)
        barriers: set = set()
        if barrier_query is not None:
            for piece in pieces:
                barriers.update(barrier_query(piece))
        return cls(pieces, priority=priority, barriers=frozenset(barriers), **kwargs)

    @property
    def barrier_count(self) -> int:
        return len(self.barriers)

    @property
    def ordinal(self) -> tuple[int, Any]:
        return (self.barrier_count, self.priority)

    def __lt__(self, other: Label) -> bool:
        return self.ordinal < other.ordinal

    @property
    def is_point(self) -> bool:
        return self.along is None

    @property
    def has_barriers(self) -> bool:
        return self.barrier_count > 0

    def coexists_with(self, other: Label) -> bool:
        return other.layer_name in self.coexist

    def inside(self, neatline: Sequence[Vector]) -> bool:
        """True if every piece vertex lies within the *neatline* polygon."""
        return all(
            point.within(neatline) for piece in self.pieces for point in piece
        )

    def overlaps_label(self, other: Label, buffer: float = 0.0) -> bool:
        """Piece-by-piece narrow-phase test against another label."""
        if other is self:
            return False
        return any(
            convex_overlaps(piece, other_piece, buffer)
            for piece in self.pieces
            for other_piece in other.pieces
        )

    @staticmethod
    def overlaps(
        labels: Sequence[Label],
        group: Iterable[Label],
        buffer_for: Callable[[Label], float | None],
        prefilter_pieces: int = HULL_PREFILTER_MAX_PIECES,
    ) -> set[tuple[Label, Label]]:
        """Find overlapping pairs between *group* and all of *labels*.

        Args:
            labels: Every label that can be hit.
            group: Labels to test; normally a subset of *labels*.
            buffer_for: Clearance for each group label, or None to skip it.
            prefilter_pieces: Pairs where either label has fewer pieces
                than this are first checked on their summary hulls.

        Returns a set of (label, other) pairs, each unordered pair at
        most once.
        """
        index = RTree.load(
            (Bounds.of(piece), label) for label in labels for piece in label.pieces
        )
        pairs: set[tuple[Label, Label]] = set()
        for label in group:
            buffer = buffer_for(label)
            if buffer is None:
                continue
            if buffer < 0:
                raise ValueError(f"buffer must be non-negative, got {buffer}")
            # one leaf per piece, so the same label can be yielded repeatedly
            seen = {label}
            for other in index.search(label.bounds, buffer):
                if other in seen:
                    continue
                seen.add(other)
                if (label, other) in pairs or (other, label) in pairs:
                    continue
                if min(len(label.pieces), len(other.pieces)) < prefilter_pieces:
                    if not convex_overlaps(label.hull, other.hull, buffer):
                        continue
                if label.overlaps_label(other, buffer):
                    pairs.add((label, other))
        return pairs


def viable_candidates(labels: Iterable[Label]) -> list[Label]:
    """Drop optional labels that conflict with any barrier."""
    return [label for label in labels if not (label.optional and label.has_barriers)]


def _position_offsets(position: str) -> tuple[int, int]:
    if position not in POINT_POSITIONS:
        raise ValueError(f"unknown label position: {position!r}")
    dx = 1 if position.endswith("right") else -1 if position.endswith("left") else 0
    dy = 1 if position.startswith("below") else -1 if position.startswith("above") else 0
    return dx, dy


def point_candidates(
    point: Vector,
    text_length: float,
    font_size: float,
    positions: Sequence[str] = ("over",),
    margin: float = DEFAULT_MARGIN,
    feature_index: int = 0,
    barrier_query: BarrierQuery | None = None,
    **kwargs: Any,
) -> list[Label]:
    """Build one boxed label per position around a point feature.

    The y axis grows downward, so ``below`` places the text at larger y.
    Positions resolving to the same offset are built once.  Each
    candidate's priority is (position_index, feature_index).
    """
    point = Vector.of(point)
    offsets: list[tuple[int, int]] = []
    for position in positions:
        offset = _position_offsets(position)
        if offset not in offsets:
            offsets.append(offset)

    candidates = []
    for position_index, (dx, dy) in enumerate(offsets):
        factor = 1.0 if dx * dy == 0 else DIAGONAL_MARGIN_FACTOR
        anchor = point + Vector(
            dx * (factor * margin + 0.5 * text_length),
            dy * (factor * margin + 0.5 * font_size),
        )
        half = Vector(0.5 * text_length, 0.5 * font_size)
        box = (
            Vector(anchor.x - half.x, anchor.y - half.y),
            Vector(anchor.x + half.x, anchor.y - half.y),
            Vector(anchor.x + half.x, anchor.y + half.y),
            Vector(anchor.x - half.x, anchor.y + half.y),
        )
        barriers = frozenset(barrier_query(box)) if barrier_query else frozenset()
        candidates.append(
            Label(
                (box,),
                priority=(position_index, feature_index),
                barriers=barriers,
                **kwargs,
            )
        )
    return candidates
