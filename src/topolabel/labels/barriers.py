"""Barriers: map features that labels must keep clear of."""

from __future__ import annotations

__all__ = ["Barrier", "BarrierOutline", "BarrierSet"]

import functools
import threading
from collections.abc import Callable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any

from topolabel.geometry.overlap import overlaps
from topolabel.geometry.rtree import Bounds, RTree
from topolabel.geometry.vector import Vector
from topolabel.labels.constants import DEFAULT_BARRIER_BUFFER
from topolabel.labels.outlines import Geometry, buffered_outlines


@dataclass(frozen=True)
class BarrierOutline:
    """One convex piece of a barrier.

    *barrier_index* points into the owning BarrierSet's barrier list.
    """

    points: tuple[Vector, ...]
    barrier_index: int
    bounds: Bounds


@dataclass(eq=False)
class Barrier:
    """A feature buffered by its own clearance distance.

    Compared and hashed by identity, so distinct barriers built from
    equal geometry are still counted separately.
    """

    source: Any
    geometry: Geometry
    buffer: float = DEFAULT_BARRIER_BUFFER
    outlines: tuple[tuple[Vector, ...], ...] = field(init=False)

    def __post_init__(self) -> None:
        self.outlines = tuple(
            tuple(piece) for piece in buffered_outlines(self.geometry, self.buffer)
        )


def _cache_key(outline: Sequence[Vector], buffer: float) -> tuple:
    return (float(buffer), tuple((p.x, p.y) for p in outline))


class BarrierSet:
    """A collection of barriers with an indexed, memoized conflict query.

    Barriers are indexed on their buffered outlines, so the index is
    exact for the clearance each barrier carries; the caller's query
    buffer widens the search box and the narrow-phase test by the same
    amount.  The index is built on the first query, after which the set
    is frozen.  Queries are safe from multiple threads.
    """

    def __init__(self) -> None:
        self._barriers: list[Barrier] = []
        self._index: RTree | None = None
        self._cache: dict[tuple, frozenset[Barrier]] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._barriers)

    def __iter__(self) -> Iterator[Barrier]:
        return iter(self._barriers)

    def __getitem__(self, index: int) -> Barrier:
        return self._barriers[index]

    @property
    def frozen(self) -> bool:
        return self._index is not None

    def add(
        self,
        source: Any,
        geometry: Geometry,
        buffer: float = DEFAULT_BARRIER_BUFFER,
    ) -> Barrier:
        """Wrap *geometry* from *source* as a barrier and add it to the set."""
        if self._index is not None:
            raise RuntimeError("cannot add barriers after the set has been queried")
        barrier = Barrier(source, geometry, buffer)
        self._barriers.append(barrier)
        return barrier

    @property
    def outlines(self) -> list[BarrierOutline]:
        return [
            BarrierOutline(points, index, Bounds.of(points))
            for index, barrier in enumerate(self._barriers)
            for points in barrier.outlines
        ]

    def _ensure_index(self) -> RTree:
        if self._index is None:
            with self._lock:
                if self._index is None:
                    self._index = RTree.load(
                        self.outlines, key=lambda outline: outline.bounds
                    )
        return self._index

    def conflicts(
        self,
        outline: Sequence[Vector],
        buffer: float = 0.0,
    ) -> frozenset[Barrier]:
        """Return the barriers whose outlines come within *buffer* of *outline*.

        *outline* must be convex.  Results are cached on the buffer and
        the exact outline coordinates.
        """
        if buffer < 0:
            raise ValueError(f"buffer must be non-negative, got {buffer}")
        index = self._ensure_index()
        key = _cache_key(outline, buffer)
        with self._lock:
            cached = self._cache.get(key)
        if cached is not None:
            return cached

        found: set[int] = set()
        for barrier_outline in index.search(Bounds.of(outline), buffer):
            if barrier_outline.barrier_index in found:
                continue
            if overlaps(barrier_outline.points, outline, buffer):
                found.add(barrier_outline.barrier_index)
        result = frozenset(self._barriers[i] for i in found)

        with self._lock:
            self._cache.setdefault(key, result)
        return result

    def query(self, buffer: float = 0.0) -> Callable[[Sequence[Vector]], frozenset[Barrier]]:
        """Return a one-argument conflict query at a fixed buffer."""
        return functools.partial(self.conflicts, buffer=buffer)
