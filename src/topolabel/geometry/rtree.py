"""Bulk-loaded bounding-box index for broad-phase pruning.

The tree is built once from a complete batch of items and never changes
afterwards.  Rebuild it wholesale if the item set changes.
"""

from __future__ import annotations

__all__ = ["Bounds", "RTree"]

import math
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from topolabel.geometry.vector import Vector


@dataclass(frozen=True)
class Bounds:
    """Axis-aligned box as [min, max] intervals per axis.

    An empty box (min greater than max on an axis) has no extent and
    overlaps nothing.
    """

    x_min: float
    y_min: float
    x_max: float
    y_max: float

    @classmethod
    def empty(cls) -> Bounds:
        return cls(math.inf, math.inf, -math.inf, -math.inf)

    @classmethod
    def of(cls, points: Iterable[Vector]) -> Bounds:
        """Smallest box containing *points*; empty if there are none."""
        xs, ys = [], []
        for point in points:
            xs.append(point.x)
            ys.append(point.y)
        if not xs:
            return cls.empty()
        return cls(min(xs), min(ys), max(xs), max(ys))

    @classmethod
    def union(cls, boxes: Iterable[Bounds]) -> Bounds:
        x_min = y_min = math.inf
        x_max = y_max = -math.inf
        for box in boxes:
            x_min = min(x_min, box.x_min)
            y_min = min(y_min, box.y_min)
            x_max = max(x_max, box.x_max)
            y_max = max(y_max, box.y_max)
        return cls(x_min, y_min, x_max, y_max)

    @property
    def is_empty(self) -> bool:
        return self.x_min > self.x_max or self.y_min > self.y_max

    def expand(self, buffer: float) -> Bounds:
        if self.is_empty:
            return self
        return Bounds(
            self.x_min - buffer,
            self.y_min - buffer,
            self.x_max + buffer,
            self.y_max + buffer,
        )

    def overlaps(self, other: Bounds, buffer: float = 0.0) -> bool:
        """Check if two boxes come within *buffer* of each other per axis."""
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x_max + buffer >= other.x_min
            and other.x_max + buffer >= self.x_min
            and self.y_max + buffer >= other.y_min
            and other.y_max + buffer >= self.y_min
        )

    def contains(self, other: Bounds) -> bool:
        if self.is_empty or other.is_empty:
            return False
        return (
            self.x_min <= other.x_min
            and self.y_min <= other.y_min
            and self.x_max >= other.x_max
            and self.y_max >= other.y_max
        )

    @property
    def interval_sums(self) -> tuple[float, float]:
        """Per-axis interval sums, the sort keys for median splits."""
        return (self.x_min + self.x_max, self.y_min + self.y_max)


def _in_two(items: list) -> list[list]:
    """Split into two halves, the first taking the odd item."""
    half = (len(items) + 1) // 2
    return [chunk for chunk in (items[:half], items[half:]) if chunk]


class RTree:
    """A node of a static bounding-box tree.

    Internal nodes hold child nodes and the union of their bounds; leaf
    nodes hold exactly one object and its bounds.
    """

    __slots__ = ("bounds", "children", "obj")

    def __init__(
        self,
        children: Sequence[RTree],
        bounds: Bounds,
        obj: Any = None,
    ) -> None:
        self.children = tuple(children)
        self.bounds = bounds
        self.obj = obj

    @property
    def is_leaf(self) -> bool:
        return not self.children

    def __repr__(self) -> str:
        return f"RTree(bounds={self.bounds!r}, size={len(self)})"

    def __len__(self) -> int:
        return sum(1 for _ in self)

    @classmethod
    def load(
        cls,
        items: Iterable[Any],
        key: Callable[[Any], Bounds] | None = None,
    ) -> RTree:
        """Bulk-load a tree.

        Args:
            items: (Bounds, object) pairs, or bare objects when *key* is
                given.
            key: Optional function returning the Bounds of each object.

        Items are sorted on the sum of their x interval and split at the
        median; each half is sorted on the y interval sum and split
        again, recursively, until each partition holds one item.
        An empty batch gives an empty tree that matches nothing.
        """
        if key is not None:
            pairs = [(key(item), item) for item in items]
        else:
            pairs = list(items)
        if not pairs:
            return cls((), Bounds.empty())
        return cls._build(pairs)

    @classmethod
    def _build(cls, pairs: list[tuple[Bounds, Any]]) -> RTree:
        if len(pairs) == 1:
            bounds, obj = pairs[0]
            return cls((), bounds, obj)
        children = []
        by_x = sorted(pairs, key=lambda pair: pair[0].interval_sums[0])
        for half in _in_two(by_x):
            by_y = sorted(half, key=lambda pair: pair[0].interval_sums[1])
            for quarter in _in_two(by_y):
                children.append(cls._build(quarter))
        return cls(children, Bounds.union(child.bounds for child in children))

    def search(self, bounds: Bounds, buffer: float = 0.0) -> Iterator[Any]:
        """Lazily yield objects whose bounds come within *buffer* of *bounds*.

        Only nodes whose bounds overlap the query box expanded by
        *buffer* are descended into.  The generator is single-use.
        """
        if buffer < 0:
            raise ValueError(f"buffer must be non-negative, got {buffer}")
        return self._search(bounds, buffer)

    def _search(self, bounds: Bounds, buffer: float) -> Iterator[Any]:
        stack = [self]
        while stack:
            node = stack.pop()
            if not node.bounds.overlaps(bounds, buffer):
                continue
            if node.is_leaf:
                yield node.obj
            else:
                stack.extend(reversed(node.children))

    def __iter__(self) -> Iterator[tuple[Bounds, Any]]:
        """Yield (bounds, object) for every leaf, in tree order."""
        stack = [self]
        while stack:
            node = stack.pop()
            if node.is_leaf:
                if not node.bounds.is_empty:
                    yield node.bounds, node.obj
            else:
                stack.extend(reversed(node.children))
