"""Tests for barriers and the memoized barrier query."""

from concurrent.futures import ThreadPoolExecutor

import pytest

from topolabel.geometry import Vector
from topolabel.labels import BarrierSet, Label, Point, Polyline, Segment

from shapes import square


class TestBarrier:
    """Tests for individual barriers."""

    def test_outlines_buffered_by_own_clearance(self, point_barrier_set):
        """Barrier outlines are grown by the barrier's own buffer."""
        barriers, _ = point_barrier_set
        (outline,) = barriers[0].outlines
        assert set(outline) == set(square(0, 0, side=2))

    def test_barriers_compare_by_identity(self):
        """Barriers built from equal geometry stay distinct."""
        barriers = BarrierSet()
        a = barriers.add("same", Point((0, 0)))
        b = barriers.add("same", Point((0, 0)))
        assert a != b
        assert len({a, b}) == 2


class TestBarrierSet:
    """Tests for BarrierSet.conflicts."""

    def test_label_clear_of_point_barrier(self, point_barrier_set):
        """A label away from the barrier reports no conflicts."""
        barriers, _ = point_barrier_set
        label = Label.from_baseline(
            [Vector(3, 0), Vector(4, 0)], font_size=0.8, barrier_query=barriers.query()
        )
        assert label.barrier_count == 0

    def test_label_on_point_barrier(self, point_barrier_set):
        """A label over the barrier reports its source barrier."""
        barriers, source = point_barrier_set
        label = Label.from_baseline(
            [Vector(0.5, 0), Vector(1.5, 0)], font_size=0.8, barrier_query=barriers.query()
        )
        assert label.barrier_count == 1
        (barrier,) = label.barriers
        assert barrier.source is source

    def test_query_buffer_widens_search(self):
        """A larger query buffer finds barriers further away."""
        barriers = BarrierSet()
        barriers.add("spot", Point((0, 0)))
        candidate = square(2, 0)
        # Nearest edge of the candidate is 1.5 from the point
        assert barriers.conflicts(candidate, 1.4) == frozenset()
        assert len(barriers.conflicts(candidate, 1.6)) == 1

    def test_conflicts_counted_per_source(self):
        """Only barriers with a hit outline are reported."""
        barriers = BarrierSet()
        barriers.add("road", Polyline([(0, 0), (2, 0), (4, 0), (6, 0)]), buffer=0.5)
        barriers.add("creek", Segment((0, 10), (6, 10)), buffer=0.5)
        result = barriers.conflicts(square(3, 0, side=6))
        assert [barrier.source for barrier in result] == ["road"]

    def test_results_are_cached(self, point_barrier_set):
        """Repeated queries return the cached result object."""
        barriers, _ = point_barrier_set
        first = barriers.conflicts(square(0.5, 0), 0.25)
        second = barriers.conflicts(list(square(0.5, 0)), 0.25)
        assert first is second
        assert barriers.conflicts(square(0.5, 0), 0.5) is not first

    def test_add_after_query_rejected(self, point_barrier_set):
        """Adding a barrier once the index is built raises."""
        barriers, _ = point_barrier_set
        assert not barriers.frozen
        barriers.conflicts(square(5, 5))
        assert barriers.frozen
        with pytest.raises(RuntimeError):
            barriers.add("late", Point((1, 1)))

    def test_empty_set(self):
        """An empty set reports no conflicts."""
        barriers = BarrierSet()
        assert barriers.conflicts(square(0, 0), 10) == frozenset()

    def test_negative_buffer_rejected(self, point_barrier_set):
        """Negative query buffers raise ValueError."""
        barriers, _ = point_barrier_set
        with pytest.raises(ValueError):
            barriers.conflicts(square(0, 0), -0.5)

    def test_concurrent_queries_match_sequential(self, rng):
        """Threaded queries give the same answers as sequential ones."""
        def build():
            barriers = BarrierSet()
            for i in range(60):
                barriers.add(i, Point((i % 10 * 3.0, i // 10 * 3.0)), buffer=0.5)
            return barriers

        candidates = [
            square(rng.uniform(0, 30), rng.uniform(0, 18), rng.uniform(0.5, 4))
            for _ in range(200)
        ]
        sequential = build()
        expected = [
            sorted(b.source for b in sequential.conflicts(c, 0.2)) for c in candidates
        ]

        shared = build()
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(lambda c: shared.conflicts(c, 0.2), candidates))
        assert [sorted(b.source for b in r) for r in results] == expected
