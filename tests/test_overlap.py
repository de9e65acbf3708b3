"""Tests for the buffered narrow-phase overlap tests."""

import pytest

from topolabel.geometry import Vector, overlaps, segments_within, separated

from shapes import brute_force_distance, random_convex, square


class TestOverlaps:
    """Tests for the GJK convex polygon test."""

    def test_disjoint_unit_squares(self):
        """Separate squares do not overlap."""
        assert not overlaps(square(0, 0), square(2, 0), 0)

    def test_intersecting_unit_squares(self):
        """Intersecting squares overlap."""
        assert overlaps(square(0, 0), square(0.5, 0), 0)

    def test_contained_square(self):
        """A contained square overlaps its container."""
        assert overlaps(square(0, 0, side=4), square(0.5, 0.5), 0)
        assert overlaps(square(0.5, 0.5), square(0, 0, side=4), 0)

    def test_buffer_bridges_gap(self):
        """A buffer equal to the gap counts as overlap."""
        # Gap between the squares is exactly 1
        assert overlaps(square(0, 0), square(2, 0), 1.0)
        assert not overlaps(square(0, 0), square(2, 0), 0.99)

    def test_diagonal_gap(self):
        """Corner-to-corner gaps use Euclidean distance."""
        # Nearest corners are sqrt(2) apart
        assert overlaps(square(0, 0), square(2, 2), 1.5)
        assert not overlaps(square(0, 0), square(2, 2), 1.4)

    def test_winding_does_not_matter(self):
        """Vertex order does not change the result."""
        a = list(reversed(square(0, 0)))
        assert not overlaps(a, square(2, 0), 0.5)
        assert overlaps(a, square(0.9, 0.9), 0)

    def test_degenerate_shapes(self):
        """Points and segments are handled as polygons."""
        point = [Vector(3, 0)]
        segment = [Vector(0, -5), Vector(0, 5)]
        assert overlaps(point, segment, 3)
        assert not overlaps(point, segment, 2.9)
        assert overlaps([Vector(1, 1)] * 4, square(1, 1), 0)

    def test_crossing_segments(self):
        """Crossing segments overlap."""
        a = [Vector(0, 0), Vector(2, 2)]
        b = [Vector(0, 2), Vector(2, 0)]
        assert overlaps(a, b, 0)

    def test_negative_buffer_rejected(self):
        """Negative buffers raise ValueError."""
        with pytest.raises(ValueError):
            overlaps(square(0, 0), square(5, 0), -1)

    def test_separated_is_negation(self):
        """separated is the inverse of overlaps."""
        assert separated(square(0, 0), square(3, 0), 1)
        assert not separated(square(0, 0), square(3, 0), 2)

    def test_iteration_cap_warns_and_reports_overlap(self):
        """Hitting the iteration cap warns and reports overlap."""
        with pytest.warns(UserWarning, match="did not converge"):
            assert overlaps(square(0, 0), square(10, 0), 0, max_iterations=0)


class TestOverlapProperties:
    """Property checks over random convex polygons."""

    def test_symmetric(self, rng):
        """Swapping the shapes gives the same answer."""
        for _ in range(200):
            a, b = random_convex(rng), random_convex(rng)
            buffer = rng.choice([0.0, 0.5, 2.0])
            assert overlaps(a, b, buffer) == overlaps(b, a, buffer)

    def test_buffer_monotonic(self, rng):
        """Growing the buffer never removes an overlap."""
        for _ in range(200):
            a, b = random_convex(rng), random_convex(rng)
            buffers = sorted(rng.uniform(0, 5) for _ in range(4))
            results = [overlaps(a, b, buffer) for buffer in buffers]
            # Once overlapping, stays overlapping as the buffer grows
            assert results == sorted(results)

    def test_matches_exhaustive_distance(self, rng):
        """Results agree with brute-force distance."""
        for _ in range(200):
            a, b = random_convex(rng), random_convex(rng)
            distance = brute_force_distance(a, b)
            buffer = rng.uniform(0, 4)
            if abs(distance - buffer) < 1e-6:
                continue
            assert overlaps(a, b, buffer) == (distance <= buffer)


class TestSegmentsWithin:
    """Tests for the direct segment-segment test."""

    def test_parallel_segments(self):
        """Parallel segments overlap once the buffer reaches the gap."""
        a = [Vector(0, 0), Vector(4, 0)]
        b = [Vector(0, 1), Vector(4, 1)]
        assert segments_within(a, b, 1.0)
        assert not segments_within(a, b, 0.9)

    def test_crossing_segments(self):
        """Crossing segments overlap."""
        a = [Vector(0, 0), Vector(2, 2)]
        b = [Vector(0, 2), Vector(2, 0)]
        assert segments_within(a, b, 0)

    def test_endpoint_to_interior(self):
        """Endpoint to interior distance is measured."""
        a = [Vector(0, 0), Vector(4, 0)]
        b = [Vector(2, 3), Vector(2, 1)]
        assert segments_within(a, b, 1)
        assert not segments_within(a, b, 0.5)

    def test_zero_length_segment(self):
        """A zero-length segment behaves as a point."""
        a = [Vector(5, 5), Vector(5, 5)]
        b = [Vector(5, 6), Vector(5, 6)]
        assert segments_within(a, b, 1)
        assert not segments_within(a, b, 0.5)

    def test_negative_buffer_rejected(self):
        """Negative buffers raise ValueError."""
        with pytest.raises(ValueError):
            segments_within([Vector(0, 0)] * 2, [Vector(1, 1)] * 2, -0.1)

    def test_agrees_with_gjk(self, rng):
        """Segment tests agree with the polygon test."""
        for _ in range(200):
            a = [Vector(rng.uniform(-5, 5), rng.uniform(-5, 5)) for _ in range(2)]
            b = [Vector(rng.uniform(-5, 5), rng.uniform(-5, 5)) for _ in range(2)]
            buffer = rng.uniform(0, 2)
            assert segments_within(a, b, buffer) == overlaps(a, b, buffer)
