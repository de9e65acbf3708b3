"""Shared test fixtures for the topolabel test suite."""

from __future__ import annotations

import random

import pytest

from topolabel.geometry import Vector
from topolabel.labels import BarrierSet, Point


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def point_barrier_set() -> tuple[BarrierSet, dict]:
    """A single point barrier at the origin with clearance 1."""
    source = {"name": "trig station"}
    barriers = BarrierSet()
    barriers.add(source, Point(Vector(0, 0)), buffer=1.0)
    return barriers, source
