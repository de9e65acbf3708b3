"""Tests for the debug overlay."""

import xml.etree.ElementTree as ET

from topolabel.geometry import Vector
from topolabel.labels import BarrierSet, Label, Point
from topolabel.render import render_debug
from topolabel.render.constants import CANDIDATE_STROKE, CONFLICT_STROKE, FEATURE_STROKE


def _scene():
    barriers = BarrierSet()
    barriers.add("spot", Point((0, 0)), buffer=1.0)
    query = barriers.query()
    blocked = Label.from_baseline([Vector(0.5, 0), Vector(1.5, 0)], 0.8, barrier_query=query)
    clear = Label.from_baseline([Vector(3, 0), Vector(4, 0)], 0.8, barrier_query=query)
    return barriers, [blocked, clear]


def test_render_produces_valid_svg():
    """Output parses as an SVG document."""
    svg = render_debug(*_scene())
    root = ET.fromstring(svg)
    assert root.tag.endswith("svg")


def test_render_contains_feature_and_candidate_strokes():
    """Barriers and candidates use their stroke colours."""
    svg = render_debug(*_scene())
    assert FEATURE_STROKE in svg
    assert CANDIDATE_STROKE in svg


def test_render_highlights_blocked_labels():
    """Labels touching barriers use the conflict colour."""
    barriers, labels = _scene()
    assert CONFLICT_STROKE in render_debug(barriers, labels)
    assert CONFLICT_STROKE not in render_debug(barriers, labels[1:])


def test_render_empty_scene():
    """An empty scene still renders."""
    svg = render_debug(BarrierSet(), [])
    assert "svg" in svg
