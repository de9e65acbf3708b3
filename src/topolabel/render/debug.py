"""Debug overlay: barrier outlines and label pieces as SVG."""

from __future__ import annotations

__all__ = ["render_debug"]

from collections.abc import Iterable, Sequence

import drawsvg as draw

from topolabel.geometry.rtree import Bounds
from topolabel.geometry.vector import Vector
from topolabel.labels.barriers import BarrierSet
from topolabel.labels.label import Label
from topolabel.render.constants import (
    CANDIDATE_STROKE,
    CONFLICT_STROKE,
    DEBUG_PADDING,
    FEATURE_STROKE,
    OVERLAY_OPACITY,
    STROKE_WIDTH,
)


def _outline(points: Sequence[Vector], stroke: str, stroke_width: float) -> draw.Lines:
    coords = [value for point in points for value in point]
    return draw.Lines(
        *coords,
        close=True,
        fill="none",
        stroke=stroke,
        stroke_width=stroke_width,
    )


def render_debug(
    barriers: BarrierSet,
    labels: Iterable[Label],
    stroke_width: float = STROKE_WIDTH,
    padding: float = DEBUG_PADDING,
) -> str:
    """Draw every barrier outline and label piece, returning SVG text.

    Labels touching a barrier are stroked in the conflict colour.
    """
    labels = list(labels)
    outlines = [points for barrier in barriers for points in barrier.outlines]
    pieces = [piece for label in labels for piece in label.pieces]

    extent = Bounds.of(point for shape in outlines + pieces for point in shape)
    if extent.is_empty:
        extent = Bounds(0.0, 0.0, 0.0, 0.0)
    extent = extent.expand(padding)
    width = extent.x_max - extent.x_min
    height = extent.y_max - extent.y_min

    d = draw.Drawing(width, height, origin=(extent.x_min, extent.y_min))

    features = draw.Group(id="debug-feature", opacity=OVERLAY_OPACITY)
    for points in outlines:
        features.append(_outline(points, FEATURE_STROKE, stroke_width))
    d.append(features)

    candidates = draw.Group(id="debug-candidate", opacity=OVERLAY_OPACITY)
    for label in labels:
        stroke = CONFLICT_STROKE if label.has_barriers else CANDIDATE_STROKE
        for piece in label.pieces:
            candidates.append(_outline(piece, stroke, stroke_width))
    d.append(candidates)

    return d.as_svg()
