"""Label and barrier collision handling.

Public API:
- buffered_outlines: Convex outlines of a buffered geometry variant
- Barrier / BarrierSet: Indexed obstacles with memoized conflict queries
- Label: Candidate placement with ordinal and pairwise overlap search
- point_candidates / viable_candidates: Candidate construction helpers
- Fence / fences_for / fence_conflicts: Plain segment obstacles
- ConflictGraph: Label-label exclusion graph
"""

from topolabel.labels.barriers import Barrier, BarrierOutline, BarrierSet
from topolabel.labels.conflicts import ConflictGraph
from topolabel.labels.fence import Fence, fence_conflicts, fences_for
from topolabel.labels.label import Label, point_candidates, viable_candidates
from topolabel.labels.outlines import (
    Collection,
    Point,
    PointCloud,
    Polygon,
    Polyline,
    Ring,
    Segment,
    buffered_outlines,
    line_pieces,
)

__all__ = [
    "Barrier",
    "BarrierOutline",
    "BarrierSet",
    "Collection",
    "ConflictGraph",
    "Fence",
    "Label",
    "Point",
    "PointCloud",
    "Polygon",
    "Polyline",
    "Ring",
    "Segment",
    "buffered_outlines",
    "fence_conflicts",
    "fences_for",
    "line_pieces",
    "point_candidates",
    "viable_candidates",
]
