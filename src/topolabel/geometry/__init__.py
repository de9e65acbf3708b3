"""Planar geometry primitives for collision testing.

Public API:
- Vector: 2-D point/vector value type
- convex_hull: Anticlockwise convex hull of a point set
- overlaps / separated: Buffered convex polygon overlap (GJK)
- segments_within: Buffered segment-segment test
- Bounds / RTree: Bulk-loaded broad-phase index
"""

from topolabel.geometry.hull import convex_hull, is_convex, signed_area
from topolabel.geometry.overlap import overlaps, segments_within, separated
from topolabel.geometry.rtree import Bounds, RTree
from topolabel.geometry.vector import Vector

__all__ = [
    "Bounds",
    "RTree",
    "Vector",
    "convex_hull",
    "is_convex",
    "overlaps",
    "segments_within",
    "separated",
    "signed_area",
]
