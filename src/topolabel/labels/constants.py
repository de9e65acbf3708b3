"""Label collision constants."""

# Label piece buffer as a fraction of font size
FONT_BUFFER_FRACTION = 0.5

# Labels with fewer pieces than this are pre-filtered on their summary hull
HULL_PREFILTER_MAX_PIECES = 3

# Barrier clearance when none is given
DEFAULT_BARRIER_BUFFER = 0.0

# Point label placement
DEFAULT_MARGIN = 1.0
DIAGONAL_MARGIN_FACTOR = 0.6
POINT_POSITIONS = (
    "over",
    "above",
    "below",
    "left",
    "right",
    "aboveleft",
    "aboveright",
    "belowleft",
    "belowright",
)
