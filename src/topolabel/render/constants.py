"""Debug overlay styling."""

FEATURE_STROKE = "hsl(260,100%,50%)"
CANDIDATE_STROKE = "hsl(300,100%,50%)"
CONFLICT_STROKE = "hsl(0,100%,50%)"
STROKE_WIDTH = 0.2
OVERLAY_OPACITY = 0.5

# Padding around the drawn content
DEBUG_PADDING = 2.0
