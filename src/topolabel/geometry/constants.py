"""Geometry constants."""

# Safety cap on narrow-phase iterations.  Convergence normally takes a
# handful of steps; hitting the cap means floating-point cycling.
GJK_MAX_ITERATIONS = 1000
