"""Developer overlays for inspecting collision geometry."""

from topolabel.render.debug import render_debug

__all__ = ["render_debug"]
