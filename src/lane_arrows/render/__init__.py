"""SVG rendering of road networks and lane arrows."""

from lane_arrows.render.svg import render_svg

__all__ = ["render_svg"]
