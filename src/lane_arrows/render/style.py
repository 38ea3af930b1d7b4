"""Theme and style constants for network rendering."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass
class Theme:
    """Visual theme for a rendered road network."""

    name: str
    background_color: str
    road_color: str
    lane_width: float
    node_fill: str
    node_stroke: str
    node_radius: float
    node_stroke_width: float
    label_color: str
    label_font_family: str
    label_font_size: float
    arrow_color: str
    arrow_font_size: float
    title_color: str
    title_font_size: float
    # Distance from the node centre to the arrow labels, in world units
    arrow_offset: float = 30.0
    removed_node_fill: str = "#888888"
