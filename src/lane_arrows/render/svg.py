"""SVG plan view of a road network and its lane arrows, using drawsvg."""

from __future__ import annotations

import math

import drawsvg as draw

from lane_arrows.network.model import RoadNetwork, format_arrows
from lane_arrows.render.style import Theme
from lane_arrows.store import ArrowStore


def render_svg(
    store: ArrowStore,
    theme: Theme,
    scale: float = 2.0,
    padding: float = 60.0,
) -> str:
    """Render the store's network to an SVG string.

    Each lane that flows into a node is labelled with its final arrows
    just before that node.
    """
    network = store.network
    if not network.nodes:
        return '<svg xmlns="http://www.w3.org/2000/svg"></svg>'

    min_x = min(n.x for n in network.nodes.values())
    max_x = max(n.x for n in network.nodes.values())
    min_y = min(n.y for n in network.nodes.values())
    max_y = max(n.y for n in network.nodes.values())

    title_height = theme.title_font_size + 20 if network.title else 0
    width = int((max_x - min_x) * scale + padding * 2)
    height = int((max_y - min_y) * scale + padding * 2 + title_height)

    def project(x: float, y: float) -> tuple[float, float]:
        # y grows upwards in the network, downwards in SVG
        return (
            padding + (x - min_x) * scale,
            padding + title_height + (max_y - y) * scale,
        )

    d = draw.Drawing(width, height)
    d.append(draw.Rectangle(0, 0, width, height, fill=theme.background_color))

    if network.title:
        d.append(draw.Text(
            network.title,
            theme.title_font_size,
            padding, padding / 2 + theme.title_font_size / 2,
            fill=theme.title_color,
            font_family=theme.label_font_family,
            font_weight="bold",
        ))

    _render_segments(d, network, theme, project)
    _render_arrows(d, store, theme, project, scale)
    _render_nodes(d, network, theme, project)

    return d.as_svg()


def _render_segments(d: draw.Drawing, network: RoadNetwork, theme: Theme, project) -> None:
    """Draw each segment as a road whose width follows its lane count."""
    for segment in network.segments.values():
        a = network.nodes[segment.start_node]
        b = network.nodes[segment.end_node]
        x1, y1 = project(a.x, a.y)
        x2, y2 = project(b.x, b.y)
        d.append(draw.Line(
            x1, y1, x2, y2,
            stroke=theme.road_color,
            stroke_width=max(1, len(segment.lanes)) * theme.lane_width,
            stroke_linecap="butt",
        ))


def _render_arrows(
    d: draw.Drawing,
    store: ArrowStore,
    theme: Theme,
    project,
    scale: float,
) -> None:
    """Label each lane with its final arrows next to the node it flows into."""
    network = store.network
    for segment in network.segments.values():
        a = network.nodes[segment.start_node]
        b = network.nodes[segment.end_node]
        sx, sy = project(a.x, a.y)
        ex, ey = project(b.x, b.y)
        length = math.hypot(ex - sx, ey - sy)
        if length == 0:
            continue
        ux, uy = (ex - sx) / length, (ey - sy) / length
        # Right-hand normal when facing start -> end (SVG y points down)
        nx_, ny_ = -uy, ux
        n = len(segment.lanes)
        along = min(theme.arrow_offset * scale, length * 0.4)

        for lane in network.segment_lanes(segment.id):
            position = n - 1 - lane.position if segment.inverted else lane.position
            lateral = (position - (n - 1) / 2) * theme.lane_width
            _, at_start = network.outgoing_node(lane.id)
            if at_start:
                bx, by = sx + ux * along, sy + uy * along
            else:
                bx, by = ex - ux * along, ey - uy * along
            d.append(draw.Text(
                format_arrows(store.get_final_lane_arrows(lane.id)),
                theme.arrow_font_size,
                bx + nx_ * lateral, by + ny_ * lateral,
                fill=theme.arrow_color,
                font_family=theme.label_font_family,
                text_anchor="middle",
                dominant_baseline="central",
            ))


def _render_nodes(d: draw.Drawing, network: RoadNetwork, theme: Theme, project) -> None:
    for node in network.nodes.values():
        cx, cy = project(node.x, node.y)
        d.append(draw.Circle(
            cx, cy, theme.node_radius,
            fill=theme.node_fill if node.created else theme.removed_node_fill,
            stroke=theme.node_stroke,
            stroke_width=theme.node_stroke_width,
        ))
        d.append(draw.Text(
            str(node.id),
            theme.label_font_size,
            cx + theme.node_radius + 3, cy - theme.node_radius - 3,
            fill=theme.label_color,
            font_family=theme.label_font_family,
        ))
