"""Light theme."""

from lane_arrows.render.style import Theme

LIGHT_THEME = Theme(
    name="light",
    background_color="none",
    road_color="#cccccc",
    lane_width=10.0,
    node_fill="#ffffff",
    node_stroke="#333333",
    node_radius=6.0,
    node_stroke_width=2.0,
    label_color="#333333",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    arrow_color="#1a237e",
    arrow_font_size=9.0,
    title_color="#111111",
    title_font_size=22.0,
    removed_node_fill="#bbbbbb",
)
