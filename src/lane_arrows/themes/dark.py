"""Dark asphalt theme."""

from lane_arrows.render.style import Theme

DARK_THEME = Theme(
    name="dark",
    background_color="#2b2b2b",
    road_color="#555555",
    lane_width=10.0,
    node_fill="#ffffff",
    node_stroke="#333333",
    node_radius=6.0,
    node_stroke_width=1.5,
    label_color="#e0e0e0",
    label_font_family="'Helvetica Neue', Helvetica, Arial, sans-serif",
    label_font_size=12.0,
    arrow_color="#ffd54f",
    arrow_font_size=9.0,
    title_color="#ffffff",
    title_font_size=22.0,
)
