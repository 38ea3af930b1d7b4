"""Theme definitions for network rendering."""

from lane_arrows.themes.dark import DARK_THEME
from lane_arrows.themes.light import LIGHT_THEME

THEMES = {
    "dark": DARK_THEME,
    "light": LIGHT_THEME,
}

__all__ = ["THEMES", "DARK_THEME", "LIGHT_THEME"]
