"""Color string parsing and formatting utilities for chromakit."""

import re
from typing import Optional

from .colors import (
    BLACK,
    BLUE,
    GRAY,
    GREEN,
    ORANGE,
    PINK,
    PURPLE,
    RED,
    WHITE,
    YELLOW,
    Color,
)

NAMED_COLORS = {
    "black": BLACK,
    "white": WHITE,
    "red": RED,
    "green": GREEN,
    "blue": BLUE,
    "orange": ORANGE,
    "purple": PURPLE,
    "yellow": YELLOW,
    "pink": PINK,
    "gray": GRAY,
    "grey": GRAY,
}

OUTPUT_FORMATS = ("hex", "rgb", "hsl", "lab", "cmyk", "raw")

_NUMBER = r"(\d+(?:\.\d+)?)"


def parse_hex_color(color_str: str) -> Optional[Color]:
    """Parse hexadecimal color format #RRGGBB or #RRGGBBAA."""
    return Color.from_hex(color_str)


def parse_rgb_color(color_str: str) -> Optional[Color]:
    """Parse RGB color format rgb(R, G, B) or rgba(R, G, B, A)."""
    pattern = (
        r"rgba?\s*\(\s*(\d+)\s*,\s*(\d+)\s*,\s*(\d+)\s*"
        r"(?:,\s*" + _NUMBER + r"\s*)?\)"
    )
    match = re.fullmatch(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    r, g, b = (int(match.group(i)) for i in (1, 2, 3))
    alpha = float(match.group(4)) if match.group(4) is not None else 1.0

    if not all(0 <= val <= 255 for val in (r, g, b)) or not 0.0 <= alpha <= 1.0:
        return None

    return Color.from_rgb255(r, g, b, alpha)


def parse_hsl_color(color_str: str) -> Optional[Color]:
    """Parse HSL color format hsl(H, S%, L%)."""
    pattern = r"hsl\s*\(\s*" + _NUMBER + r"\s*,\s*" + _NUMBER + r"\s*%\s*,\s*" + _NUMBER + r"\s*%\s*\)"
    match = re.fullmatch(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    h, s, lightness = (float(match.group(i)) for i in (1, 2, 3))
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= lightness <= 100):
        return None

    return Color.from_hsl(h / 360, s / 100, lightness / 100)


def parse_hsv_color(color_str: str) -> Optional[Color]:
    """Parse HSV color format hsv(H, S%, V%); hsb(...) is accepted too."""
    pattern = r"hs[vb]\s*\(\s*" + _NUMBER + r"\s*,\s*" + _NUMBER + r"\s*%\s*,\s*" + _NUMBER + r"\s*%\s*\)"
    match = re.fullmatch(pattern, color_str.strip(), re.IGNORECASE)

    if not match:
        return None

    h, s, v = (float(match.group(i)) for i in (1, 2, 3))
    if not (0 <= h <= 360 and 0 <= s <= 100 and 0 <= v <= 100):
        return None

    return Color.from_hsb(h / 360, s / 100, v / 100)


def parse_named_color(color_str: str) -> Optional[Color]:
    return NAMED_COLORS.get(color_str.strip().lower())


def parse_color(color_str: str) -> Color:
    """Parse color string in various formats."""
    color_str = color_str.strip()

    parsers = [
        parse_hex_color,
        parse_rgb_color,
        parse_hsl_color,
        parse_hsv_color,
        parse_named_color,
    ]

    for parser in parsers:
        result = parser(color_str)
        if result is not None:
            return result

    raise ValueError(
        f"Invalid color format: '{color_str}'. "
        "Supported formats: #RRGGBB, #RRGGBBAA, rgb(R,G,B), rgba(R,G,B,A), "
        "hsl(H,S%,L%), hsv(H,S%,V%), or a color name"
    )


def format_color(color: Color, format_type: str = "hex") -> str:
    """Format one color; `format_type` is one of OUTPUT_FORMATS."""
    if format_type == "hex":
        return color.hex()
    if format_type == "rgb":
        r, g, b = (int(round(c * 255)) for c in color.rgb)
        return f"rgb({r}, {g}, {b})"
    if format_type == "hsl":
        return color.hsl_string()
    if format_type == "lab":
        return color.lab_string()
    if format_type == "cmyk":
        return color.cmyk_string()
    if format_type == "raw":
        return "({:.4f}, {:.4f}, {:.4f}, {:.4f})".format(*color.rgba())
    raise ValueError(
        f"Unknown output format '{format_type}'. Expected one of: {', '.join(OUTPUT_FORMATS)}"
    )


def format_color_output(colors: list[Color], format_type: str = "hex") -> list[str]:
    """Format colors for output."""
    return [format_color(color, format_type) for color in colors]
