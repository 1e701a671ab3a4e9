# src/choropleth/core/colors.py
"""
Color ramps and color arithmetic for classified maps.

Named ramps are sampled discretely; user-supplied stops are either picked
evenly or linearly interpolated in RGB space. Colors are ``#rrggbb`` strings
throughout.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from loguru import logger

from choropleth.core.exceptions import InvalidColorError

RGB = Tuple[int, int, int]

DEFAULT_RAMP = "blues"

# ColorBrewer sequential/diverging schemes and viridis, 8 classes each
COLOR_RAMPS: Dict[str, Tuple[str, ...]] = {
    "blues": ("#f7fbff", "#deebf7", "#c6dbef", "#9ecae1", "#6baed6", "#4292c6", "#2171b5", "#084594"),
    "greens": ("#f7fcf5", "#e5f5e0", "#c7e9c0", "#a1d99b", "#74c476", "#41ab5d", "#238b45", "#005a32"),
    "reds": ("#fff5f0", "#fee0d2", "#fcbba1", "#fc9272", "#fb6a4a", "#ef3b2c", "#cb181d", "#99000d"),
    "oranges": ("#fff5eb", "#fee6ce", "#fdd0a2", "#fdae6b", "#fd8d3c", "#f16913", "#d94801", "#8c2d04"),
    "purples": ("#fcfbfd", "#efedf5", "#dadaeb", "#bcbddc", "#9e9ac8", "#807dba", "#6a51a3", "#4a1486"),
    "spectral": ("#d53e4f", "#f46d43", "#fdae61", "#fee08b", "#e6f598", "#abdda4", "#66c2a5", "#3288bd"),
    "viridis": ("#440154", "#482878", "#3e4a89", "#31688e", "#26828e", "#1f9e89", "#35b779", "#6ece58"),
    "warm": ("#ffffcc", "#ffeda0", "#fed976", "#feb24c", "#fd8d3c", "#fc4e2a", "#e31a1c", "#b10026"),
}

OUTLINE_DARKEN = 40


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def parse_hex(color: str) -> RGB:
    """
    Parse ``#rrggbb`` (or shorthand ``#rgb``) into an RGB tuple.

    Raises:
        InvalidColorError: If the string is not a hex color
    """
    if not isinstance(color, str) or not color.startswith("#"):
        raise InvalidColorError(f"Invalid hex color: {color!r}")

    digits = color[1:]
    if len(digits) == 3:
        digits = "".join(c * 2 for c in digits)
    if len(digits) != 6:
        raise InvalidColorError(f"Invalid hex color: {color!r}")

    try:
        return tuple(int(digits[i : i + 2], 16) for i in (0, 2, 4))
    except ValueError:
        raise InvalidColorError(f"Invalid hex color: {color!r}") from None


def to_hex(rgb: Sequence[int]) -> str:
    return "#" + "".join(f"{channel:02x}" for channel in rgb)


def hex_to_rgba(color: str, alpha: float) -> str:
    """Convert a hex color to a CSS ``rgba(r, g, b, a)`` string."""
    r, g, b = parse_hex(color)
    return f"rgba({r}, {g}, {b}, {alpha:g})"


def darken_color(color: str, delta: int = OUTLINE_DARKEN) -> str:
    """Subtract ``delta`` from every channel, clamped at 0."""
    return to_hex(max(0, channel - delta) for channel in parse_hex(color))


def lerp_color(start: str, end: str, t: float) -> str:
    """Linear interpolation between two hex colors, channel by channel."""
    start_rgb = parse_hex(start)
    end_rgb = parse_hex(end)
    return to_hex(
        _round_half_up(a + (b - a) * t) for a, b in zip(start_rgb, end_rgb)
    )


def interpolate_colors(stops: Sequence[str], num_classes: int) -> List[str]:
    """
    Produce ``num_classes`` colors from user-defined color stops.

    When there are at least as many stops as classes, stops are picked at
    evenly spaced indices. Otherwise each class is placed at ``t = i/(n-1)``
    along the stops and interpolated within its bracketing segment, so the
    first and last classes get exactly the first and last stops.

    Args:
        stops: Hex colors, low to high
        num_classes: Number of colors to produce

    Returns:
        List of ``num_classes`` hex colors (empty if there are no stops)
    """
    stops = list(stops)
    if not stops:
        return []
    if len(stops) == 1:
        return stops * num_classes

    last = len(stops) - 1
    if num_classes <= len(stops):
        if num_classes == 1:
            return [stops[0]]
        return [
            stops[_round_half_up(i * last / (num_classes - 1))]
            for i in range(num_classes)
        ]

    colors = []
    for i in range(num_classes):
        segment = i / (num_classes - 1) * last
        idx = int(math.floor(segment))
        if idx >= last:
            colors.append(stops[last])
        else:
            colors.append(lerp_color(stops[idx], stops[idx + 1], segment - idx))
    return colors


def list_ramps() -> List[str]:
    return list(COLOR_RAMPS)


def get_ramp_colors(name: str) -> List[str]:
    """Colors of a named ramp; unknown names fall back to the default ramp."""
    if name not in COLOR_RAMPS:
        logger.warning(f"Unknown color ramp '{name}', using '{DEFAULT_RAMP}'")
        name = DEFAULT_RAMP
    return list(COLOR_RAMPS[name])


def sample_ramp(ramp_colors: Sequence[str], num_classes: int) -> List[str]:
    """
    Pick one ramp color per class without interpolation.

    Class ``i`` takes the last color of its ``len(ramp) // n`` wide bucket.
    With more classes than ramp colors the ramp is interpolated instead.
    """
    size = len(ramp_colors)
    step = size // num_classes
    if step == 0:
        return interpolate_colors(ramp_colors, num_classes)

    return [
        ramp_colors[min(i * step + step - 1, size - 1)] for i in range(num_classes)
    ]


def resolve_colors(
    num_classes: int,
    ramp: str = DEFAULT_RAMP,
    custom_colors: Optional[Sequence[str]] = None,
    reverse: bool = False,
) -> List[str]:
    """
    Resolve one color per class.

    Custom colors take precedence over the named ramp when at least two are
    given. ``reverse`` flips the final list, leaving class boundaries alone.

    Raises:
        InvalidColorError: If a custom color is not a valid hex string
    """
    if custom_colors and len(custom_colors) >= 2:
        for color in custom_colors:
            parse_hex(color)
        colors = interpolate_colors(custom_colors, num_classes)
    else:
        colors = sample_ramp(get_ramp_colors(ramp), num_classes)

    if reverse:
        colors = colors[::-1]
    return colors
