"""
HSL color shade generation.

Derives lighter and darker shades of a base color by keeping its hue and
saturation and replacing the lightness. No external color libraries
required.
"""

from __future__ import annotations

import colorsys
import math
import re
from collections.abc import Mapping

_HEX_RE = re.compile(r"^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")

# Lightness (percent) of each named shade
DEFAULT_HUES: dict[str, float] = {
    "ultra-light": 90,
    "light": 80,
    "semi-light": 65,
    "semi-dark": 35,
    "dark": 20,
    "ultra-dark": 10,
}


def parse_hex(value: str) -> tuple[float, float, float] | None:
    """Parse ``#rgb`` / ``#rrggbb`` into 0-1 RGB channels, or None."""
    match = _HEX_RE.match(value.strip())
    if not match:
        return None
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return tuple(int(digits[i : i + 2], 16) / 255 for i in (0, 2, 4))  # type: ignore[return-value]


def hex_to_hsl(value: str) -> tuple[float, float, float] | None:
    """Convert a hex color to (hue 0-360, saturation 0-100, lightness 0-100)."""
    rgb = parse_hex(value)
    if rgb is None:
        return None
    h, l, s = colorsys.rgb_to_hls(*rgb)
    return h * 360, s * 100, l * 100


def _channel_hex(channel: float) -> str:
    return f"{math.floor(channel * 255 + 0.5):02x}"


def hsl_to_hex(hue: float, saturation: float, lightness: float) -> str:
    """Convert HSL (degrees, percent, percent) to ``#rrggbb``."""
    r, g, b = colorsys.hls_to_rgb(hue / 360, lightness / 100, saturation / 100)
    return f"#{_channel_hex(r)}{_channel_hex(g)}{_channel_hex(b)}"


def generate_shades(base: str, hues: Mapping[str, float] | None = None) -> dict[str, str]:
    """
    Generate named shades of ``base``.

    Args:
        base: Hex color. Non-hex values (``var(--x)``, names) yield no shades.
        hues: Shade name -> lightness percent. Defaults to DEFAULT_HUES.

    Returns:
        Shade name -> hex color, in ``hues`` order.
    """
    hsl = hex_to_hsl(base)
    if hsl is None:
        return {}
    hue, saturation, _ = hsl
    return {
        name: hsl_to_hex(hue, saturation, lightness)
        for name, lightness in (hues if hues is not None else DEFAULT_HUES).items()
    }
