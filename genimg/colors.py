"""
Colors and color transforms: construction, hex parsing, lightness, gray-tone, complement.
Colors are immutable RGBA values with float channels in 0..1. Transforms are pure and
return None (never raise) when the input cannot be used; callers pick the fallback.
"""
from __future__ import annotations

import colorsys
import logging
import math
import string
from dataclasses import dataclass

logger = logging.getLogger(__name__)

# Rec. 709 luma coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722


@dataclass(frozen=True)
class Color:
    """RGBA color, channels 0..1."""
    r: float
    g: float
    b: float
    a: float = 1.0

    def rgba(self) -> tuple[float, float, float, float]:
        return (self.r, self.g, self.b, self.a)

    def rgb(self) -> tuple[float, float, float]:
        return (self.r, self.g, self.b)

    def rgb255(self) -> tuple[int, int, int]:
        """Integer channels 0..255 (alpha dropped)."""
        return tuple(int(round(max(0.0, min(1.0, c)) * 255)) for c in self.rgb())  # type: ignore[return-value]

    def is_valid(self) -> bool:
        """True when every channel is a finite number."""
        try:
            return all(math.isfinite(float(c)) for c in self.rgba())
        except (TypeError, ValueError):
            return False

    def with_alpha(self, a: float) -> Color:
        return Color(self.r, self.g, self.b, max(0.0, min(1.0, a)))


BLACK = Color(0.0, 0.0, 0.0)
WHITE = Color(1.0, 1.0, 1.0)
NEUTRAL_GRAY = Color(0.5, 0.5, 0.5)


def make_color(r: int, g: int, b: int, a: float = 1.0) -> Color:
    """Color from 0-255 integer channels (clamped) and alpha 0-1 (clamped)."""
    return Color(
        max(0, min(255, int(r))) / 255.0,
        max(0, min(255, int(g))) / 255.0,
        max(0, min(255, int(b))) / 255.0,
        max(0.0, min(1.0, float(a))),
    )


def color_from_hex(hex_string: str) -> Color | None:
    """Parse "RRGGBB" or "#RRGGBB". Returns None on wrong length or non-hex digits."""
    s = hex_string.strip().replace("#", "")
    if len(s) != 6 or any(ch not in string.hexdigits for ch in s):
        logger.debug("Invalid hex color %r", hex_string)
        return None
    value = int(s, 16)
    return make_color((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def adjust_lightness(color: Color, percent: float) -> Color | None:
    """
    Move HSB brightness toward white (percent > 0) or black (percent < 0).

    percent is clamped to [-1, 1] and is the fraction of the remaining distance
    to travel: 1.0 gives full brightness, -1.0 gives black, 0.0 returns the color
    unchanged. Hue, saturation and alpha are preserved.
    """
    if not color.is_valid():
        logger.warning("adjust_lightness: cannot read channels of %r", color)
        return None
    p = max(-1.0, min(1.0, percent))
    h, s, v = colorsys.rgb_to_hsv(
        max(0.0, min(1.0, color.r)),
        max(0.0, min(1.0, color.g)),
        max(0.0, min(1.0, color.b)),
    )
    if p > 0:
        v += (1.0 - v) * p
    else:
        v += v * p
    v = max(0.0, min(1.0, v))
    r, g, b = colorsys.hsv_to_rgb(h, s, v)
    return Color(r, g, b, color.a)


def luminance(color: Color) -> float:
    return LUMA_R * color.r + LUMA_G * color.g + LUMA_B * color.b


def gray_tone(color: Color, strength: float) -> Color | None:
    """Blend each channel toward the color's Rec. 709 luminance by strength (0..1)."""
    if not color.is_valid():
        logger.warning("gray_tone: cannot read channels of %r", color)
        return None
    t = max(0.0, min(1.0, strength))
    lum = luminance(color)
    return Color(
        color.r + (lum - color.r) * t,
        color.g + (lum - color.g) * t,
        color.b + (lum - color.b) * t,
        color.a,
    )


def complement(color: Color) -> Color:
    """Channel-inverted color with the same alpha. Black if the channels cannot be read."""
    if not color.is_valid():
        logger.warning("complement: cannot read channels of %r, using black", color)
        return BLACK
    return Color(1.0 - color.r, 1.0 - color.g, 1.0 - color.b, color.a)
