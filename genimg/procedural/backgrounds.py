"""
Backgrounds: solid fills and layered, semi-transparent rotated washes.
"""
import logging
from enum import Enum

from .. import random_utils
from ..colors import Color, adjust_lightness, make_color
from ..graphics.blend import DARK_BLEND_MODES, LIGHT_BLEND_MODES
from ..graphics.canvas import Canvas
from ..graphics.primitives import Rect, draw_rotated_rect, deg_to_rad

logger = logging.getLogger(__name__)


class BackgroundStyle(str, Enum):
    DARK = "dark"
    LIGHT = "light"


DEFAULT_BASE: dict[BackgroundStyle, Color] = {
    BackgroundStyle.DARK: make_color(12, 12, 14),
    BackgroundStyle.LIGHT: make_color(240, 236, 228),
}


def solid_background(canvas: Canvas, color: Color | None = None) -> None:
    """Cover the whole canvas with one color (default near-black)."""
    canvas.clear(color or DEFAULT_BASE[BackgroundStyle.DARK])


def layered_background(
    canvas: Canvas,
    palette: tuple[Color, ...],
    *,
    style: BackgroundStyle | str = BackgroundStyle.DARK,
    base_color: Color | None = None,
    layer_count: int = 12,
    max_rotation_deg: float = 30.0,
    min_alpha: float = 0.05,
    max_alpha: float = 0.25,
) -> None:
    """
    Base fill, then layer_count large translucent rectangles.

    Each layer is 0.5x-1.5x the canvas size, placed at random, rotated within
    +/- max_rotation_deg, filled with a palette color pushed darker (dark style) or
    lighter (light style), and composited with a blend mode from the style's list
    at an alpha drawn from [min_alpha, max_alpha]. Alpha and blend mode are set per
    layer inside a saved scope, so layers do not compound.
    """
    style = BackgroundStyle(style)
    solid_background(canvas, base_color or DEFAULT_BASE[style])
    if not palette:
        logger.warning("layered_background: empty palette, base color only")
        return

    modes = DARK_BLEND_MODES if style is BackgroundStyle.DARK else LIGHT_BLEND_MODES
    lo_alpha = max(0.0, min(1.0, min(min_alpha, max_alpha)))
    hi_alpha = max(0.0, min(1.0, max(min_alpha, max_alpha)))
    w, h = canvas.width, canvas.height

    for _ in range(max(0, layer_count)):
        base = random_utils.choice(palette)
        amount = random_utils.uniform(0.3, 0.8)
        shift = -amount if style is BackgroundStyle.DARK else amount
        color = adjust_lightness(base, shift) or base

        lw = w * random_utils.uniform(0.5, 1.5)
        lh = h * random_utils.uniform(0.5, 1.5)
        cx = random_utils.uniform(0, w)
        cy = random_utils.uniform(0, h)
        angle = deg_to_rad(random_utils.uniform(-max_rotation_deg, max_rotation_deg))

        with canvas.saved():
            canvas.set_alpha(random_utils.uniform(lo_alpha, hi_alpha))
            canvas.set_blend_mode(random_utils.choice(modes))
            draw_rotated_rect(canvas, Rect.centered(cx, cy, lw, lh), angle=angle, fill=color)
