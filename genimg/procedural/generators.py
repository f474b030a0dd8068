"""
Image generators: each one paints a finished composition onto a canvas.
Every generator takes (canvas, *, palette=None, ...) and picks a random registry palette
when none is given. An empty palette is logged and the canvas is left untouched.
"""
from __future__ import annotations

import logging
import math
from typing import Callable

from .. import random_utils
from ..colors import Color, adjust_lightness, complement
from ..graphics.canvas import Canvas
from ..graphics.primitives import (
    MAX_TAPER,
    Rect,
    RotationSpec,
    TaperSide,
    draw_circle,
    draw_rotated_rect,
    imperfect_circle_points_radians,
    resolve_angle,
)
from .backgrounds import BackgroundStyle, layered_background, solid_background
from .data.palettes import Palette, random_palette
from .layout import grid_cells, line_zones
from .mutation import TRAIN_RATES, WANDER_RATES, mutate_color

logger = logging.getLogger(__name__)

Generator = Callable[..., None]

# Taper sides a wandering shape may narrow
_TAPER_SIDES = (TaperSide.TOP, TaperSide.BOTTOM, TaperSide.LEFT, TaperSide.RIGHT)


def _resolve_palette(palette: Palette | None, who: str) -> Palette | None:
    if palette is None:
        palette = random_palette()
    if not palette:
        logger.error("[%s] empty palette, nothing drawn", who)
        return None
    logger.debug("[%s] using palette with %d colors", who, len(palette))
    return palette


def _random_style() -> BackgroundStyle:
    return BackgroundStyle.DARK if random_utils.chance(70) else BackgroundStyle.LIGHT


def kept_iterations(count: int, thin_out: float) -> int:
    """How many of count scatter iterations survive a thin_out percent skip chance."""
    return sum(1 for _ in range(max(0, count)) if not random_utils.chance(thin_out))


def lane_color(base: Color, *, comp_everything: bool, global_dim: float) -> Color:
    """
    Color for one lane-scatter shape. Rare darkened complements, else an optional row-wide
    complement and a 50% random darken; the row's global dim always goes on last.
    """
    c = base
    if not comp_everything and random_utils.chance(2):
        c = complement(base)
        c = adjust_lightness(c, random_utils.uniform(-0.5, -0.1)) or c
    else:
        if comp_everything:
            c = complement(c)
        if random_utils.chance(50):
            c = adjust_lightness(c, random_utils.uniform(-1.0, 0.0)) or c
    return adjust_lightness(c, global_dim) or c


def train_point_count(radius: float, arc: float, max_car_width: float, gap: float) -> int:
    """Cars on one ring: arc length over the effective car width, never fewer than 5."""
    effective = max_car_width * gap
    if effective <= 0:
        return 5
    return max(5, int(radius * arc / effective))


def car_taper(car_length: float, radius: float, taper_scale: float) -> float:
    """clamp(0, MAX_TAPER, car_length / radius * taper_scale); long cars on tight rings taper most."""
    if radius <= 0:
        return MAX_TAPER
    return max(0.0, min(MAX_TAPER, car_length / radius * taper_scale))


def accent_center(px: float, py: float, theta: float, car_length: float, accent_radius: float) -> tuple[float, float]:
    """Centre of the accent circle sitting just past the outer end of a car pointing along theta."""
    reach = car_length / 2.0 + accent_radius
    return (px + math.cos(theta) * reach, py + math.sin(theta) * reach)


def basic(canvas: Canvas, *, palette: Palette | None = None, iterations: int = 6000) -> None:
    """Thin stroked rectangles on black: mostly long horizontal slivers, some short verticals."""
    palette = _resolve_palette(palette, "basic")
    if palette is None:
        return
    w, h = canvas.width, canvas.height
    with canvas.saved():
        solid_background(canvas, Color(0.0, 0.0, 0.0))
        for _ in range(iterations):
            c = random_utils.choice(palette)
            if random_utils.randint(1, 100) <= 2:
                c = complement(c)
            if random_utils.randint(1, 100) <= 20:
                c = adjust_lightness(c, random_utils.uniform(-1.0, 0.0)) or c

            if random_utils.randint(1, 10) < 2:
                rw, rh = random_utils.uniform(3, 5), random_utils.uniform(80, 100)
            else:
                rw, rh = random_utils.uniform(80, 200), 1.0
            x = random_utils.uniform(0, max(0.0, w - rw))
            y = random_utils.uniform(0, max(0.0, h - rh))
            canvas.stroke_rect(x, y, rw, rh, c, 1.0)


def color_test(canvas: Canvas, *, palette: Palette | None = None) -> None:
    """Swatch strip: each palette color followed by four shades 20% darker apiece."""
    palette = _resolve_palette(palette, "color_test")
    if palette is None:
        return
    n_shades = 5
    bar_w = canvas.width / (len(palette) * n_shades)
    with canvas.saved():
        solid_background(canvas, Color(1.0, 1.0, 1.0))
        x = 0.0
        for original in palette:
            for step in range(n_shades):
                c = original
                if step:
                    c = adjust_lightness(original, -step * 0.20) or original
                canvas.fill_rect(x, 0, bar_w, canvas.height, c)
                x += bar_w


def basic_rot(canvas: Canvas, *, palette: Palette | None = None, iterations: int = 10000) -> None:
    """Stroked rectangles of random size, about one in ten slightly rotated."""
    palette = _resolve_palette(palette, "basic_rot")
    if palette is None:
        return
    w, h = canvas.width, canvas.height
    max_rot = random_utils.uniform(1, 6)
    with canvas.saved():
        solid_background(canvas)
        for _ in range(iterations):
            base = random_utils.choice(palette)
            rw = random_utils.uniform(3, 200)
            rh = random_utils.uniform(3, 10)
            c = base
            solid = False
            if random_utils.chance(2):
                c = complement(base)
                c = adjust_lightness(c, random_utils.uniform(-0.5, -0.1)) or c
                if random_utils.chance(50):
                    solid = True
                    rw, rh = rh, rw
            elif random_utils.chance(50):
                c = adjust_lightness(c, random_utils.uniform(-1.0, 0.0)) or c

            x = random_utils.uniform(0, max(0.0, w - rw))
            y = random_utils.uniform(0, max(0.0, h - rh))
            if x + rw >= w:
                rw = max(1.0, w - x - 1)
            if y + rh >= h:
                rh = max(1.0, h - y - 1)

            rot = RotationSpec.random_degrees(-max_rot, max_rot) if random_utils.randint(1, 100) < 10 else RotationSpec.none()
            draw_rotated_rect(
                canvas,
                Rect(x, y, rw, rh),
                rotation=rot,
                stroke=c,
                line_width=1.0,
                fill=c if solid else None,
            )


def lanes(
    canvas: Canvas,
    *,
    palette: Palette | None = None,
    total_iterations: int = 40000,
    rows: int | None = None,
    cols: int | None = None,
) -> None:
    """
    Lane scatter: small shapes scattered around the cells of a jittered grid.

    Rows (2-12) and columns (1-8) are randomized per image. The iteration budget is
    split evenly across cells. Each row draws its own thin-out percentage (skips up to
    20% of iterations), a global dim applied after the other color transforms, and a
    25% chance to complement every shape in the row.
    """
    palette = _resolve_palette(palette, "lanes")
    if palette is None:
        return
    w, h = canvas.width, canvas.height
    n_rows = rows or random_utils.randint(2, 12)
    cols_per_row = [cols or random_utils.randint(1, 8) for _ in range(n_rows)]
    grid = grid_cells(w, h, n_rows, cols_per_row, fuzziness=0.1)
    n_cells = sum(len(row) for row in grid)
    per_cell = max(1, total_iterations // max(1, n_cells))
    max_rot = random_utils.uniform(1, 6)
    max_y_offset = h / n_rows * 0.4 / 2.0

    with canvas.saved():
        solid_background(canvas)
        for row in grid:
            thin_out = random_utils.randint(0, 20)
            global_dim = random_utils.uniform(-0.4, 0.2)
            comp_everything = random_utils.chance(25)
            max_x_offset = w / max(1, len(row)) / 2.0
            for zone_x, zone_y in row:
                for _ in range(kept_iterations(per_cell, thin_out)):
                    base = random_utils.choice(palette)
                    rw = random_utils.uniform(3, 12)
                    rh = random_utils.uniform(3, 12)
                    cx = zone_x + random_utils.uniform(-max_x_offset, max_x_offset)
                    cy = zone_y + random_utils.uniform(-max_y_offset, max_y_offset)

                    c = lane_color(base, comp_everything=comp_everything, global_dim=global_dim)

                    rot = RotationSpec.random_degrees(-max_rot, max_rot) if random_utils.randint(1, 100) < 10 else RotationSpec.none()
                    draw_rotated_rect(canvas, Rect.centered(cx, cy, rw, rh), rotation=rot, stroke=c, line_width=1.0)


def train(
    canvas: Canvas,
    *,
    palette: Palette | None = None,
    rings: int | None = None,
    style: BackgroundStyle | str | None = None,
) -> None:
    """
    Radial "train": tapered cars riding concentric imperfect circles.

    Point count per ring follows arc length / (max car width * gap factor), at least 5.
    Each car points away from the centre, tapers toward it by
    clamp(0, MAX_TAPER, car length / ring radius * taper scale), and carries an accent
    circle in the complementary color just past its outer end.
    """
    palette = _resolve_palette(palette, "train")
    if palette is None:
        return
    w, h = canvas.width, canvas.height
    size = min(w, h)
    center = (w / 2.0, h / 2.0)
    scale = size / 2000.0
    min_r, max_r = size * 0.08, size * 0.46
    n_rings = rings or random_utils.randint(3, 9)

    with canvas.saved():
        layered_background(canvas, palette, style=style or _random_style())
        color: Color | None = None
        for radius in line_zones(min_r, max_r, n_rings, fuzziness=0.15):
            max_car_w = max(2.0, random_utils.scaled_value(radius, min_r, max_r, 6.0, 28.0, 1.5) * max(scale, 0.05))
            gap = random_utils.uniform(1.1, 1.8)
            taper_scale = random_utils.uniform(0.8, 2.0)
            start = random_utils.uniform(0, 2 * math.pi)
            arc = 2 * math.pi if random_utils.chance(80) else math.radians(random_utils.uniform(90, 300))
            n_points = train_point_count(radius, arc, max_car_w, gap)
            wobble = 0.0 if random_utils.chance(25) else radius * 0.015

            for px, py in imperfect_circle_points_radians(center, radius, n_points, wobble, start, arc):
                color = mutate_color(color, palette, TRAIN_RATES)
                car_w = random_utils.biased_uniform(0.4 * max_car_w, max_car_w, 0.3)
                car_len = random_utils.biased_uniform(1.5 * max_car_w, 4.0 * max_car_w, -0.3)
                taper = car_taper(car_len, radius, taper_scale)
                outward = math.atan2(py - center[1], px - center[0])
                stroke = (adjust_lightness(color, -0.5) or color) if random_utils.chance(30) else None

                theta = draw_rotated_rect(
                    canvas,
                    Rect.centered(px, py, car_len, car_w),
                    rotation=RotationSpec.fixed(math.degrees(outward)),
                    fill=color,
                    fill_opacity=random_utils.uniform(0.6, 1.0),
                    stroke=stroke,
                    taper_factor=taper,
                    taper_side=TaperSide.LEFT,
                )

                accent_r = car_w * random_utils.uniform(0.15, 0.35)
                draw_circle(
                    canvas,
                    accent_center(px, py, theta, car_len, accent_r),
                    accent_r,
                    fill=complement(color),
                    fill_opacity=0.9,
                )


def wander(
    canvas: Canvas,
    *,
    palette: Palette | None = None,
    steps: int | None = None,
    style: BackgroundStyle | str | None = None,
) -> None:
    """
    Random walk of shapes. Position steps away from the walls (next_point_v) and
    occasionally jumps; rotation drifts by small deltas on top of the previous angle
    and occasionally resets; color drifts from the previous step's color.
    """
    palette = _resolve_palette(palette, "wander")
    if palette is None:
        return
    w, h = canvas.width, canvas.height
    size = min(w, h)
    n_steps = steps if steps is not None else random_utils.randint(3000, 6000)
    max_step = max(2, int(size * 0.01))
    max_shape = max(4.0, size * 0.04)

    x = random_utils.uniform(0, w)
    y = random_utils.uniform(0, h)
    angle = 0.0
    color: Color | None = None

    with canvas.saved():
        layered_background(canvas, palette, style=style or _random_style())
        for _ in range(n_steps):
            if random_utils.chance(1):
                x = random_utils.uniform(0, w)
                y = random_utils.uniform(0, h)
            else:
                x = random_utils.next_point_v(x, 0, w, max_step, influence_ratio=0.2, power=3.0)
                y = random_utils.next_point_v(y, 0, h, max_step, influence_ratio=0.2, power=3.0)

            if random_utils.chance(5):
                angle = resolve_angle(RotationSpec.random_degrees(-15, 15))
            else:
                angle = resolve_angle(RotationSpec.random_degrees(-4, 4, offset_radians=angle))

            sw = random_utils.biased_uniform(min(4.0, max_shape), max_shape, -0.5)
            sh = sw if random_utils.chance(30) else sw * random_utils.uniform(0.2, 0.6)

            taper, side = 0.0, TaperSide.NONE
            if random_utils.chance(20):
                taper = random_utils.uniform(0.2, 0.7)
                side = random_utils.choice(_TAPER_SIDES)

            color = mutate_color(color, palette, WANDER_RATES)
            stroke = (adjust_lightness(color, -0.4) or color) if random_utils.chance(15) else None
            draw_rotated_rect(
                canvas,
                Rect.centered(x, y, sw, sh),
                angle=angle,
                fill=color,
                fill_opacity=random_utils.uniform(0.5, 0.95),
                stroke=stroke,
                taper_factor=taper,
                taper_side=side,
            )


def layers(
    canvas: Canvas,
    *,
    palette: Palette | None = None,
    style: BackgroundStyle | str | None = None,
    layer_count: int | None = None,
) -> None:
    """Layered background on its own, heavier than the one under train/wander."""
    palette = _resolve_palette(palette, "layers")
    if palette is None:
        return
    with canvas.saved():
        layered_background(
            canvas,
            palette,
            style=style or _random_style(),
            layer_count=layer_count if layer_count is not None else random_utils.randint(20, 40),
            max_rotation_deg=random_utils.uniform(5, 45),
            min_alpha=0.05,
            max_alpha=0.35,
        )


GENERATORS: dict[str, Generator] = {
    "basic": basic,
    "basic_rot": basic_rot,
    "color_test": color_test,
    "lanes": lanes,
    "layers": layers,
    "train": train,
    "wander": wander,
}


def get_generator(name: str) -> Generator | None:
    return GENERATORS.get(name)
