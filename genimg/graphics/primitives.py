"""
Shape primitives: rotated/tapered quadrilaterals, circles, and point rings.
Every draw function brackets its work in canvas.saved(), so transforms, alpha and blend
mode set inside never leak to the next shape.
"""
from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from enum import Enum
from typing import NamedTuple

from .. import random_utils
from ..colors import Color
from .canvas import Canvas, Point

logger = logging.getLogger(__name__)

# Taper never collapses an edge to zero width
MAX_TAPER = 0.95


class Rect(NamedTuple):
    x: float
    y: float
    width: float
    height: float

    @property
    def center(self) -> Point:
        return (self.x + self.width / 2.0, self.y + self.height / 2.0)

    @classmethod
    def centered(cls, cx: float, cy: float, width: float, height: float) -> Rect:
        return cls(cx - width / 2.0, cy - height / 2.0, width, height)


class RotationKind(str, Enum):
    NONE = "none"
    FIXED = "fixed"
    RANDOM = "random"


@dataclass(frozen=True)
class RotationSpec:
    """
    How a shape is rotated: not at all, by a fixed number of degrees, or by a random
    angle drawn from [low_degrees, high_degrees] plus optional fixed offsets.
    Build with the classmethods rather than the constructor.
    """
    kind: RotationKind = RotationKind.NONE
    degrees: float = 0.0
    low_degrees: float = 0.0
    high_degrees: float = 0.0
    offset_degrees: float = 0.0
    offset_radians: float = 0.0

    @classmethod
    def none(cls) -> RotationSpec:
        return cls(RotationKind.NONE)

    @classmethod
    def fixed(cls, degrees: float) -> RotationSpec:
        return cls(RotationKind.FIXED, degrees=degrees)

    @classmethod
    def random_degrees(
        cls,
        low: float,
        high: float,
        *,
        offset_degrees: float = 0.0,
        offset_radians: float = 0.0,
    ) -> RotationSpec:
        return cls(
            RotationKind.RANDOM,
            low_degrees=low,
            high_degrees=high,
            offset_degrees=offset_degrees,
            offset_radians=offset_radians,
        )


class TaperSide(str, Enum):
    NONE = "none"
    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


def deg_to_rad(deg: float) -> float:
    return deg * math.pi / 180.0


def resolve_angle(spec: RotationSpec) -> float:
    """Radians for spec. Random specs draw once per call."""
    if spec.kind is RotationKind.NONE:
        return 0.0
    if spec.kind is RotationKind.FIXED:
        return deg_to_rad(spec.degrees)
    if spec.kind is RotationKind.RANDOM:
        deg = random_utils.uniform(spec.low_degrees, spec.high_degrees)
        return deg_to_rad(deg) + deg_to_rad(spec.offset_degrees) + spec.offset_radians
    raise ValueError(f"Unknown rotation kind: {spec.kind}")


def quad_vertices(
    width: float,
    height: float,
    taper_factor: float = 0.0,
    taper_side: TaperSide = TaperSide.NONE,
) -> list[Point]:
    """
    Four vertices of a width x height box centred on the origin, in the order
    bottom-left, bottom-right, top-right, top-left. "Bottom" is -y/2 in local space.
    The taper side is narrowed by taper_factor of its own length, split evenly
    between both ends, giving an isosceles trapezoid.
    """
    hw, hh = width / 2.0, height / 2.0
    t = max(0.0, min(MAX_TAPER, taper_factor))
    bl, br, tr, tl = [-hw, -hh], [hw, -hh], [hw, hh], [-hw, hh]
    if t > 0.0:
        side = TaperSide(taper_side)
        if side is TaperSide.BOTTOM:
            inset = width * t / 2.0
            bl[0] += inset
            br[0] -= inset
        elif side is TaperSide.TOP:
            inset = width * t / 2.0
            tl[0] += inset
            tr[0] -= inset
        elif side is TaperSide.LEFT:
            inset = height * t / 2.0
            bl[1] += inset
            tl[1] -= inset
        elif side is TaperSide.RIGHT:
            inset = height * t / 2.0
            br[1] += inset
            tr[1] -= inset
    return [tuple(bl), tuple(br), tuple(tr), tuple(tl)]  # type: ignore[list-item]


def draw_quad(
    canvas: Canvas,
    width: float,
    height: float,
    *,
    fill: Color | None = None,
    fill_opacity: float = 1.0,
    stroke: Color | None = None,
    line_width: float = 1.0,
    taper_factor: float = 0.0,
    taper_side: TaperSide = TaperSide.NONE,
) -> None:
    """Draw a centred box (or trapezoid) in the canvas's current local frame. Fill goes under stroke."""
    if fill is None and stroke is None:
        return
    pts = quad_vertices(width, height, taper_factor, taper_side)
    if fill is not None:
        canvas.fill_polygon(pts, fill, max(0.0, min(1.0, fill_opacity)))
    if stroke is not None and line_width > 0:
        canvas.stroke_polygon(pts, stroke, line_width)


def draw_rotated_rect(
    canvas: Canvas,
    rect: Rect,
    *,
    rotation: RotationSpec | None = None,
    angle: float | None = None,
    center: Point | None = None,
    fill: Color | None = None,
    fill_opacity: float = 1.0,
    stroke: Color | None = None,
    line_width: float = 1.0,
    taper_factor: float = 0.0,
    taper_side: TaperSide = TaperSide.NONE,
) -> float:
    """
    Draw rect rotated about center (default: the rect's own centre).

    The angle comes from `angle` (radians) if given, else is resolved from `rotation`.
    Returns the angle used so callers can orient dependent shapes the same way.
    When an explicit center differs from the rect's centre, the rect keeps its offset
    from that pivot and swings around it.
    """
    theta = angle if angle is not None else resolve_angle(rotation or RotationSpec.none())
    rect_center = rect.center
    pivot = center if center is not None else rect_center
    with canvas.saved():
        canvas.translate(pivot[0], pivot[1])
        canvas.rotate(theta)
        canvas.translate(rect_center[0] - pivot[0], rect_center[1] - pivot[1])
        draw_quad(
            canvas,
            rect.width,
            rect.height,
            fill=fill,
            fill_opacity=fill_opacity,
            stroke=stroke,
            line_width=line_width,
            taper_factor=taper_factor,
            taper_side=taper_side,
        )
    return theta


def draw_circle(
    canvas: Canvas,
    center: Point,
    radius: float,
    *,
    fill: Color | None = None,
    fill_opacity: float = 1.0,
    stroke: Color | None = None,
    line_width: float = 1.0,
) -> None:
    """Circle inscribed in [center - radius, center + radius]. No-op for radius <= 0."""
    if radius <= 0 or (fill is None and stroke is None):
        return
    x, y = center[0] - radius, center[1] - radius
    d = radius * 2.0
    with canvas.saved():
        if fill is not None:
            canvas.fill_ellipse(x, y, d, d, fill, max(0.0, min(1.0, fill_opacity)))
        if stroke is not None and line_width > 0:
            canvas.stroke_ellipse(x, y, d, d, stroke, line_width)


def imperfect_circle_points_radians(
    center: Point,
    radius: float,
    num_points: int,
    max_offset: float,
    start_angle: float = 0.0,
    arc: float = 2.0 * math.pi,
) -> list[Point]:
    """
    num_points points stepping evenly along an arc (radians), each nudged by an
    independent uniform offset in [-max_offset, max_offset] on x and y.
    Ideal angles are computed fresh per point, so no error accumulates.
    Returns [] for radius <= 0, num_points <= 0 or max_offset < 0.
    """
    if radius <= 0 or num_points <= 0 or max_offset < 0:
        logger.debug(
            "imperfect_circle_points: invalid input radius=%s num_points=%s max_offset=%s",
            radius, num_points, max_offset,
        )
        return []
    step = arc / num_points
    cx, cy = center
    points: list[Point] = []
    for i in range(num_points):
        theta = start_angle + i * step
        x = cx + radius * math.cos(theta)
        y = cy + radius * math.sin(theta)
        if max_offset > 0:
            x += random_utils.uniform(-max_offset, max_offset)
            y += random_utils.uniform(-max_offset, max_offset)
        points.append((x, y))
    return points


def imperfect_circle_points(
    center: Point,
    radius: float,
    num_points: int,
    max_offset: float,
    start_angle_degrees: float = 0.0,
    arc_degrees: float = 360.0,
) -> list[Point]:
    """Degree-based form of imperfect_circle_points_radians."""
    return imperfect_circle_points_radians(
        center,
        radius,
        num_points,
        max_offset,
        deg_to_rad(start_angle_degrees),
        deg_to_rad(arc_degrees),
    )
