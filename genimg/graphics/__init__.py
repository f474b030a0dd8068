"""
Graphics: raster canvas, blend modes, and shape primitives.
"""
from .blend import BlendMode, DARK_BLEND_MODES, LIGHT_BLEND_MODES, blend
from .canvas import Canvas, create_canvas
from .primitives import (
    MAX_TAPER,
    Rect,
    RotationKind,
    RotationSpec,
    TaperSide,
    draw_circle,
    draw_quad,
    draw_rotated_rect,
    imperfect_circle_points,
    imperfect_circle_points_radians,
    quad_vertices,
    resolve_angle,
)

__all__ = [
    "BlendMode",
    "DARK_BLEND_MODES",
    "LIGHT_BLEND_MODES",
    "blend",
    "Canvas",
    "create_canvas",
    "MAX_TAPER",
    "Rect",
    "RotationKind",
    "RotationSpec",
    "TaperSide",
    "draw_circle",
    "draw_quad",
    "draw_rotated_rect",
    "imperfect_circle_points",
    "imperfect_circle_points_radians",
    "quad_vertices",
    "resolve_angle",
]
