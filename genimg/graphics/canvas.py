"""
Raster canvas: an RGB float buffer (numpy) with a save/restore drawing-state stack.
Shapes are rasterized to coverage masks with Pillow's ImageDraw and composited with the
current global alpha and blend mode. Origin is top-left, y grows downward.
"""
from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterator, Sequence

import numpy as np
from PIL import Image, ImageDraw

from ..colors import BLACK, Color
from .blend import BlendMode, blend

logger = logging.getLogger(__name__)

Point = tuple[float, float]

# Masks are drawn this many times larger, then box-filtered down (cheap antialiasing)
SUPERSAMPLE = 2


def _identity() -> np.ndarray:
    return np.eye(3, dtype=np.float64)


@dataclass
class DrawState:
    """Everything save_state()/restore_state() brackets."""
    transform: np.ndarray = field(default_factory=_identity)
    alpha: float = 1.0
    blend_mode: BlendMode = BlendMode.NORMAL
    fill_color: Color = BLACK
    stroke_color: Color = BLACK
    line_width: float = 1.0

    def copy(self) -> DrawState:
        return DrawState(
            transform=self.transform.copy(),
            alpha=self.alpha,
            blend_mode=self.blend_mode,
            fill_color=self.fill_color,
            stroke_color=self.stroke_color,
            line_width=self.line_width,
        )


class Canvas:
    """Mutable 2D surface. Not thread-safe; one canvas per image."""

    def __init__(self, width: int, height: int, background: Color = BLACK):
        self.width = int(width)
        self.height = int(height)
        self.pixels = np.empty((self.height, self.width, 3), dtype=np.float32)
        self.pixels[:] = background.rgb()
        self._state = DrawState()
        self._stack: list[DrawState] = []

    # --- drawing state ---
    @property
    def state(self) -> DrawState:
        return self._state

    @property
    def state_depth(self) -> int:
        return len(self._stack)

    def save_state(self) -> None:
        self._stack.append(self._state.copy())

    def restore_state(self) -> None:
        if not self._stack:
            logger.warning("restore_state called with an empty state stack; ignoring")
            return
        self._state = self._stack.pop()

    @contextmanager
    def saved(self) -> Iterator[Canvas]:
        """Scope for transient state: everything changed inside is undone on exit."""
        self.save_state()
        try:
            yield self
        finally:
            self.restore_state()

    def is_clean(self) -> bool:
        """True when no state is pushed and the global state is the default."""
        s = self._state
        return (
            not self._stack
            and s.alpha == 1.0
            and s.blend_mode is BlendMode.NORMAL
            and np.allclose(s.transform, _identity())
        )

    def set_alpha(self, alpha: float) -> None:
        self._state.alpha = max(0.0, min(1.0, float(alpha)))

    def set_blend_mode(self, mode: BlendMode | str) -> None:
        self._state.blend_mode = BlendMode(mode)

    def set_fill_color(self, color: Color) -> None:
        self._state.fill_color = color

    def set_stroke_color(self, color: Color) -> None:
        self._state.stroke_color = color

    def set_line_width(self, width: float) -> None:
        self._state.line_width = max(0.0, float(width))

    def translate(self, dx: float, dy: float) -> None:
        m = _identity()
        m[0, 2] = dx
        m[1, 2] = dy
        self._state.transform = self._state.transform @ m

    def rotate(self, angle: float) -> None:
        """Rotate the local frame by angle radians."""
        c, s = math.cos(angle), math.sin(angle)
        m = np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])
        self._state.transform = self._state.transform @ m

    def to_device(self, points: Sequence[Point]) -> np.ndarray:
        """Map local points through the current transform. Returns (N, 2)."""
        pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
        homo = np.hstack([pts, np.ones((len(pts), 1))])
        return (homo @ self._state.transform.T)[:, :2]

    # --- drawing ---
    def clear(self, color: Color) -> None:
        """Overwrite every pixel, ignoring alpha, blend mode and transform."""
        self.pixels[:] = color.rgb()

    def fill_polygon(self, points: Sequence[Point], color: Color | None = None, opacity: float = 1.0) -> None:
        if len(points) < 3:
            return
        color = color if color is not None else self._state.fill_color
        self._paint(self.to_device(points), color, opacity, outline_width=None)

    def stroke_polygon(
        self,
        points: Sequence[Point],
        color: Color | None = None,
        width: float | None = None,
        *,
        closed: bool = True,
    ) -> None:
        if len(points) < 2:
            return
        color = color if color is not None else self._state.stroke_color
        width = self._state.line_width if width is None else width
        if width <= 0:
            return
        self._paint(self.to_device(points), color, 1.0, outline_width=width, closed=closed)

    def fill_rect(self, x: float, y: float, w: float, h: float, color: Color | None = None, opacity: float = 1.0) -> None:
        self.fill_polygon(_rect_points(x, y, w, h), color, opacity)

    def stroke_rect(self, x: float, y: float, w: float, h: float, color: Color | None = None, width: float | None = None) -> None:
        self.stroke_polygon(_rect_points(x, y, w, h), color, width)

    def fill_ellipse(self, x: float, y: float, w: float, h: float, color: Color | None = None, opacity: float = 1.0) -> None:
        """Fill the ellipse inscribed in the (x, y, w, h) box."""
        self.fill_polygon(_ellipse_points(x, y, w, h), color, opacity)

    def stroke_ellipse(self, x: float, y: float, w: float, h: float, color: Color | None = None, width: float | None = None) -> None:
        self.stroke_polygon(_ellipse_points(x, y, w, h), color, width)

    def _paint(
        self,
        device_pts: np.ndarray,
        color: Color,
        opacity: float,
        *,
        outline_width: float | None,
        closed: bool = True,
    ) -> None:
        if not np.all(np.isfinite(device_pts)):
            logger.debug("Skipping shape with non-finite coordinates")
            return
        a = max(0.0, min(1.0, opacity)) * self._state.alpha * color.a
        if a <= 0.0:
            return

        pad = (outline_width or 0.0) / 2.0 + 1.0
        x0 = max(0, int(math.floor(device_pts[:, 0].min() - pad)))
        y0 = max(0, int(math.floor(device_pts[:, 1].min() - pad)))
        x1 = min(self.width, int(math.ceil(device_pts[:, 0].max() + pad)))
        y1 = min(self.height, int(math.ceil(device_pts[:, 1].max() + pad)))
        if x1 <= x0 or y1 <= y0:
            return

        ss = SUPERSAMPLE
        mask = Image.new("L", ((x1 - x0) * ss, (y1 - y0) * ss), 0)
        draw = ImageDraw.Draw(mask)
        local = [((px - x0) * ss, (py - y0) * ss) for px, py in device_pts]
        if outline_width is None:
            draw.polygon(local, fill=255)
        else:
            if closed:
                local = local + [local[0]]
            draw.line(local, fill=255, width=max(1, int(round(outline_width * ss))), joint="curve")
        if ss > 1:
            mask = mask.resize((x1 - x0, y1 - y0), Image.Resampling.BOX)

        coverage = np.asarray(mask, dtype=np.float32)[..., None] * (a / 255.0)
        region = self.pixels[y0:y1, x0:x1]
        blended = blend(region, color.rgb(), self._state.blend_mode)
        region += (blended.astype(np.float32) - region) * coverage

    # --- output ---
    def to_array(self) -> np.ndarray:
        """(H, W, 3) uint8 copy of the pixels."""
        return (np.clip(self.pixels, 0.0, 1.0) * 255.0 + 0.5).astype(np.uint8)

    def to_image(self) -> Image.Image:
        return Image.fromarray(self.to_array(), "RGB")

    def encode_png(self, path: Path | str) -> bool:
        """Write the canvas as PNG. Returns False (and logs) on failure."""
        try:
            self.to_image().save(str(path), format="PNG")
        except (OSError, ValueError) as e:
            logger.error("Could not write PNG to %s: %s", path, e)
            return False
        return True


def _rect_points(x: float, y: float, w: float, h: float) -> list[Point]:
    return [(x, y), (x + w, y), (x + w, y + h), (x, y + h)]


def _ellipse_points(x: float, y: float, w: float, h: float) -> list[Point]:
    rx, ry = w / 2.0, h / 2.0
    cx, cy = x + rx, y + ry
    # Enough segments that the outline stays smooth at any size
    n = max(16, min(720, int(math.pi * (abs(rx) + abs(ry)))))
    return [
        (cx + rx * math.cos(2 * math.pi * i / n), cy + ry * math.sin(2 * math.pi * i / n))
        for i in range(n)
    ]


def create_canvas(width: int, height: int, background: Color = BLACK) -> Canvas | None:
    """New canvas, or None (logged) when the dimensions are invalid or memory runs out."""
    try:
        w, h = int(width), int(height)
    except (TypeError, ValueError):
        logger.error("Canvas dimensions must be integers, got %r x %r", width, height)
        return None
    if w <= 0 or h <= 0:
        logger.error("Canvas dimensions must be positive, got %s x %s", w, h)
        return None
    try:
        return Canvas(w, h, background)
    except MemoryError:
        logger.error("Could not allocate a %s x %s canvas", w, h)
        return None
