"""
Blend modes for compositing a source color over the canvas.
Formulas follow the W3C Compositing and Blending spec; all values are floats in 0..1.
"""
from enum import Enum

import numpy as np


class BlendMode(str, Enum):
    NORMAL = "normal"
    MULTIPLY = "multiply"
    SCREEN = "screen"
    OVERLAY = "overlay"
    DARKEN = "darken"
    LIGHTEN = "lighten"
    COLOR_DODGE = "color_dodge"
    COLOR_BURN = "color_burn"
    SOFT_LIGHT = "soft_light"
    HARD_LIGHT = "hard_light"
    DIFFERENCE = "difference"
    EXCLUSION = "exclusion"
    HUE = "hue"
    SATURATION = "saturation"
    COLOR = "color"
    LUMINOSITY = "luminosity"


# Modes that wash out or crush light backgrounds
_LIGHT_EXCLUDED = {
    BlendMode.DARKEN,
    BlendMode.LIGHTEN,
    BlendMode.COLOR_DODGE,
    BlendMode.COLOR_BURN,
}

DARK_BLEND_MODES: tuple[BlendMode, ...] = tuple(BlendMode)
LIGHT_BLEND_MODES: tuple[BlendMode, ...] = tuple(m for m in BlendMode if m not in _LIGHT_EXCLUDED)


def _hard_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    s2 = 2.0 * cs
    return np.where(cs <= 0.5, cb * s2, cb + (s2 - 1.0) - cb * (s2 - 1.0))


def _soft_light(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    d = np.where(cb <= 0.25, ((16.0 * cb - 12.0) * cb + 4.0) * cb, np.sqrt(cb))
    return np.where(
        cs <= 0.5,
        cb - (1.0 - 2.0 * cs) * cb * (1.0 - cb),
        cb + (2.0 * cs - 1.0) * (d - cb),
    )


def _color_dodge(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        q = np.minimum(1.0, cb / np.maximum(1.0 - cs, 1e-12))
    return np.where(cb <= 0.0, 0.0, np.where(cs >= 1.0, 1.0, q))


def _color_burn(cb: np.ndarray, cs: np.ndarray) -> np.ndarray:
    with np.errstate(divide="ignore", invalid="ignore"):
        q = 1.0 - np.minimum(1.0, (1.0 - cb) / np.maximum(cs, 1e-12))
    return np.where(cb >= 1.0, 1.0, np.where(cs <= 0.0, 0.0, q))


def _lum(c: np.ndarray) -> np.ndarray:
    return (0.3 * c[..., 0] + 0.59 * c[..., 1] + 0.11 * c[..., 2])[..., None]


def _clip_color(c: np.ndarray) -> np.ndarray:
    lum = _lum(c)
    n = c.min(axis=-1, keepdims=True)
    x = c.max(axis=-1, keepdims=True)
    with np.errstate(divide="ignore", invalid="ignore"):
        low = lum + (c - lum) * lum / np.where(lum - n == 0, 1.0, lum - n)
        c = np.where(n < 0.0, low, c)
        high = lum + (c - lum) * (1.0 - lum) / np.where(x - lum == 0, 1.0, x - lum)
        c = np.where(x > 1.0, high, c)
    return c


def _set_lum(c: np.ndarray, lum: np.ndarray) -> np.ndarray:
    return _clip_color(c + (lum - _lum(c)))


def _sat(c: np.ndarray) -> np.ndarray:
    return c.max(axis=-1, keepdims=True) - c.min(axis=-1, keepdims=True)


def _set_sat(c: np.ndarray, s: np.ndarray) -> np.ndarray:
    mn = c.min(axis=-1, keepdims=True)
    span = c.max(axis=-1, keepdims=True) - mn
    with np.errstate(divide="ignore", invalid="ignore"):
        out = (c - mn) * s / np.where(span > 0, span, 1.0)
    return np.where(span > 0, out, 0.0)


def blend(backdrop: np.ndarray, source: np.ndarray, mode: BlendMode = BlendMode.NORMAL) -> np.ndarray:
    """
    Blend result B(cb, cs) for every pixel, before alpha compositing.
    backdrop is (..., 3); source broadcasts against it (a single RGB is fine).
    """
    cb = np.asarray(backdrop, dtype=np.float64)
    cs = np.broadcast_to(np.asarray(source, dtype=np.float64), cb.shape)
    mode = BlendMode(mode)

    if mode is BlendMode.NORMAL:
        out = cs
    elif mode is BlendMode.MULTIPLY:
        out = cb * cs
    elif mode is BlendMode.SCREEN:
        out = cb + cs - cb * cs
    elif mode is BlendMode.OVERLAY:
        out = _hard_light(cs, cb)
    elif mode is BlendMode.DARKEN:
        out = np.minimum(cb, cs)
    elif mode is BlendMode.LIGHTEN:
        out = np.maximum(cb, cs)
    elif mode is BlendMode.COLOR_DODGE:
        out = _color_dodge(cb, cs)
    elif mode is BlendMode.COLOR_BURN:
        out = _color_burn(cb, cs)
    elif mode is BlendMode.SOFT_LIGHT:
        out = _soft_light(cb, cs)
    elif mode is BlendMode.HARD_LIGHT:
        out = _hard_light(cb, cs)
    elif mode is BlendMode.DIFFERENCE:
        out = np.abs(cb - cs)
    elif mode is BlendMode.EXCLUSION:
        out = cb + cs - 2.0 * cb * cs
    elif mode is BlendMode.HUE:
        out = _set_lum(_set_sat(cs, _sat(cb)), _lum(cb))
    elif mode is BlendMode.SATURATION:
        out = _set_lum(_set_sat(cb, _sat(cs)), _lum(cb))
    elif mode is BlendMode.COLOR:
        out = _set_lum(cs, _lum(cb))
    elif mode is BlendMode.LUMINOSITY:
        out = _set_lum(cb, _lum(cs))
    else:
        raise ValueError(f"Unsupported blend mode: {mode}")
    return np.clip(out, 0.0, 1.0)
