"""
Color palettes used by the generators: curated painting palettes, hex-defined palettes
and generated monochromatic ramps. Built once at import; everything here is a tuple.
"""
from __future__ import annotations

import logging
from types import MappingProxyType

from ...random_utils import choice
from ...colors import Color, color_from_hex, make_color

logger = logging.getLogger(__name__)

Palette = tuple[Color, ...]

# Curated palettes (RGB 0-255), mostly sampled from well-known paintings
_CURATED_RGB: dict[str, list[tuple[int, int, int]]] = {
    "saint_catherine": [
        (252, 229, 189),
        (107, 81, 46),
        (191, 51, 34),
        (101, 101, 129),
        (230, 164, 90),
    ],
    "girl_pearl": [
        (18, 11, 19),
        (72, 93, 165),
        (205, 182, 122),
        (137, 97, 53),
        (112, 40, 33),
    ],
    "hokusai": [
        (125, 155, 166),
        (192, 183, 168),
        (221, 211, 196),
        (16, 40, 74),
        (71, 75, 78),
    ],
    "letoile": [
        (122, 101, 78),
        (233, 203, 183),
        (172, 113, 59),
        (120, 129, 141),
        (53, 46, 35),
    ],
    "mona_lisa": [
        (2, 9, 15),
        (240, 198, 112),
        (47, 49, 29),
        (93, 114, 69),
        (91, 61, 38),
    ],
    "nighthawks": [
        (119, 52, 30),
        (235, 227, 135),
        (98, 142, 113),
        (21, 43, 54),
        (33, 40, 37),
    ],
    "starry_night": [
        (7, 12, 15),
        (29, 88, 128),
        (254, 206, 62),
        (248, 226, 136),
        (159, 199, 152),
    ],
    "the_kiss": [
        (125, 106, 60),
        (199, 169, 77),
        (119, 143, 80),
        (142, 117, 128),
        (182, 100, 78),
    ],
    "night_watch": [
        (11, 13, 12),
        (245, 220, 150),
        (129, 38, 15),
        (36, 28, 15),
        (42, 44, 40),
    ],
    "the_scream": [
        (208, 64, 11),
        (30, 53, 57),
        (126, 113, 75),
        (184, 162, 96),
        (219, 119, 17),
    ],
    # Paint tube colors
    "original": [
        (40, 36, 34),     # ivory black
        (12, 88, 225),    # ultramarine blue
        (0, 179, 240),    # cerulean blue
        (253, 116, 73),   # burnt umber
        (200, 77, 82),    # alizarin crimson
        (227, 23, 13),    # cadmium red
        (138, 54, 15),    # burnt sienna
        (121, 78, 0),     # raw umber
        (216, 181, 0),    # yellow ochre
        (235, 181, 0),    # cadmium yellow
        (254, 253, 255),  # titanium white
        (84, 137, 62),    # sap green
    ],
    "grays": [
        (20, 20, 20),
        (70, 70, 70),
        (120, 120, 120),
        (180, 180, 180),
        (240, 240, 240),
    ],
    "red_black": [
        (20, 20, 20),
        (20, 0, 0),
        (128, 0, 0),
        (128, 50, 50),
        (240, 240, 240),
    ],
    "just_blue": [
        (0, 20, 20),
        (0, 20, 128),
        (200, 230, 230),
    ],
    "ryb": [
        (20, 20, 20),
        (200, 0, 0),
        (200, 200, 0),
        (0, 0, 200),
        (200, 200, 200),
    ],
}

_HEX: dict[str, list[str]] = {
    "golden_cloud": ["171635", "00225D", "763262", "CA7508", "E9A621"],
}

MONO_HUES = ("red", "green", "blue", "yellow", "orange", "violet")


def palette_from_rgb(triples: list[tuple[int, int, int]]) -> Palette:
    return tuple(make_color(r, g, b) for r, g, b in triples)


def palette_from_hex(codes: list[str]) -> Palette:
    """Palette from hex strings; invalid entries are dropped."""
    return tuple(c for c in (color_from_hex(code) for code in codes) if c is not None)


def mono_palette(hue: str, increments: int = 4) -> Palette:
    """
    Monochromatic ramp of increments + 1 colors, intensity 0..255 in even steps.
    Primaries use one channel, yellow red+green, violet red+blue, orange full red
    with half-intensity green. Unknown hues are logged and give an empty palette.
    """
    if hue not in MONO_HUES:
        logger.warning("mono_palette: unknown hue %r (expected one of %s)", hue, ", ".join(MONO_HUES))
        return ()
    increments = max(1, int(increments))
    step = 255.0 / increments
    colors = []
    for i in range(increments + 1):
        val = max(0, min(255, round(i * step)))
        r = g = b = 0
        if hue == "red":
            r = val
        elif hue == "green":
            g = val
        elif hue == "blue":
            b = val
        elif hue == "yellow":
            r, g = val, val
        elif hue == "orange":
            r, g = val, val // 2
        elif hue == "violet":
            r, b = val, val
        colors.append(make_color(r, g, b))
    return tuple(colors)


def _build_registry() -> dict[str, Palette]:
    registry: dict[str, Palette] = {}
    for name, triples in _CURATED_RGB.items():
        registry[name] = palette_from_rgb(triples)
    for name, codes in _HEX.items():
        registry[name] = palette_from_hex(codes)
    for hue in MONO_HUES:
        registry[f"mono_{hue}"] = mono_palette(hue)
    # empty palettes cannot be drawn with
    return {name: colors for name, colors in registry.items() if colors}


PALETTES = MappingProxyType(_build_registry())
ALL_PALETTES: tuple[Palette, ...] = tuple(PALETTES.values())


def get_palette(name: str) -> Palette | None:
    return PALETTES.get(name)


def random_palette_name() -> str:
    """Name of a palette picked from the registry at random."""
    return choice(tuple(PALETTES)) or ""


def random_palette() -> Palette:
    return PALETTES.get(random_palette_name(), ())
