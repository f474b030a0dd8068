# Static data for the procedural generators

from .palettes import (
    ALL_PALETTES,
    MONO_HUES,
    PALETTES,
    Palette,
    get_palette,
    mono_palette,
    random_palette,
    random_palette_name,
)

__all__ = [
    "ALL_PALETTES",
    "MONO_HUES",
    "PALETTES",
    "Palette",
    "get_palette",
    "mono_palette",
    "random_palette",
    "random_palette_name",
]
