# Procedural image engine: palettes, layout, color drift and the generators built on them

from .generator import ProceduralImageGenerator
from .generators import GENERATORS, get_generator

__all__ = ["ProceduralImageGenerator", "GENERATORS", "get_generator"]
