"""
Procedural image generator: implements ImageGenerator with the generators in this package.
No external model: palette + seeded random draws → canvas → PNG.
"""
import logging
import random
from pathlib import Path
from typing import Any

from .. import random_utils
from ..errors import CanvasError
from ..graphics.canvas import create_canvas
from ..image_generator.base import ImageGenerator
from .data.palettes import get_palette, random_palette_name
from .generators import GENERATORS

logger = logging.getLogger(__name__)


class ProceduralImageGenerator(ImageGenerator):
    """
    Renders one registered generator per call onto a fresh width x height canvas.
    The palette is fixed by palette_name, or drawn at random for every image.
    After each call, last_seed and last_palette hold what was used, for the run log.
    """

    def __init__(
        self,
        width: int = 2000,
        height: int = 2000,
        *,
        palette_name: str | None = None,
        config: dict[str, Any] | None = None,
    ):
        from ..config import resolve_output_config
        out = resolve_output_config(config or {})
        self.width = int(out.get("width") or width)
        self.height = int(out.get("height") or height)
        self.palette_name = palette_name
        self.last_seed: int | None = None
        self.last_palette: str | None = None

    def available(self) -> list[str]:
        return sorted(GENERATORS)

    def generate_image(
        self,
        name: str,
        output_path: Path,
        *,
        seed: int | None = None,
    ) -> Path:
        func = GENERATORS.get(name)
        if func is None:
            raise ValueError(f"Unknown generator {name!r}; choose from {', '.join(self.available())}")

        # A concrete seed is always recorded so any image can be re-rendered
        if seed is None:
            seed = random.SystemRandom().randrange(2**32)
        random_utils.seed(seed)

        palette_name = self.palette_name or random_palette_name()
        palette = get_palette(palette_name)
        if palette is None:
            logger.warning("Unknown palette %r, using a random one", palette_name)
            palette_name = random_palette_name()
            palette = get_palette(palette_name)
        self.last_seed = seed
        self.last_palette = palette_name

        canvas = create_canvas(self.width, self.height)
        if canvas is None:
            raise CanvasError(f"Could not create {self.width}x{self.height} canvas")

        logger.info("Rendering %s (palette=%s, seed=%s, %dx%d)", name, palette_name, seed, self.width, self.height)
        func(canvas, palette=palette)
        if not canvas.is_clean():
            logger.warning("%s left %d unrestored canvas states", name, canvas.state_depth)

        output_path = Path(output_path)
        if output_path.suffix == "":
            output_path = output_path.with_suffix(".png")
        if not canvas.encode_png(output_path):
            raise CanvasError(f"Could not write {output_path}")
        return output_path
