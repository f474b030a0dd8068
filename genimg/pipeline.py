"""
Pipeline: one generator name → a numbered series of PNG files in the output directory.
Each image is independent: a canvas or encode failure skips that image and the run goes on.
"""
import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from .config import get_output_dir, load_config, resolve_output_config
from .errors import CanvasError, OutputDirError
from .image_generator.base import ImageGenerator

logger = logging.getLogger(__name__)

DEFAULT_VERSION_TAG = "NOHASH"


def next_filename(
    seq: int,
    version_tag: str | None = None,
    now: datetime | None = None,
    prefix: str = "art",
) -> str:
    """art_<YYYYMMDD_HHmmss>_<5-digit seq>_<tag>.png; the tag defaults to NOHASH."""
    now = now or datetime.now()
    tag = version_tag or DEFAULT_VERSION_TAG
    return f"{prefix}_{now.strftime('%Y%m%d_%H%M%S')}_{seq:05d}_{tag}.png"


def ensure_output_dir(config: dict[str, Any]) -> Path:
    """Create the output directory if needed. Raises OutputDirError when that fails."""
    out_dir = get_output_dir(config)
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        logger.error("Could not create output directory %s: %s", out_dir, e)
        raise OutputDirError(f"Could not create output directory {out_dir}") from e
    return out_dir


def generate_images(
    generator_name: str,
    num_images: int,
    *,
    version_tag: str | None = None,
    generator: ImageGenerator | None = None,
    config: dict[str, Any] | None = None,
    seed: int | None = None,
) -> list[Path]:
    """
    Render num_images images with generator_name. Returns the paths actually written.
    - Image i (1-based) uses seed + i - 1 when seed is given, else a fresh seed.
    - Unknown generator names raise ValueError before anything is written.
    - OutputDirError aborts the run; CanvasError skips one image.
    """
    if config is None:
        config = load_config()
    if generator is None:
        from .procedural import ProceduralImageGenerator
        generator = ProceduralImageGenerator(config=config)
    if generator_name not in generator.available():
        raise ValueError(
            f"Unknown generator {generator_name!r}; choose from {', '.join(generator.available())}"
        )
    if num_images < 1:
        logger.warning("Nothing to do: num_images=%s", num_images)
        return []

    out_cfg = resolve_output_config(config)
    tag = version_tag or out_cfg.get("version_tag") or DEFAULT_VERSION_TAG
    prefix = out_cfg.get("filename_prefix") or "art"
    out_dir = ensure_output_dir(config)
    log_enabled = bool(config.get("log", {}).get("enabled", False))

    written: list[Path] = []
    for i in range(1, num_images + 1):
        image_seed = seed + i - 1 if seed is not None else None
        path = out_dir / next_filename(i, tag, prefix=prefix)
        try:
            path = generator.generate_image(generator_name, path, seed=image_seed)
        except CanvasError as e:
            logger.error("Image %d/%d skipped: %s", i, num_images, e)
            continue
        logger.info("Saved image %d/%d to %s", i, num_images, path)
        written.append(path)
        if log_enabled:
            _log_image(path, generator_name, generator, tag, config)
    return written


def _log_image(
    path: Path,
    generator_name: str,
    generator: ImageGenerator,
    tag: str,
    config: dict[str, Any],
) -> None:
    from .run_log import log_image
    try:
        log_image(
            path,
            generator_name,
            seed=getattr(generator, "last_seed", None),
            palette=getattr(generator, "last_palette", None),
            width=getattr(generator, "width", None),
            height=getattr(generator, "height", None),
            version_tag=tag,
            config=config,
        )
    except OSError as e:
        logger.warning("Could not append to run log: %s", e)
