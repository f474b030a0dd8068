"""
Turn a directory of PNGs into one slideshow MP4. Each image is held for a fixed time;
optional crossfades blend consecutive images. Requires imageio with the ffmpeg plugin.
"""
import logging
from pathlib import Path

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

DEFAULT_FPS = 25
DEFAULT_OUTPUT_NAME = "output_video.mp4"


def collect_pngs(directory: Path | str) -> list[Path]:
    """PNG files directly inside directory (extension matched case-insensitively), sorted by name."""
    d = Path(directory)
    if not d.is_dir():
        raise NotADirectoryError(f"Not a directory: {d}")
    return sorted(p for p in d.iterdir() if p.is_file() and p.suffix.lower() == ".png")


def frames_per_image(ms_per_image: int, fps: int = DEFAULT_FPS) -> int:
    """Frames each image is held for; at least one."""
    return max(1, round(ms_per_image / 1000.0 * fps))


def _load_rgb(path: Path, size: tuple[int, int] | None) -> np.ndarray:
    with Image.open(path) as im:
        im = im.convert("RGB")
        if size is not None and im.size != size:
            logger.debug("Resizing %s from %s to %s", path.name, im.size, size)
            im = im.resize(size, Image.Resampling.LANCZOS)
        return np.asarray(im, dtype=np.uint8)


def pngs_to_video(
    directory: Path | str,
    ms_per_image: int,
    output: Path | str | None = None,
    *,
    fps: int = DEFAULT_FPS,
    crossfade_frames: int = 0,
) -> Path:
    """
    Write every PNG in directory, in name order, to one MP4 (default:
    <directory>/output_video.mp4). All frames take the first image's size.
    crossfade_frames of each image's hold time are spent fading into the next image.
    """
    if ms_per_image <= 0:
        raise ValueError(f"ms_per_image must be positive, got {ms_per_image}")
    if fps <= 0:
        raise ValueError(f"fps must be positive, got {fps}")
    pngs = collect_pngs(directory)
    if not pngs:
        raise ValueError(f"pngs_to_video: no PNG files in {directory}")

    output_path = Path(output) if output is not None else Path(directory) / DEFAULT_OUTPUT_NAME
    output_path.parent.mkdir(parents=True, exist_ok=True)
    hold = frames_per_image(ms_per_image, fps)
    fade = max(0, min(crossfade_frames, hold - 1))

    import imageio

    with Image.open(pngs[0]) as first:
        size = first.size
    logger.info("Writing %d images (%d frames each) to %s", len(pngs), hold, output_path)

    writer = imageio.get_writer(str(output_path), fps=fps, codec="libx264", quality=8)
    try:
        current = _load_rgb(pngs[0], size)
        for i in range(len(pngs)):
            nxt = _load_rgb(pngs[i + 1], size) if i + 1 < len(pngs) else None
            steady = hold - fade if nxt is not None else hold
            for _ in range(steady):
                writer.append_data(current)
            if nxt is not None:
                for k in range(1, fade + 1):
                    t = k / (fade + 1)
                    mixed = current.astype(np.float32) * (1.0 - t) + nxt.astype(np.float32) * t
                    writer.append_data(mixed.round().astype(np.uint8))
                current = nxt
    finally:
        writer.close()
    return output_path
