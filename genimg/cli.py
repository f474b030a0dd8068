"""
CLI: render a series of images with one generator.
Usage:
  genimg                       # config defaults (basic, 15 images, tag NOHASH)
  genimg wander 5
  genimg train 3 a1b2c3d --seed 7 --width 800 --height 800
"""
import argparse
import logging
import sys
from pathlib import Path

from .config import load_config
from .errors import OutputDirError
from .pipeline import generate_images
from .procedural import GENERATORS, ProceduralImageGenerator
from .procedural.data.palettes import PALETTES

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected a whole number, got {value!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {n}")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="genimg",
        description="Generate procedural PNG artworks (local, no external APIs).",
    )
    parser.add_argument(
        "generator",
        nargs="?",
        choices=sorted(GENERATORS),
        default=None,
        help="Generator to run (default: run.generator from config, 'basic').",
    )
    parser.add_argument(
        "num_images",
        nargs="?",
        type=_positive_int,
        default=None,
        help="How many images to render (default: run.num_images from config, 15).",
    )
    parser.add_argument(
        "version_tag",
        nargs="?",
        default=None,
        help="Tag appended to every filename, e.g. a commit hash (default: NOHASH).",
    )
    parser.add_argument("--width", type=_positive_int, default=None, help="Canvas width in pixels.")
    parser.add_argument("--height", type=_positive_int, default=None, help="Canvas height in pixels.")
    parser.add_argument(
        "--quality",
        choices=["draft", "standard", "high"],
        default=None,
        help="Size preset; ignored when --width/--height are given.",
    )
    parser.add_argument(
        "--palette",
        choices=sorted(PALETTES),
        default=None,
        metavar="NAME",
        help="Use one palette for every image (default: random per image).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the first image; image i uses seed + i - 1.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Output directory (default: ../images relative to the current directory).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: INFO).",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    config = load_config(args.config)
    out_cfg = dict(config.get("output", {}))
    if args.quality:
        out_cfg["quality"] = args.quality
    if args.width or args.height:
        out_cfg["quality"] = None
        out_cfg["width"] = args.width or out_cfg.get("width")
        out_cfg["height"] = args.height or out_cfg.get("height")
    if args.output_dir is not None:
        out_cfg["dir"] = str(args.output_dir)
    config["output"] = out_cfg

    run_cfg = config.get("run", {})
    generator_name = args.generator or run_cfg.get("generator") or "basic"
    num_images = args.num_images or int(run_cfg.get("num_images") or 15)
    seed = args.seed if args.seed is not None else run_cfg.get("seed")
    if generator_name not in GENERATORS:
        parser.error(f"unknown generator {generator_name!r} in config")

    generator = ProceduralImageGenerator(palette_name=args.palette, config=config)
    try:
        paths = generate_images(
            generator_name,
            num_images,
            version_tag=args.version_tag,
            generator=generator,
            config=config,
            seed=seed,
        )
    except OutputDirError as e:
        logger.error("%s", e)
        return 1

    print(f"Wrote {len(paths)}/{num_images} images")
    for p in paths:
        print(f"  {p}")
    return 0 if paths else 1


if __name__ == "__main__":
    sys.exit(main())
