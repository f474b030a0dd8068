#!/usr/bin/env python3
"""
CLI: Turn a directory of generated PNGs into one slideshow video.
Usage:
  python scripts/slideshow.py ../images 500
  python scripts/slideshow.py ../images 250 --fps 30 --crossfade 3 -o show.mp4
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import logging

from genimg.slideshow import DEFAULT_FPS, pngs_to_video


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Make an MP4 slideshow from every PNG in a directory (non-recursive)."
    )
    parser.add_argument("directory", type=Path, help="Directory containing the PNG images.")
    parser.add_argument("ms_per_image", type=int, help="How long each image is shown, in milliseconds.")
    parser.add_argument(
        "--output",
        "-o",
        type=Path,
        default=None,
        help="Output video path (default: <directory>/output_video.mp4).",
    )
    parser.add_argument("--fps", type=int, default=DEFAULT_FPS, help=f"Frame rate (default: {DEFAULT_FPS}).")
    parser.add_argument(
        "--crossfade",
        type=int,
        default=0,
        help="Frames spent fading between consecutive images (default: 0).",
    )
    args = parser.parse_args()
    if args.ms_per_image <= 0:
        parser.error("ms_per_image must be a positive integer")
    if not args.directory.is_dir():
        parser.error(f"not a directory: {args.directory}")

    logging.basicConfig(level=logging.INFO, format="%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    try:
        path = pngs_to_video(
            args.directory,
            args.ms_per_image,
            args.output,
            fps=args.fps,
            crossfade_frames=args.crossfade,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    print(f"Done. Video: {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
