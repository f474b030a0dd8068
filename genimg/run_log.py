"""
Log each written image (path, generator, palette, seed, size, tag) so any image can be
re-rendered later. JSONL, one entry per line.
"""
import json
import logging
from pathlib import Path
from typing import Any

from .config import get_output_dir, load_config

logger = logging.getLogger(__name__)


def get_log_path(config: dict[str, Any] | None = None) -> Path:
    """Path to the run log file (JSONL). Defaults to run_log.jsonl beside the output dir."""
    if config is None:
        config = load_config()
    custom = config.get("log", {}).get("path")
    if custom:
        return Path(custom)
    return get_output_dir(config).parent / "run_log.jsonl"


def log_image(
    image_path: Path | str,
    generator: str,
    *,
    seed: int | None = None,
    palette: str | None = None,
    width: int | None = None,
    height: int | None = None,
    version_tag: str | None = None,
    config: dict[str, Any] | None = None,
) -> Path:
    """Append one image entry to the run log. Returns the path to the log file."""
    log_path = get_log_path(config)
    log_path.parent.mkdir(parents=True, exist_ok=True)
    entry = {
        "image_path": str(image_path),
        "generator": generator,
        "palette": palette,
        "seed": seed,
        "width": width,
        "height": height,
        "version_tag": version_tag,
    }
    with open(log_path, "a", encoding="utf-8") as f:
        f.write(json.dumps(entry, ensure_ascii=False) + "\n")
    return log_path


def read_log(log_path: Path | None = None) -> list[dict[str, Any]]:
    """Read all entries from the run log. Malformed lines are skipped."""
    if log_path is None:
        log_path = get_log_path()
    if not log_path.exists():
        return []
    entries = []
    with open(log_path, encoding="utf-8") as f:
        for n, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                entries.append(json.loads(line))
            except json.JSONDecodeError:
                logger.debug("Skipping malformed run log line %d in %s", n, log_path)
                continue
    return entries
