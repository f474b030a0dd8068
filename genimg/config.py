"""
Load and expose app config (YAML). Used by the pipeline and CLI for output dir, canvas size,
run defaults and the run log.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml.
    Each top-level section is merged key by key over the built-in defaults."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    merged = _defaults()
    for key, value in data.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = {**merged[key], **value}
        else:
            merged[key] = value
    return merged


_QUALITY_PRESETS: dict[str, tuple[int, int]] = {
    "draft": (500, 500),
    "standard": (1000, 1000),
    "high": (2000, 2000),
}


def _defaults() -> dict[str, Any]:
    return {
        "output": {
            "dir": "../images",
            "filename_prefix": "art",
            "width": 2000,
            "height": 2000,
            "version_tag": "NOHASH",
            "quality": None,
        },
        "run": {"generator": "basic", "num_images": 15, "seed": None},
        "log": {"enabled": True, "path": None},
    }


def resolve_output_config(config: dict[str, Any]) -> dict[str, Any]:
    """Resolve output config: quality preset overrides width/height if set."""
    out = dict(config.get("output", {}))
    quality = out.get("quality")
    if quality and quality in _QUALITY_PRESETS:
        w, h = _QUALITY_PRESETS[quality]
        out["width"] = w
        out["height"] = h
    return out


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory. Relative paths are taken from the current working
    directory, so the default lands in an images/ folder beside it."""
    out = config.get("output", {})
    d = out.get("dir") or "../images"
    p = Path(d)
    if not p.is_absolute():
        p = Path.cwd() / p
    return p.resolve()
