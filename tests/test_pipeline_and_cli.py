"""
Unit tests for config loading, the image pipeline (naming, per-image failure handling,
run log) and the command-line entry point.
Run from project root: python -m pytest tests/ -v
"""
import json
import os
import re
import sys
import tempfile
import unittest
from datetime import datetime
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from genimg.config import get_output_dir, load_config, resolve_output_config
from genimg.errors import CanvasError, OutputDirError
from genimg.image_generator import ImageGenerator
from genimg.pipeline import generate_images, next_filename

FILENAME_RE = re.compile(r"^art_\d{8}_\d{6}_\d{5}_[A-Za-z0-9]+\.png$")


def _small_config(out_dir: Path, **output) -> dict:
    config = load_config(Path("does-not-exist.yaml"))
    config["output"].update({"dir": str(out_dir), "width": 32, "height": 24, **output})
    return config


class FlakyGenerator(ImageGenerator):
    """Writes a stub file, except on the calls listed in fail_on."""

    def __init__(self, fail_on: set[int]):
        self.fail_on = fail_on
        self.calls = 0
        self.seeds: list[int | None] = []

    def available(self) -> list[str]:
        return ["stub"]

    def generate_image(self, name, output_path, *, seed=None):
        self.calls += 1
        self.seeds.append(seed)
        if self.calls in self.fail_on:
            raise CanvasError("simulated encode failure")
        Path(output_path).write_bytes(b"png")
        return Path(output_path)


class TestConfig(unittest.TestCase):

    def test_defaults_when_missing(self):
        config = load_config(Path("does-not-exist.yaml"))
        self.assertEqual(config["output"]["dir"], "../images")
        self.assertEqual(config["output"]["version_tag"], "NOHASH")
        self.assertEqual(config["run"], {"generator": "basic", "num_images": 15, "seed": None})

    def test_sections_merge_over_defaults(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "c.yaml"
            path.write_text("output:\n  width: 640\nrun:\n  generator: wander\n", encoding="utf-8")
            config = load_config(path)
        self.assertEqual(config["output"]["width"], 640)
        self.assertEqual(config["output"]["height"], 2000)
        self.assertEqual(config["run"]["generator"], "wander")
        self.assertEqual(config["run"]["num_images"], 15)

    def test_quality_preset(self):
        out = resolve_output_config({"output": {"width": 10, "height": 10, "quality": "draft"}})
        self.assertEqual((out["width"], out["height"]), (500, 500))
        out = resolve_output_config({"output": {"width": 10, "height": 10, "quality": "bogus"}})
        self.assertEqual((out["width"], out["height"]), (10, 10))

    def test_relative_output_dir_beside_cwd(self):
        self.assertEqual(get_output_dir({}), (Path.cwd().parent / "images").resolve())


class TestNextFilename(unittest.TestCase):

    def test_format(self):
        now = datetime(2024, 3, 5, 7, 8, 9)
        self.assertEqual(next_filename(7, "abc1234", now), "art_20240305_070809_00007_abc1234.png")

    def test_default_tag(self):
        name = next_filename(1)
        self.assertTrue(name.endswith("_00001_NOHASH.png"))
        self.assertRegex(name, FILENAME_RE)


class TestGenerateImages(unittest.TestCase):

    def test_renders_numbered_pngs(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_dir = Path(tmp) / "images"
            config = _small_config(out_dir)
            paths = generate_images("color_test", 2, version_tag="v1", config=config, seed=5)
            self.assertEqual(len(paths), 2)
            for i, p in enumerate(paths, 1):
                self.assertTrue(p.exists())
                self.assertEqual(p.parent, out_dir)
                self.assertTrue(p.name.endswith(f"_{i:05d}_v1.png"))
                self.assertRegex(p.name, FILENAME_RE)

            from genimg.run_log import read_log
            entries = read_log(Path(tmp) / "run_log.jsonl")
            self.assertEqual(len(entries), 2)
            self.assertEqual([e["seed"] for e in entries], [5, 6])
            self.assertEqual(entries[0]["generator"], "color_test")
            self.assertEqual(entries[0]["width"], 32)

    def test_failed_image_is_skipped(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = _small_config(Path(tmp) / "images")
            config["log"]["enabled"] = False
            gen = FlakyGenerator(fail_on={2})
            with self.assertLogs("genimg.pipeline", level="ERROR"):
                paths = generate_images("stub", 3, generator=gen, config=config, seed=10)
            self.assertEqual(gen.calls, 3)
            self.assertEqual(gen.seeds, [10, 11, 12])
            self.assertEqual(len(paths), 2)
            self.assertTrue(paths[1].name.endswith("_00003_NOHASH.png"))

    def test_unknown_generator(self):
        with tempfile.TemporaryDirectory() as tmp:
            config = _small_config(Path(tmp))
            with self.assertRaises(ValueError):
                generate_images("nope", 1, config=config)

    def test_output_dir_failure_aborts(self):
        with tempfile.TemporaryDirectory() as tmp:
            blocker = Path(tmp) / "file"
            blocker.write_text("x", encoding="utf-8")
            config = _small_config(blocker / "images")
            gen = FlakyGenerator(fail_on=set())
            with self.assertLogs("genimg.pipeline", level="ERROR"):
                with self.assertRaises(OutputDirError):
                    generate_images("stub", 2, generator=gen, config=config)
            self.assertEqual(gen.calls, 0)


class TestRunLog(unittest.TestCase):

    def test_malformed_lines_skipped(self):
        from genimg.run_log import log_image, read_log

        with tempfile.TemporaryDirectory() as tmp:
            log_path = Path(tmp) / "log.jsonl"
            config = {"log": {"path": str(log_path)}}
            log_image("a.png", "wander", seed=1, palette="hokusai", config=config)
            with open(log_path, "a", encoding="utf-8") as f:
                f.write("{not json\n\n")
            log_image("b.png", "train", seed=2, config=config)
            entries = read_log(log_path)
        self.assertEqual([e["image_path"] for e in entries], ["a.png", "b.png"])
        self.assertEqual(entries[0]["palette"], "hokusai")

    def test_missing_log_is_empty(self):
        from genimg.run_log import read_log

        self.assertEqual(read_log(Path("no/such/run_log.jsonl")), [])


class TestCli(unittest.TestCase):

    def _run(self, argv):
        from genimg.cli import main
        return main(argv)

    def test_bad_arguments_exit_2(self):
        for argv in (["not_a_generator"], ["basic", "0"], ["basic", "many"], ["basic", "2", "tag", "--width", "-4"]):
            with self.subTest(argv=argv):
                with self.assertRaises(SystemExit) as ctx:
                    self._run(argv)
                self.assertEqual(ctx.exception.code, 2)

    def test_generates_images(self):
        with tempfile.TemporaryDirectory() as tmp:
            out_dir = Path(tmp) / "images"
            code = self._run([
                "color_test", "2", "abc123",
                "--width", "32", "--height", "16",
                "--seed", "3",
                "--palette", "hokusai",
                "--output-dir", str(out_dir),
                "--config", os.path.join(tmp, "missing.yaml"),
                "--log-level", "WARNING",
            ])
            self.assertEqual(code, 0)
            names = sorted(p.name for p in out_dir.iterdir())
            self.assertEqual(len(names), 2)
            self.assertTrue(all(n.endswith("_abc123.png") for n in names))
            with open(Path(tmp) / "run_log.jsonl", encoding="utf-8") as f:
                first = json.loads(f.readline())
            self.assertEqual(first["palette"], "hokusai")
            self.assertEqual((first["width"], first["height"]), (32, 16))


if __name__ == "__main__":
    unittest.main()
