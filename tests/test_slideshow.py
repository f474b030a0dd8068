"""
Unit tests for the PNG slideshow writer (slideshow.py).
Run from project root: python -m pytest tests/ -v
"""
import importlib.util
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from PIL import Image

from genimg.slideshow import collect_pngs, frames_per_image, pngs_to_video


def _write_png(path: Path, size=(32, 32), color=(200, 30, 30)) -> None:
    Image.new("RGB", size, color).save(path, format="PNG")


class TestCollect(unittest.TestCase):

    def test_only_direct_pngs_case_insensitive(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            _write_png(d / "b.png")
            _write_png(d / "A.PNG")
            (d / "notes.txt").write_text("x", encoding="utf-8")
            (d / "sub").mkdir()
            _write_png(d / "sub" / "c.png")
            self.assertEqual([p.name for p in collect_pngs(d)], ["A.PNG", "b.png"])

    def test_not_a_directory(self):
        with self.assertRaises(NotADirectoryError):
            collect_pngs(Path("no/such/dir"))

    def test_frames_per_image(self):
        self.assertEqual(frames_per_image(400, 25), 10)
        self.assertEqual(frames_per_image(1000, 30), 30)
        self.assertEqual(frames_per_image(1, 25), 1)


class TestPngsToVideo(unittest.TestCase):

    def test_rejects_bad_input(self):
        with tempfile.TemporaryDirectory() as tmp:
            with self.assertRaises(ValueError):
                pngs_to_video(tmp, 500)
            _write_png(Path(tmp) / "a.png")
            with self.assertRaises(ValueError):
                pngs_to_video(tmp, 0)

    @unittest.skipUnless(importlib.util.find_spec("imageio_ffmpeg"), "imageio-ffmpeg not installed")
    def test_writes_mp4_with_mixed_sizes(self):
        with tempfile.TemporaryDirectory() as tmp:
            d = Path(tmp)
            _write_png(d / "art_1.png", (32, 32), (255, 0, 0))
            _write_png(d / "art_2.png", (48, 16), (0, 0, 255))
            out = pngs_to_video(d, 200, fps=10, crossfade_frames=1)
            self.assertEqual(out, d / "output_video.mp4")
            self.assertTrue(out.exists())
            self.assertGreater(out.stat().st_size, 0)


if __name__ == "__main__":
    unittest.main()
