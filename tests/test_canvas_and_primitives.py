"""
Unit tests for the raster canvas (state stack, compositing, PNG output), blend modes,
and the shape primitives drawn on it.
Run from project root: python -m pytest tests/ -v
"""
import math
import sys
import tempfile
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import numpy as np
from PIL import Image

from genimg import random_utils
from genimg.colors import BLACK, WHITE, Color
from genimg.graphics import (
    MAX_TAPER,
    BlendMode,
    Rect,
    RotationSpec,
    TaperSide,
    blend,
    create_canvas,
    draw_circle,
    draw_rotated_rect,
    imperfect_circle_points,
    imperfect_circle_points_radians,
    quad_vertices,
    resolve_angle,
)


class TestCanvasState(unittest.TestCase):

    def test_save_restore(self):
        canvas = create_canvas(20, 20)
        canvas.save_state()
        canvas.set_alpha(0.3)
        canvas.set_blend_mode(BlendMode.SCREEN)
        canvas.translate(5, 5)
        self.assertFalse(canvas.is_clean())
        canvas.restore_state()
        self.assertTrue(canvas.is_clean())

    def test_saved_restores_on_exception(self):
        canvas = create_canvas(20, 20)
        with self.assertRaises(RuntimeError):
            with canvas.saved():
                canvas.rotate(1.0)
                raise RuntimeError("boom")
        self.assertTrue(canvas.is_clean())

    def test_restore_on_empty_stack_warns(self):
        canvas = create_canvas(5, 5)
        with self.assertLogs("genimg.graphics.canvas", level="WARNING"):
            canvas.restore_state()
        self.assertEqual(canvas.state_depth, 0)

    def test_invalid_dimensions(self):
        self.assertIsNone(create_canvas(0, 10))
        self.assertIsNone(create_canvas(10, -1))


class TestCanvasDrawing(unittest.TestCase):

    def test_alpha_composite(self):
        canvas = create_canvas(20, 20, BLACK)
        canvas.set_alpha(0.5)
        canvas.fill_rect(0, 0, 20, 20, WHITE)
        self.assertAlmostEqual(float(canvas.pixels[10, 10, 0]), 0.5, places=5)
        self.assertEqual(tuple(canvas.to_array()[10, 10]), (128, 128, 128))

    def test_multiply_blend(self):
        canvas = create_canvas(20, 20, Color(0.5, 0.5, 0.5))
        canvas.set_blend_mode(BlendMode.MULTIPLY)
        canvas.fill_rect(0, 0, 20, 20, Color(0.5, 1.0, 0.0))
        np.testing.assert_allclose(canvas.pixels[10, 10], [0.25, 0.5, 0.0], atol=1e-6)

    def test_translate_moves_shapes(self):
        canvas = create_canvas(30, 30, BLACK)
        with canvas.saved():
            canvas.translate(10, 10)
            canvas.fill_rect(0, 0, 6, 6, WHITE)
        self.assertAlmostEqual(float(canvas.pixels[13, 13, 0]), 1.0, places=5)
        self.assertEqual(float(canvas.pixels[3, 3, 0]), 0.0)

    def test_encode_png(self):
        canvas = create_canvas(16, 12, WHITE)
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "out.png"
            self.assertTrue(canvas.encode_png(path))
            with Image.open(path) as im:
                self.assertEqual(im.size, (16, 12))
                self.assertEqual(im.getpixel((3, 3)), (255, 255, 255))
            with self.assertLogs("genimg.graphics.canvas", level="ERROR"):
                self.assertFalse(canvas.encode_png(Path(tmp) / "missing" / "out.png"))


class TestBlend(unittest.TestCase):

    def test_separable_modes(self):
        cb = np.array([[0.2, 0.5, 0.8]])
        cs = (0.5, 0.5, 0.5)
        np.testing.assert_allclose(blend(cb, cs, BlendMode.NORMAL), [[0.5, 0.5, 0.5]])
        np.testing.assert_allclose(blend(cb, cs, BlendMode.SCREEN), [[0.6, 0.75, 0.9]])
        np.testing.assert_allclose(blend(cb, cs, BlendMode.DIFFERENCE), [[0.3, 0.0, 0.3]])
        np.testing.assert_allclose(blend(cb, cs, BlendMode.DARKEN), [[0.2, 0.5, 0.5]])

    def test_luminosity_of_gray_source(self):
        # a gray source gives the backdrop that source's luminance
        out = blend(np.array([[1.0, 0.0, 0.0]]), (0.5, 0.5, 0.5), BlendMode.LUMINOSITY)
        lum = 0.3 * out[0, 0] + 0.59 * out[0, 1] + 0.11 * out[0, 2]
        self.assertAlmostEqual(lum, 0.5, places=5)

    def test_all_modes_stay_in_range(self):
        cb = np.random.default_rng(0).random((8, 8, 3))
        for mode in BlendMode:
            with self.subTest(mode=mode):
                out = blend(cb, (0.9, 0.1, 0.4), mode)
                self.assertTrue(np.all(out >= 0.0) and np.all(out <= 1.0))


class TestQuadAndRotation(unittest.TestCase):

    def test_untapered_vertices(self):
        self.assertEqual(
            quad_vertices(10, 4),
            [(-5.0, -2.0), (5.0, -2.0), (5.0, 2.0), (-5.0, 2.0)],
        )

    def test_taper_sides(self):
        bl, br, tr, tl = quad_vertices(10, 4, 0.5, TaperSide.BOTTOM)
        self.assertEqual((bl, br), ((-2.5, -2.0), (2.5, -2.0)))
        self.assertEqual((tr, tl), ((5.0, 2.0), (-5.0, 2.0)))
        bl, br, tr, tl = quad_vertices(10, 4, 0.5, TaperSide.LEFT)
        self.assertEqual((bl, tl), ((-5.0, -1.0), (-5.0, 1.0)))
        self.assertEqual((br, tr), ((5.0, -2.0), (5.0, 2.0)))

    def test_taper_clamped(self):
        self.assertEqual(
            quad_vertices(10, 4, 3.0, TaperSide.TOP),
            quad_vertices(10, 4, MAX_TAPER, TaperSide.TOP),
        )
        self.assertEqual(quad_vertices(10, 4, -1.0, TaperSide.TOP), quad_vertices(10, 4))

    def test_resolve_angle(self):
        self.assertEqual(resolve_angle(RotationSpec.none()), 0.0)
        self.assertAlmostEqual(resolve_angle(RotationSpec.fixed(90)), math.pi / 2)
        random_utils.seed(1)
        for _ in range(50):
            a = resolve_angle(RotationSpec.random_degrees(10, 20, offset_degrees=90))
            self.assertGreaterEqual(a, math.radians(100) - 1e-9)
            self.assertLessEqual(a, math.radians(110) + 1e-9)
        a = resolve_angle(RotationSpec.random_degrees(0, 0, offset_radians=1.25))
        self.assertAlmostEqual(a, 1.25)

    def test_rotated_rect_draws_and_returns_angle(self):
        canvas = create_canvas(40, 40, BLACK)
        theta = draw_rotated_rect(canvas, Rect.centered(20, 20, 20, 4), rotation=RotationSpec.fixed(90), fill=WHITE)
        self.assertAlmostEqual(theta, math.pi / 2)
        self.assertTrue(canvas.is_clean())
        # rotated upright: covers the column through the centre, not the row
        self.assertAlmostEqual(float(canvas.pixels[27, 20, 0]), 1.0, places=5)
        self.assertEqual(float(canvas.pixels[20, 27, 0]), 0.0)

    def test_explicit_angle_wins(self):
        canvas = create_canvas(10, 10)
        theta = draw_rotated_rect(canvas, Rect(2, 2, 4, 4), rotation=RotationSpec.fixed(45), angle=0.5, stroke=WHITE)
        self.assertEqual(theta, 0.5)

    def test_circle(self):
        canvas = create_canvas(30, 30, BLACK)
        draw_circle(canvas, (15, 15), 0, fill=WHITE)
        self.assertEqual(float(canvas.pixels.max()), 0.0)
        draw_circle(canvas, (15, 15), 8, fill=WHITE)
        self.assertAlmostEqual(float(canvas.pixels[15, 15, 0]), 1.0, places=5)
        self.assertEqual(float(canvas.pixels[1, 1, 0]), 0.0)
        self.assertTrue(canvas.is_clean())


class TestImperfectCircle(unittest.TestCase):

    def test_zero_offset_on_circle(self):
        pts = imperfect_circle_points((10, 20), 5, 4, 0)
        expected = [(15, 20), (10, 25), (5, 20), (10, 15)]
        self.assertEqual(len(pts), 4)
        for x, y in pts:
            self.assertAlmostEqual(math.hypot(x - 10, y - 20), 5.0)
        for (x, y), (ex, ey) in zip(pts, expected):
            self.assertAlmostEqual(x, ex)
            self.assertAlmostEqual(y, ey)

    def test_offsets_bounded(self):
        random_utils.seed(8)
        pts = imperfect_circle_points((0, 0), 100, 60, 3)
        for i, (x, y) in enumerate(pts):
            theta = 2 * math.pi * i / 60
            self.assertLessEqual(abs(x - 100 * math.cos(theta)), 3 + 1e-9)
            self.assertLessEqual(abs(y - 100 * math.sin(theta)), 3 + 1e-9)

    def test_partial_arc(self):
        pts = imperfect_circle_points((0, 0), 1, 3, 0, start_angle_degrees=90, arc_degrees=90)
        self.assertAlmostEqual(pts[0][0], 0.0)
        self.assertAlmostEqual(pts[0][1], 1.0)
        self.assertAlmostEqual(math.degrees(math.atan2(pts[2][1], pts[2][0])), 150.0)

    def test_degree_and_radian_forms_agree(self):
        random_utils.seed(21)
        a = imperfect_circle_points((5, 5), 10, 12, 1.5, 30, 180)
        random_utils.seed(21)
        b = imperfect_circle_points_radians((5, 5), 10, 12, 1.5, math.radians(30), math.pi)
        for p, q in zip(a, b):
            self.assertAlmostEqual(p[0], q[0])
            self.assertAlmostEqual(p[1], q[1])

    def test_invalid_input(self):
        self.assertEqual(imperfect_circle_points((0, 0), 0, 5, 1), [])
        self.assertEqual(imperfect_circle_points((0, 0), 5, 0, 1), [])
        self.assertEqual(imperfect_circle_points((0, 0), 5, 5, -1), [])


if __name__ == "__main__":
    unittest.main()
