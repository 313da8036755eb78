# tests/test_services/test_overlay.py
import unittest
from types import SimpleNamespace

from designsight.services.overlay import (
    DEFAULT_COLOR, Box, OverlayScale, build_overlay, hit_test, region_from_click, severity_color,
    to_image, to_screen,
)


def feedback(id, x, y, width, height, severity="medium"):
    return SimpleNamespace(
        id=id,
        severity=severity,
        coordinates={"x": x, "y": y, "width": width, "height": height},
    )


class OverlayScaleTestCase(unittest.TestCase):
    def test_per_axis_scale(self):
        scale = OverlayScale.between(400, 200, 800, 600)
        self.assertEqual(scale.scale_x, 0.5)
        self.assertAlmostEqual(scale.scale_y, 1 / 3)

    def test_rejects_non_positive_sizes(self):
        with self.assertRaises(ValueError):
            OverlayScale.between(0, 300, 800, 600)
        with self.assertRaises(ValueError):
            OverlayScale.between(400, 300, 800, 0)

    def test_screen_round_trip_within_a_pixel(self):
        scale = OverlayScale.between(731, 457, 1920, 1080)
        original = Box(123, 456, 78, 91)
        back = to_image(to_screen(original, scale).rounded(), scale)
        for before, after in zip(
            (original.x, original.y, original.width, original.height),
            (back.x, back.y, back.width, back.height),
        ):
            self.assertLessEqual(abs(before - after), 1 / scale.scale_x)

    def test_rounding_is_half_up(self):
        self.assertEqual(Box(0.5, 1.5, 2.5, 3.49).rounded(), Box(1, 2, 3, 3))


class ClickTestCase(unittest.TestCase):
    def test_region_centred_on_click(self):
        scale = OverlayScale.between(400, 300, 800, 600)
        region = region_from_click(200, 150, scale)
        self.assertEqual((region.x, region.y, region.width, region.height), (350, 275, 100, 50))

    def test_hit_test_returns_first_match(self):
        scale = OverlayScale.between(400, 300, 800, 600)
        items = [feedback("a", 0, 0, 200, 200), feedback("b", 100, 100, 200, 200)]

        self.assertEqual(hit_test(75, 75, items, scale).id, "a")
        self.assertEqual(hit_test(120, 120, items, scale).id, "b")
        # Edges are inside
        self.assertEqual(hit_test(100, 100, items, scale).id, "a")
        self.assertIsNone(hit_test(390, 290, items, scale))


class BuildOverlayTestCase(unittest.TestCase):
    def test_rects_labels_and_selection(self):
        scale = OverlayScale.between(400, 300, 800, 600)
        items = [
            feedback("a", 100, 100, 200, 100, severity="high"),
            feedback("b", 0, 0, 50, 50, severity="low"),
        ]
        rects = build_overlay(items, scale, selected_id="b")

        self.assertEqual([rect.label for rect in rects], [1, 2])
        first, second = rects
        self.assertEqual((first.x, first.y, first.width, first.height), (50, 50, 100, 50))
        self.assertEqual(first.color, "#ef4444")
        self.assertEqual((first.line_width, first.glow), (2, 0))
        self.assertEqual(second.color, "#10b981")
        self.assertEqual((second.line_width, second.glow), (3, 8))

    def test_unknown_severity_color(self):
        self.assertEqual(severity_color("critical"), DEFAULT_COLOR)
        self.assertEqual(severity_color("medium"), "#f59e0b")


if __name__ == "__main__":
    unittest.main()
