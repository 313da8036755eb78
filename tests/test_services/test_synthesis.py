# tests/test_services/test_synthesis.py
import unittest

from designsight.schemas.feedback import Category, Role, Severity
from designsight.services.synthesis import (
    ColorSample, ObjectRegion, TextRegion, Vertex, VisionAnnotations,
    check_button_spacing, check_color_contrast, check_small_text, summarize, synthesize_feedback,
)
from tests.fakes import CLOSE_BUTTONS, box


def text_region(description, x, y, width, height):
    return TextRegion(description=description, vertices=[Vertex(px, py) for px, py in box(x, y, width, height)])


def object_region(name, points):
    return ObjectRegion(name=name, normalized_vertices=[Vertex(x, y) for x, y in points])


class SmallTextTestCase(unittest.TestCase):
    def test_flags_first_small_region_only(self):
        regions = [
            text_region("Headline", 0, 0, 400, 40),
            text_region("fine print", 10, 20, 30, 10),
            text_region("tiny", 300, 300, 20, 8),
        ]
        drafts = check_small_text(regions)

        self.assertEqual(len(drafts), 1)
        draft = drafts[0]
        self.assertEqual(draft.title, "Small Text Detected")
        self.assertEqual(draft.category, Category.ACCESSIBILITY)
        self.assertEqual(draft.severity, Severity.MEDIUM)
        self.assertEqual(draft.roles, [Role.DESIGNER, Role.DEVELOPER])
        self.assertEqual(
            (draft.coordinates.x, draft.coordinates.y, draft.coordinates.width, draft.coordinates.height),
            (10, 20, 30, 10),
        )

    def test_short_but_wide_text_is_small(self):
        drafts = check_small_text([text_region("wide", 0, 0, 300, 11)])
        self.assertEqual(len(drafts), 1)

    def test_large_text_and_degenerate_regions_are_ignored(self):
        regions = [
            text_region("Headline", 0, 0, 400, 40),
            TextRegion(description="dot", vertices=[Vertex(5, 5)]),
        ]
        self.assertEqual(check_small_text(regions), [])


class ButtonSpacingTestCase(unittest.TestCase):
    def test_close_buttons_scaled_to_image_size(self):
        objects = [object_region(name, points) for name, points in CLOSE_BUTTONS]
        drafts = check_button_spacing(objects, 1920, 1080)

        self.assertEqual(len(drafts), 1)
        coords = drafts[0].coordinates
        self.assertEqual(drafts[0].title, "Button Spacing Issue")
        self.assertEqual(drafts[0].category, Category.UI_UX_PATTERNS)
        self.assertEqual((coords.x, coords.y, coords.width, coords.height), (192, 540, 864, 108))

    def test_unknown_size_uses_fallback(self):
        objects = [object_region(name, points) for name, points in CLOSE_BUTTONS]
        coords = check_button_spacing(objects)[0].coordinates
        self.assertEqual((coords.x, coords.y, coords.width, coords.height), (100, 500, 450, 100))

    def test_far_apart_or_non_button_objects(self):
        far = [
            object_region("Submit button", [(0.1, 0.1), (0.4, 0.1), (0.4, 0.2), (0.1, 0.2)]),
            object_region("Cancel button", [(0.1, 0.5), (0.4, 0.5), (0.4, 0.6), (0.1, 0.6)]),
        ]
        self.assertEqual(check_button_spacing(far, 1000, 1000), [])

        other = [object_region("Person", points) for _, points in CLOSE_BUTTONS]
        self.assertEqual(check_button_spacing(other, 1000, 1000), [])

    def test_pairs_need_three_vertices(self):
        objects = [
            object_region("Click here", [(0.1, 0.5), (0.4, 0.5)]),
            object_region(*CLOSE_BUTTONS[1]),
        ]
        self.assertEqual(check_button_spacing(objects, 1000, 1000), [])


class ColorContrastTestCase(unittest.TestCase):
    def test_dark_and_light_colors(self):
        drafts = check_color_contrast([ColorSample(0, 0, 0), ColorSample(255, 255, 255)])
        self.assertEqual(len(drafts), 1)
        self.assertEqual(drafts[0].title, "Color Contrast Review Needed")
        self.assertEqual(drafts[0].severity, Severity.HIGH)

    def test_mid_grey_is_neither(self):
        self.assertEqual(check_color_contrast([ColorSample(128, 128, 128)]), [])

    def test_only_dark_colors(self):
        self.assertEqual(check_color_contrast([ColorSample(0, 0, 0), ColorSample(20, 30, 40)]), [])


class SynthesizeTestCase(unittest.TestCase):
    def test_rules_run_in_order(self):
        annotations = VisionAnnotations(
            text_regions=[text_region("fine print", 10, 20, 30, 10)],
            object_regions=[object_region(name, points) for name, points in CLOSE_BUTTONS],
            colors=[ColorSample(0, 0, 0), ColorSample(255, 255, 255)],
        )
        result = synthesize_feedback(annotations, 1920, 1080)

        self.assertEqual(
            [draft.title for draft in result.feedback],
            ["Small Text Detected", "Button Spacing Issue", "Color Contrast Review Needed",
             "Design Structure Analysis"],
        )
        structure = result.feedback[-1]
        self.assertEqual(structure.severity, Severity.LOW)
        self.assertEqual(structure.roles, [Role.DESIGNER, Role.REVIEWER])
        self.assertTrue(all(draft.ai_generated for draft in result.feedback))
        self.assertEqual(
            result.summary,
            "Design analysis completed. Found 1 high priority, 2 medium priority, and 1 low priority "
            "issues. Focus on accessibility and visual hierarchy improvements.",
        )

    def test_empty_annotations(self):
        result = synthesize_feedback(VisionAnnotations(), 800, 600)
        self.assertEqual(result.feedback, [])
        self.assertEqual(summarize([]), result.summary)
        self.assertIn("Found 0 high priority, 0 medium priority, and 0 low priority", result.summary)


if __name__ == "__main__":
    unittest.main()
