# tests/test_services/test_analysis.py
import asyncio
import unittest

from designsight.services.analysis import AnalysisError, analyze_design
from designsight.services.vision import VisionAnalyzer
from tests.fakes import CLOSE_BUTTONS, FakeVisionClient, make_image


class AnalyzeDesignTestCase(unittest.TestCase):
    def setUp(self):
        self.client = FakeVisionClient(objects=CLOSE_BUTTONS)
        self.analyzer = VisionAnalyzer(client=self.client)

    def test_uses_given_dimensions(self):
        result = asyncio.run(analyze_design(make_image(40, 30), self.analyzer, width=1920, height=1080))
        coords = result.feedback[0].coordinates
        self.assertEqual((coords.x, coords.y, coords.width, coords.height), (192, 540, 864, 108))

    def test_reads_dimensions_from_image(self):
        result = asyncio.run(analyze_design(make_image(200, 100), self.analyzer))
        coords = result.feedback[0].coordinates
        self.assertEqual((coords.x, coords.y, coords.width, coords.height), (20, 50, 90, 10))

    def test_undecodable_image_skips_vision(self):
        with self.assertRaises(AnalysisError):
            asyncio.run(analyze_design(b"not an image", self.analyzer))
        self.assertEqual(self.client.calls, [])


if __name__ == "__main__":
    unittest.main()
