# tests/test_services/test_imaging.py
import io
import unittest

from PIL import Image as PILImage

from designsight.services.imaging import (
    ImageValidationError, decode_image, fit_inside, process_upload, validate_upload,
)
from tests.fakes import make_image, png_header


class FitInsideTestCase(unittest.TestCase):
    def test_scales_down_keeping_aspect(self):
        self.assertEqual(fit_inside(2000, 1500, 1920, 1080), (1440, 1080))
        self.assertEqual(fit_inside(3840, 1080, 1920, 1080), (1920, 540))

    def test_never_enlarges(self):
        self.assertEqual(fit_inside(800, 600, 1920, 1080), (800, 600))

    def test_rejects_empty_dimensions(self):
        with self.assertRaises(ValueError):
            fit_inside(0, 100, 1920, 1080)


class ValidateUploadTestCase(unittest.TestCase):
    def test_accepts_images(self):
        validate_upload(b"data", "image/png")

    def test_rejects_empty_and_non_images(self):
        with self.assertRaises(ImageValidationError):
            validate_upload(b"", "image/png")
        with self.assertRaises(ImageValidationError):
            validate_upload(b"hello", "text/plain")
        with self.assertRaises(ImageValidationError):
            validate_upload(b"hello", None)

    def test_rejects_large_files(self):
        with self.assertRaises(ImageValidationError):
            validate_upload(b"x" * 11, "image/png", max_size=10)


class ProcessUploadTestCase(unittest.TestCase):
    def test_resizes_and_reencodes_as_jpeg(self):
        processed = process_upload(make_image(2000, 1500), max_width=1920, max_height=1080, quality=80)

        self.assertEqual((processed.width, processed.height), (1440, 1080))
        self.assertEqual(processed.mime_type, "image/jpeg")
        self.assertEqual(processed.size, len(processed.content))
        stored = PILImage.open(io.BytesIO(processed.content))
        self.assertEqual(stored.format, "JPEG")
        self.assertEqual(stored.size, (1440, 1080))

    def test_converts_transparent_images(self):
        buffer = io.BytesIO()
        PILImage.new("RGBA", (40, 30), (0, 0, 0, 0)).save(buffer, format="PNG")
        processed = process_upload(buffer.getvalue())
        self.assertEqual((processed.width, processed.height), (40, 30))

    def test_rejects_images_over_the_pixel_cap(self):
        with self.assertRaises(ImageValidationError) as ctx:
            decode_image(make_image(100, 60), max_pixels=5000)
        self.assertIn("100x60", str(ctx.exception))
        self.assertEqual(decode_image(make_image(100, 50), max_pixels=5000).size, (100, 50))

    def test_rejects_decompression_bombs(self):
        with self.assertRaises(ImageValidationError):
            decode_image(png_header(15000, 13000), max_pixels=10 ** 12)
        with self.assertRaises(ImageValidationError):
            process_upload(png_header(15000, 13000))

    def test_undecodable_bytes(self):
        with self.assertRaises(ImageValidationError):
            decode_image(b"not an image")
        with self.assertRaises(ImageValidationError):
            process_upload(b"not an image")


if __name__ == "__main__":
    unittest.main()
