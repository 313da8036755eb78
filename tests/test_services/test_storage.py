# tests/test_services/test_storage.py
import os
import shutil
import tempfile
import unittest

from designsight.core.config import settings
from designsight.core.errors import BlobNotFoundError, UpstreamServiceError
from designsight.services.storage import StorageService


class LocalStorageTestCase(unittest.TestCase):
    def setUp(self):
        self.storage_dir = tempfile.mkdtemp()
        self.storage = StorageService(bucket_name="", storage_dir=self.storage_dir)

    def tearDown(self):
        shutil.rmtree(self.storage_dir, ignore_errors=True)

    def test_upload_read_delete(self):
        key = "projects/p1/img1.jpg"
        self.assertEqual(self.storage.upload_bytes(key, b"jpeg bytes", content_type="image/jpeg"), key)

        self.assertTrue(self.storage.file_exists(key))
        self.assertTrue(os.path.exists(os.path.join(self.storage_dir, "projects", "p1", "img1.jpg")))
        self.assertEqual(self.storage.read_bytes(key), b"jpeg bytes")

        self.assertTrue(self.storage.delete_file(key))
        self.assertFalse(self.storage.file_exists(key))
        self.assertFalse(self.storage.delete_file(key))

    def test_missing_blob(self):
        with self.assertRaises(BlobNotFoundError):
            self.storage.read_bytes("projects/p1/missing.jpg")

    def test_signed_url_points_at_storage_mount(self):
        url = self.storage.generate_signed_url("projects/p1/img1.jpg")
        self.assertEqual(url, f"{settings.PUBLIC_BASE_URL.rstrip('/')}/storage/projects/p1/img1.jpg")

    def test_keys_cannot_escape_the_directory(self):
        with self.assertRaises(UpstreamServiceError):
            self.storage.upload_bytes("../outside.jpg", b"x", content_type="image/jpeg")

    def test_location_is_the_directory(self):
        self.assertEqual(self.storage.location, os.path.abspath(self.storage_dir))


if __name__ == "__main__":
    unittest.main()
