# tests/test_api/test_upload.py
import os
import unittest
from unittest import mock

from designsight.core.config import settings
from tests.fakes import make_image, png_header
from tests.test_api.base import ApiTestCase


class UploadTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.project = self.create_project()

    def test_upload_resizes_and_stores(self):
        response = self.client.post(
            f"/api/upload/{self.project['id']}",
            files={"image": ("hero.png", make_image(2000, 1500), "image/png")},
        )
        self.assertEqual(response.status_code, 201, response.text)
        data = response.json()["data"]
        image = data["image"]

        self.assertEqual((image["width"], image["height"]), (1440, 1080))
        self.assertEqual(image["mimeType"], "image/jpeg")
        self.assertEqual(image["originalName"], "hero.png")
        self.assertEqual(image["storageKey"], f"projects/{self.project['id']}/{image['id']}.jpg")
        self.assertTrue(image["url"].endswith(f"/storage/{image['storageKey']}"))
        self.assertEqual([i["id"] for i in data["project"]["images"]], [image["id"]])
        self.assertTrue(os.path.exists(os.path.join(self.storage_dir, image["storageKey"])))

    def test_images_keep_upload_order(self):
        first = self.upload_image(self.project["id"], filename="one.png")
        second = self.upload_image(self.project["id"], filename="two.png")

        project = self.client.get(f"/api/projects/{self.project['id']}").json()["data"]
        self.assertEqual([i["id"] for i in project["images"]], [first["id"], second["id"]])

    def test_missing_file(self):
        response = self.client.post(
            f"/api/upload/{self.project['id']}",
            files={"attachment": ("hero.png", make_image(10, 10), "image/png")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"success": False, "message": "No image file provided"})

    def test_rejects_non_images(self):
        response = self.client.post(
            f"/api/upload/{self.project['id']}",
            files={"image": ("notes.txt", b"hello", "text/plain")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["message"], "Only image files are allowed")

    def test_rejects_corrupt_images(self):
        response = self.client.post(
            f"/api/upload/{self.project['id']}",
            files={"image": ("broken.png", b"not really a png", "image/png")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertFalse(response.json()["success"])

    def test_rejects_oversized_images(self):
        response = self.client.post(
            f"/api/upload/{self.project['id']}",
            files={"image": ("huge.png", png_header(15000, 13000), "image/png")},
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["success"], False)
        self.assertIn("Image too large", response.json()["message"])

        with mock.patch.object(settings, "MAX_IMAGE_PIXELS", 1000):
            response = self.client.post(
                f"/api/upload/{self.project['id']}",
                files={"image": ("wide.png", make_image(50, 40), "image/png")},
            )
        self.assertEqual(response.status_code, 400)
        self.assertIn("50x40", response.json()["message"])

    def test_unknown_project(self):
        response = self.client.post(
            "/api/upload/missing",
            files={"image": ("hero.png", make_image(10, 10), "image/png")},
        )
        self.assertEqual(response.status_code, 404)

    def test_signed_url_and_file_proxy(self):
        image = self.upload_image(self.project["id"])

        body = self.client.get(f"/api/upload/image/{image['id']}").json()
        self.assertTrue(body["data"]["imageUrl"].endswith(image["storageKey"]))
        self.assertEqual(body["data"]["image"]["id"], image["id"])

        response = self.client.get(f"/api/upload/image/{image['id']}/file")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.headers["content-type"], "image/jpeg")
        self.assertEqual(response.headers["cache-control"], "private, max-age=300")
        self.assertEqual(response.content, self.storage.read_bytes(image["storageKey"]))

    def test_file_proxy_missing_blob(self):
        image = self.upload_image(self.project["id"])
        self.storage.delete_file(image["storageKey"])

        response = self.client.get(f"/api/upload/image/{image['id']}/file")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.client.get("/api/upload/image/unknown").status_code, 404)

    def test_delete_image(self):
        image = self.upload_image(self.project["id"])
        feedback = self.create_feedback(self.project["id"], image["id"])

        response = self.client.delete(f"/api/upload/{self.project['id']}/image/{image['id']}")
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json()["message"], "Image deleted successfully")

        project = self.client.get(f"/api/projects/{self.project['id']}").json()["data"]
        self.assertEqual(project["images"], [])
        self.assertFalse(self.storage.file_exists(image["storageKey"]))
        self.assertEqual(self.client.get(f"/api/feedback/{feedback['id']}").status_code, 200)

        again = self.client.delete(f"/api/upload/{self.project['id']}/image/{image['id']}")
        self.assertEqual(again.status_code, 404)


if __name__ == "__main__":
    unittest.main()
