# designsight/services/storage.py
import os
from datetime import timedelta
from functools import lru_cache
from typing import Dict, Optional

from designsight.core.config import settings
from designsight.core.errors import BlobNotFoundError, UpstreamServiceError
from designsight.core.logging import logger


class StorageService:
    """
    Blob store for uploaded design images.

    Objects live in a Google Cloud Storage bucket when GCS_BUCKET_NAME is set.
    Otherwise they are written under a local directory, which is what
    development and the test suite use.
    """

    def __init__(self, bucket_name: Optional[str] = None, storage_dir: Optional[str] = None):
        self.bucket_name = bucket_name if bucket_name is not None else settings.GCS_BUCKET_NAME
        self.use_gcs = bool(self.bucket_name)

        if self.use_gcs:
            self._init_gcs()
        else:
            self.storage_dir = os.path.abspath(storage_dir or settings.LOCAL_STORAGE_DIR)
            os.makedirs(self.storage_dir, exist_ok=True)
            logger.info(f"Storage service initialized with directory: {self.storage_dir}")

    def _init_gcs(self):
        try:
            from google.cloud import storage

            if settings.GCS_CREDENTIALS_FILE and os.path.exists(settings.GCS_CREDENTIALS_FILE):
                self.client = storage.Client.from_service_account_json(
                    settings.GCS_CREDENTIALS_FILE
                )
            else:
                # Use Application Default Credentials
                self.client = storage.Client(project=settings.GCS_PROJECT_ID)

            self.bucket = self.client.bucket(self.bucket_name)

            # Ensure bucket exists
            if not self.bucket.exists():
                logger.info(f"Creating bucket {self.bucket_name}")
                self.bucket = self.client.create_bucket(self.bucket_name)

            logger.info(f"Using Google Cloud Storage: {self.bucket_name}")
        except Exception as e:
            logger.error(f"Failed to initialize Google Cloud Storage: {str(e)}")
            raise UpstreamServiceError("storage", f"Could not initialize bucket {self.bucket_name}: {e}") from e

    @property
    def location(self) -> str:
        """Bucket name, or the local directory in development"""
        return self.bucket_name if self.use_gcs else self.storage_dir

    def _local_path(self, key: str) -> str:
        path = os.path.abspath(os.path.join(self.storage_dir, key))
        if not path.startswith(self.storage_dir + os.sep):
            raise ValueError(f"Invalid storage key: {key}")
        return path

    def upload_bytes(
        self, key: str, content: bytes, content_type: str, metadata: Optional[Dict[str, str]] = None
    ) -> str:
        """
        Stores content under key and returns the key
        """
        try:
            if self.use_gcs:
                blob = self.bucket.blob(key)
                blob.metadata = metadata or None
                blob.upload_from_string(content, content_type=content_type)
                logger.info(f"Uploaded file to GCS: {key}")
            else:
                local_path = self._local_path(key)
                os.makedirs(os.path.dirname(local_path), exist_ok=True)
                with open(local_path, "wb") as f:
                    f.write(content)
                logger.info(f"Uploaded file to local storage: {local_path}")
        except Exception as e:
            logger.error(f"Error uploading {key}: {str(e)}")
            raise UpstreamServiceError("storage", f"Error uploading file: {e}") from e
        return key

    def read_bytes(self, key: str) -> bytes:
        try:
            if self.use_gcs:
                blob = self.bucket.blob(key)
                if not blob.exists():
                    raise BlobNotFoundError(key)
                return blob.download_as_bytes()

            local_path = self._local_path(key)
            if not os.path.exists(local_path):
                raise BlobNotFoundError(key)
            with open(local_path, "rb") as f:
                return f.read()
        except BlobNotFoundError:
            logger.warning(f"File does not exist in storage: {key}")
            raise
        except Exception as e:
            logger.error(f"Error reading {key}: {str(e)}")
            raise UpstreamServiceError("storage", f"Error reading file: {e}") from e

    def file_exists(self, key: str) -> bool:
        try:
            if self.use_gcs:
                return self.bucket.blob(key).exists()
            return os.path.exists(self._local_path(key))
        except Exception as e:
            logger.error(f"Error checking {key}: {str(e)}")
            raise UpstreamServiceError("storage", f"Error checking file: {e}") from e

    def generate_signed_url(self, key: str, expiration_minutes: Optional[int] = None) -> str:
        """
        Generate a URL for accessing the file

        For GCS, this generates a V4 signed URL
        For local storage, this returns a link to the static storage mount
        """
        expiration_minutes = expiration_minutes or settings.SIGNED_URL_EXPIRATION_MINUTES
        if not self.use_gcs:
            return f"{settings.PUBLIC_BASE_URL.rstrip('/')}/storage/{key}"

        try:
            blob = self.bucket.blob(key)
            return blob.generate_signed_url(
                version="v4",
                expiration=timedelta(minutes=expiration_minutes),
                method="GET"
            )
        except Exception as e:
            logger.error(f"Error generating URL for {key}: {str(e)}")
            raise UpstreamServiceError("storage", f"Error generating signed URL: {e}") from e

    def delete_file(self, key: str) -> bool:
        """
        Deletes a file from storage; returns False when it was already gone
        """
        try:
            if self.use_gcs:
                blob = self.bucket.blob(key)
                if not blob.exists():
                    logger.warning(f"File does not exist in GCS when attempting to delete: {key}")
                    return False
                blob.delete()
                logger.info(f"Deleted file from GCS: {key}")
            else:
                local_path = self._local_path(key)
                if not os.path.exists(local_path):
                    logger.warning(f"File does not exist in local storage when attempting to delete: {local_path}")
                    return False
                os.remove(local_path)
                logger.info(f"Deleted file from local storage: {local_path}")
            return True
        except Exception as e:
            logger.error(f"Error deleting file {key}: {str(e)}")
            raise UpstreamServiceError("storage", f"Error deleting file: {e}") from e


@lru_cache()
def get_storage_service() -> StorageService:
    return StorageService()
