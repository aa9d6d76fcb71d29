"""
Object storage access for uploaded CSV files.
"""

import secrets
import string
import time
from urllib.parse import quote

import requests

from src.observability.logger import get_logger

from .connection import StoreClient, describe_failure

logger = get_logger(__name__)

CSV_BUCKET = "csv_files"

_ID_ALPHABET = string.ascii_lowercase + string.digits


class StorageError(RuntimeError):
    """Raised when an object cannot be read or written."""

    def __init__(self, message: str, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message)


def generate_unique_file_path(filename: str) -> str:
    """
    Build a collision-resistant storage path for an upload.

    Returns:
        ``uploads/<epoch-ms>-<random>/<filename>``
    """
    timestamp = int(time.time() * 1000)
    random_id = "".join(secrets.choice(_ID_ALPHABET) for _ in range(11))
    return f"uploads/{timestamp}-{random_id}/{filename}"


class ObjectStorage:
    """
    Reads and writes objects in one storage bucket.
    """

    def __init__(self, client: StoreClient, bucket: str = CSV_BUCKET):
        self.client = client
        self.bucket = bucket

    def _object_path(self, storage_path: str) -> str:
        return f"storage/v1/object/{self.bucket}/{quote(storage_path)}"

    def download_text(self, storage_path: str) -> str:
        """
        Fetch an object as UTF-8 text.

        Raises:
            StorageError: If the object is missing or unreadable
            requests.RequestException: On connection errors
        """
        response = self.client.request("GET", self._object_path(storage_path))
        if not response.ok:
            raise StorageError(
                f"Storage fetch failed: {response.status_code}",
                status_code=response.status_code,
            )
        response.encoding = "utf-8"
        return response.text

    def upload(self, storage_path: str, content: bytes) -> None:
        """
        Write an object.

        Raises:
            StorageError: If the store rejects the write
            requests.RequestException: On connection errors
        """
        response = self.client.request(
            "POST",
            self._object_path(storage_path),
            data=content,
            headers={"Content-Type": "text/csv"},
        )
        if not response.ok:
            raise StorageError(
                describe_failure("Upload failed", response),
                status_code=response.status_code,
            )

    def delete(self, storage_path: str) -> bool:
        """
        Delete an object.

        A failed delete is logged and reported as False, since the object
        may already be gone.

        Raises:
            requests.RequestException: On connection errors
        """
        response = self.client.request("DELETE", self._object_path(storage_path))
        if not response.ok:
            logger.warning(f"Failed to delete from storage: {response.status_code}")
            return False
        return True
