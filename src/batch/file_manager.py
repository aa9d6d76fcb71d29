"""
Upload and removal of CSV files.

An upload is recorded as ``uploading`` first, then written to object
storage under a unique path, then marked ``uploaded`` (or ``failed`` if
the object write does not succeed).
"""

import requests

from src.core.models import ErrorKind, FileId, FileMetadata, FileStatus, OperationResult, UploadedFile
from src.core.validators import validate_csv_upload
from src.observability.logger import get_logger
from src.observability.metrics import record_upload
from src.warehouse.file_records import FileRecordError, FileRecordStore
from src.warehouse.storage import ObjectStorage, StorageError, generate_unique_file_path

logger = get_logger(__name__)


class UploadResult(OperationResult):
    """Outcome of an upload; ``file`` is the stored record on success."""

    file: UploadedFile | None = None


class FileManager:
    """
    Coordinates object storage and file metadata for uploaded CSVs.
    """

    def __init__(self, files: FileRecordStore, storage: ObjectStorage):
        self.files = files
        self.storage = storage

    def upload(self, filename: str, content: bytes) -> UploadResult:
        """
        Upload a CSV file.

        Args:
            filename: Original file name (kept as the display name)
            content: Raw file bytes

        Returns:
            UploadResult carrying the stored UploadedFile on success
        """
        validation = validate_csv_upload(filename, len(content))
        if not validation.success:
            record_upload("rejected")
            return UploadResult.fail(validation.error, ErrorKind.INVALID_UPLOAD)

        try:
            stored = self.files.insert(FileMetadata(name=filename, size=len(content)))
        except (FileRecordError, requests.RequestException) as e:
            logger.error(f"Saving metadata for {filename} failed: {e}")
            record_upload("failure")
            return UploadResult.fail(
                str(e) or "Failed to save file metadata", ErrorKind.UPLOAD_FAILED
            )

        storage_path = generate_unique_file_path(filename)

        try:
            self.storage.upload(storage_path, content)
        except (StorageError, requests.RequestException) as e:
            logger.error(f"Upload of {filename} failed: {e}")
            record_upload("failure")
            marked = self.files.update_status(stored.id, FileStatus.FAILED)
            if not marked.success:
                logger.warning(f"Could not mark file {stored.id} as failed: {marked.error}")
            return UploadResult.fail(str(e) or "Upload failed", ErrorKind.UPLOAD_FAILED)

        marked = self.files.update_status(stored.id, FileStatus.UPLOADED, storage_path=storage_path)
        if not marked.success:
            record_upload("failure")
            self._discard(stored.id, storage_path)
            return UploadResult.fail(marked.error, marked.error_kind)

        record_upload("success")
        logger.info(f"Uploaded {filename} as file {stored.id}", extra={"storage_path": storage_path})
        return UploadResult.ok(
            file=stored.model_copy(
                update={"status": FileStatus.UPLOADED, "storage_path": storage_path}
            )
        )

    def _discard(self, file_id: FileId, storage_path: str) -> None:
        """Remove an object whose record could not be completed and mark the record failed."""
        try:
            if not self.storage.delete(storage_path):
                logger.warning(f"Could not remove orphaned object {storage_path}")
        except requests.RequestException as e:
            logger.warning(f"Could not remove orphaned object {storage_path}: {e}")

        marked = self.files.update_status(file_id, FileStatus.FAILED)
        if not marked.success:
            logger.warning(f"Could not mark file {file_id} as failed: {marked.error}")

    def list_files(self) -> list[UploadedFile]:
        """All uploaded files, newest first."""
        return self.files.list_files()

    def delete(self, file_id: FileId) -> OperationResult:
        """
        Delete a file's stored object and its record.

        A failed object delete is tolerated; the record is removed anyway.

        Args:
            file_id: File to delete

        Returns:
            OperationResult
        """
        try:
            storage_path = self.files.get_storage_path(file_id)
            if storage_path:
                self.storage.delete(storage_path)
            self.files.delete(file_id)
        except (FileRecordError, requests.RequestException) as e:
            logger.error(f"Delete of file {file_id} failed: {e}")
            return OperationResult.fail(str(e) or "Failed to delete file", ErrorKind.NETWORK_OR_UNKNOWN)

        logger.info(f"Deleted file {file_id}")
        return OperationResult.ok()
