"""
Adds a stored CSV file to the pre-release business table.

This is the caller-side step around the ingestion pipeline: it locates
and downloads the file, runs the pipeline, then records the outcome on
the file's status. Status updates after ingestion are best-effort.
"""

import requests

from src.core.models import ErrorKind, FileId, FileStatus, IngestionResult
from src.observability.logger import get_logger, log_operation
from src.warehouse.file_records import FileRecordError, FileRecordStore
from src.warehouse.storage import ObjectStorage, StorageError

from .pipeline import IngestionPipeline

logger = get_logger(__name__)


class PreReleaseIngestor:
    """
    Runs ingestion for a file identified only by its id.
    """

    def __init__(
        self,
        pipeline: IngestionPipeline,
        files: FileRecordStore,
        storage: ObjectStorage,
    ):
        """
        Initialize ingestor.

        Args:
            pipeline: CSV ingestion pipeline
            files: File metadata store
            storage: Object storage holding the uploaded CSVs
        """
        self.pipeline = pipeline
        self.files = files
        self.storage = storage

    def add_file(self, file_id: FileId) -> IngestionResult:
        """
        Ingest a previously uploaded file.

        Refuses files already in ``added`` status. On success the file is
        marked ``added``; on ingestion failure it is marked ``error``. A
        failed status update is logged and does not change the result.

        Args:
            file_id: File to ingest

        Returns:
            IngestionResult to relay to the caller
        """
        with log_operation("Add file to pre-release", logger=logger, file_id=file_id):
            try:
                row = self.files.select_fields(file_id, "status", "storage_path") or {}
                status = FileStatus(row["status"]) if row.get("status") else None
                storage_path = row.get("storage_path")
            except (FileRecordError, ValueError, requests.RequestException) as e:
                logger.error(f"File lookup failed for {file_id}: {e}")
                return IngestionResult.fail(str(e), ErrorKind.NETWORK_OR_UNKNOWN)

            if status == FileStatus.ADDED:
                return IngestionResult.fail("File has already been added", ErrorKind.ALREADY_ADDED)

            if not storage_path:
                return IngestionResult.fail("File not found in database", ErrorKind.FILE_NOT_FOUND)

            try:
                csv_text = self.storage.download_text(storage_path)
            except (StorageError, requests.RequestException) as e:
                logger.error(f"Storage fetch error for {file_id}: {e}")
                return IngestionResult.fail("File not found", ErrorKind.FILE_NOT_FOUND)

            result = self.pipeline.process_csv(csv_text, file_id)

            self._mark(file_id, FileStatus.ADDED if result.success else FileStatus.ERROR)
            return result

    def _mark(self, file_id: FileId, status: FileStatus) -> None:
        update = self.files.update_status(file_id, status)
        if not update.success:
            logger.warning(
                f"Could not mark file {file_id} as {status.value}: {update.error}",
                extra={"file_id": file_id, "target_status": status.value},
            )
