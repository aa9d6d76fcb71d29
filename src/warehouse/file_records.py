"""
Operations on the uploaded_files metadata table.

Provides status transitions, single-field lookups, listing, creation and
deletion of file records through the store's REST API.
"""

from datetime import datetime, timezone
from typing import Any
from urllib.parse import quote

import requests
from pydantic import ValidationError

from src.core.models import (
    ErrorKind,
    FileId,
    FileMetadata,
    FileStatus,
    OperationResult,
    UploadedFile,
)
from src.observability.logger import get_logger
from src.observability.metrics import record_status_update

from .connection import StoreClient, describe_failure

logger = get_logger(__name__)

FILES_TABLE = "uploaded_files"


class FileRecordError(RuntimeError):
    """Raised when a file metadata lookup cannot be completed."""


class FileRecordStore:
    """
    Reads and writes uploaded file records.
    """

    def __init__(self, client: StoreClient, table: str = FILES_TABLE):
        """
        Initialize file record store.

        Args:
            client: Open store client
            table: Metadata collection name
        """
        self.client = client
        self.table = table

    def _by_id(self, file_id: FileId) -> str:
        return f"rest/v1/{self.table}?id=eq.{quote(str(file_id), safe='')}"

    def update_status(
        self,
        file_id: FileId,
        status: FileStatus | str,
        storage_path: str | None = None,
    ) -> OperationResult:
        """
        Set a file's status and stamp updated_at.

        Setting the same status twice leaves the same end state.

        Args:
            file_id: File to update
            status: Target status
            storage_path: Also record the object location (optional)

        Returns:
            OperationResult; STATUS_UPDATE_FAILED on rejection,
            NETWORK_OR_UNKNOWN when the request could not be sent
        """
        status = FileStatus(status)
        body = {
            "status": status.value,
            "updated_at": datetime.now(timezone.utc).isoformat(),
        }
        if storage_path is not None:
            body["storage_path"] = storage_path

        try:
            response = self.client.request("PATCH", self._by_id(file_id), json=body)
        except requests.RequestException as e:
            record_status_update(status.value, success=False)
            return OperationResult.fail(
                str(e) or "Status update failed",
                ErrorKind.NETWORK_OR_UNKNOWN,
            )

        if not response.ok:
            record_status_update(status.value, success=False)
            return OperationResult.fail(
                describe_failure("Status update failed", response),
                ErrorKind.STATUS_UPDATE_FAILED,
            )

        record_status_update(status.value, success=True)
        logger.info(f"File {file_id} marked {status.value}")
        return OperationResult.ok()

    def select_fields(self, file_id: FileId, *fields: str) -> dict[str, Any] | None:
        """
        Fetch several columns of a file record in one request.

        Args:
            file_id: File to look up
            *fields: Column names

        Returns:
            Column name -> value, or None if the file does not exist

        Raises:
            FileRecordError: If the store rejects the query
            requests.RequestException: On connection errors
        """
        columns = ",".join(quote(field, safe="") for field in fields)
        response = self.client.request("GET", f"{self._by_id(file_id)}&select={columns}")
        if not response.ok:
            raise FileRecordError(f"Failed to get file info: {response.status_code}")

        rows = response.json()
        if not rows:
            return None
        return {field: rows[0].get(field) for field in fields}

    def select_field(self, file_id: FileId, field: str) -> Any:
        """Fetch one column of a file record, or None if the file does not exist."""
        row = self.select_fields(file_id, field)
        return row[field] if row else None

    def get_storage_path(self, file_id: FileId) -> str | None:
        """Storage location of a file, or None if unknown."""
        return self.select_field(file_id, "storage_path") or None

    def get_status(self, file_id: FileId) -> FileStatus | None:
        """Current status of a file, or None if the file does not exist."""
        value = self.select_field(file_id, "status")
        return FileStatus(value) if value else None

    def insert(self, file: FileMetadata) -> UploadedFile:
        """
        Create a file record and return the stored snapshot.

        Raises:
            FileRecordError: If the insert is rejected or the row is invalid
            requests.RequestException: On connection errors
        """
        response = self.client.request(
            "POST",
            f"rest/v1/{self.table}",
            json=file.to_row(),
            headers={"Prefer": "return=representation"},
        )
        if not response.ok:
            raise FileRecordError(describe_failure("Insert failed", response))

        rows = response.json()
        if not rows:
            raise FileRecordError("Insert failed: store returned no row")
        try:
            return UploadedFile.from_row(rows[0])
        except ValidationError as e:
            raise FileRecordError(f"Invalid file record: {rows[0]!r}") from e

    def list_files(self) -> list[UploadedFile]:
        """
        All file records, newest upload first.

        Raises:
            FileRecordError: If the query is rejected or a row is invalid
            requests.RequestException: On connection errors
        """
        response = self.client.request(
            "GET", f"rest/v1/{self.table}?order=uploaded_at.desc"
        )
        if not response.ok:
            raise FileRecordError(describe_failure("Fetch failed", response))

        files = []
        for row in response.json():
            try:
                files.append(UploadedFile.from_row(row))
            except ValidationError as e:
                raise FileRecordError(f"Invalid file record: {row!r}") from e
        return files

    def delete(self, file_id: FileId) -> None:
        """
        Delete a file record.

        Raises:
            FileRecordError: If the store rejects the delete
            requests.RequestException: On connection errors
        """
        response = self.client.request("DELETE", self._by_id(file_id))
        if not response.ok:
            raise FileRecordError(
                describe_failure("Failed to delete from database", response)
            )
