"""
UploadedFile model representing one user-submitted CSV artifact.
"""

from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from .file_id import FileId


class FileStatus(str, Enum):
    """Lifecycle label of an uploaded file."""

    UPLOADING = "uploading"
    UPLOADED = "uploaded"
    FAILED = "failed"
    PROCESSING = "processing"
    ADDED = "added"
    ERROR = "error"


class FileMetadata(BaseModel):
    """
    Attributes of a file record before the store assigns it an id.

    Attributes:
        name: Display name of the uploaded file
        size: Size in bytes
        uploaded_at: When the upload was recorded
        status: Lifecycle status
        storage_path: Object storage location (None until the upload completes)
    """

    name: str = Field(..., min_length=1)
    size: int = Field(..., ge=0)
    uploaded_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    status: FileStatus = FileStatus.UPLOADING
    storage_path: str | None = None

    def to_row(self) -> dict[str, Any]:
        """Serialize to the column layout expected by the store."""
        return {
            "name": self.name,
            "size": self.size,
            "uploaded_at": self.uploaded_at.isoformat(),
            "status": self.status.value,
            "storage_path": self.storage_path,
        }


class UploadedFile(FileMetadata):
    """
    Snapshot of a row in the remote uploaded_files table.

    The store owns the record; instances are read-only copies.
    """

    id: FileId = Field(..., min_length=1)

    @classmethod
    def from_row(cls, row: Any) -> "UploadedFile":
        """
        Build a snapshot from a JSON row returned by the store.

        Raises:
            pydantic.ValidationError: If the row is not a valid file record
        """
        return cls.model_validate(row)

    class Config:
        json_schema_extra = {
            "example": {
                "id": "6f1c2a0e-3b7d-4f7e-9a51-1d2b3c4d5e6f",
                "name": "texas_plumbers.csv",
                "size": 482113,
                "uploaded_at": "2025-03-02T14:11:09Z",
                "status": "uploaded",
                "storage_path": "uploads/1740924669000-k3j9x0a1b2c/texas_plumbers.csv"
            }
        }
