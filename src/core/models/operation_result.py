"""
Result models returned across component boundaries.

Components report failures through these models instead of raising, so a
caller can relay them as ``{success, error?, processed?}``.
"""

from enum import Enum
from typing import Any, List

from pydantic import BaseModel, Field, model_validator


class ErrorKind(str, Enum):
    """Kinds of failure a pipeline step can report."""

    EMPTY_FILE = "empty_file"
    NO_DATA_ROWS = "no_data_rows"
    BATCH_INSERT_FAILED = "batch_insert_failed"
    STATUS_UPDATE_FAILED = "status_update_failed"
    NETWORK_OR_UNKNOWN = "network_or_unknown"
    FILE_NOT_FOUND = "file_not_found"
    ALREADY_ADDED = "already_added"
    INVALID_UPLOAD = "invalid_upload"
    UPLOAD_FAILED = "upload_failed"


class OperationResult(BaseModel):
    """
    Outcome of a single remote operation.

    Attributes:
        success: Whether the operation succeeded
        error: Human-readable failure detail
        error_kind: Classification of the failure
    """

    success: bool
    error: str | None = None
    error_kind: ErrorKind | None = None

    @model_validator(mode="after")
    def check_error_consistency(self):
        """A successful result never carries an error."""
        if self.success and self.error is not None:
            raise ValueError("success=True but error is set")
        return self

    @classmethod
    def ok(cls, **kwargs: Any):
        return cls(success=True, **kwargs)

    @classmethod
    def fail(cls, error: str, kind: ErrorKind, **kwargs: Any):
        return cls(success=False, error=error, error_kind=kind, **kwargs)

    def to_response(self) -> dict[str, Any]:
        """Caller-facing dictionary, omitting unset fields."""
        return self.model_dump(exclude_none=True, exclude={"error_kind"}, mode="json")


class InsertResult(OperationResult):
    """Outcome of inserting records; ``inserted`` counts committed records."""

    inserted: int = Field(0, ge=0)


class IngestionResult(OperationResult):
    """
    Outcome of ingesting one CSV file.

    ``processed`` is only reported on full success.
    """

    processed: int | None = Field(None, ge=0)

    class Config:
        json_schema_extra = {
            "example": {"success": True, "processed": 2}
        }


class CSVValidationResult(BaseModel):
    """
    Outcome of structurally validating a CSV file.

    Attributes:
        is_valid: Whether the file has a header and at least one data row
        headers: Parsed header row (only when valid)
        error: Failure reason (only when invalid)
        error_kind: EMPTY_FILE or NO_DATA_ROWS
    """

    is_valid: bool
    headers: List[str] | None = None
    error: str | None = None
    error_kind: ErrorKind | None = None
