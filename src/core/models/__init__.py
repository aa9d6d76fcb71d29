"""
Core data models for the business CSV ingestion pipeline.

All models use Pydantic for runtime validation and type safety.
"""

from .file_id import FileId
from .operation_result import (
    CSVValidationResult,
    ErrorKind,
    IngestionResult,
    InsertResult,
    OperationResult,
)
from .uploaded_file import FileMetadata, FileStatus, UploadedFile

__all__ = [
    "FileId",
    "FileStatus",
    "FileMetadata",
    "UploadedFile",
    "ErrorKind",
    "OperationResult",
    "InsertResult",
    "IngestionResult",
    "CSVValidationResult",
]
