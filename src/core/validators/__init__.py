"""
File and CSV structure validation.
"""

from .csv_structure_validator import (
    EMPTY_FILE_MESSAGE,
    NO_DATA_ROWS_MESSAGE,
    validate_business_csv,
)
from .upload_validator import MAX_UPLOAD_BYTES, validate_csv_upload

__all__ = [
    "EMPTY_FILE_MESSAGE",
    "NO_DATA_ROWS_MESSAGE",
    "validate_business_csv",
    "MAX_UPLOAD_BYTES",
    "validate_csv_upload",
]
