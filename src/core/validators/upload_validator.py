"""
Pre-upload checks on a CSV file's name and size.
"""

from src.core.models import ErrorKind, OperationResult

MAX_UPLOAD_BYTES = 50 * 1024 * 1024


def validate_csv_upload(filename: str, size: int) -> OperationResult:
    """
    Check that a file can be uploaded as a CSV.

    Fails if:
    - The name does not end in ``.csv`` (case-insensitive)
    - The size exceeds 50MB
    - The file is empty

    Args:
        filename: Original file name
        size: Size in bytes

    Returns:
        OperationResult with an INVALID_UPLOAD error on failure
    """
    if not filename.lower().endswith(".csv"):
        return OperationResult.fail("File must be a CSV", ErrorKind.INVALID_UPLOAD)

    if size > MAX_UPLOAD_BYTES:
        return OperationResult.fail("File size exceeds 50MB limit", ErrorKind.INVALID_UPLOAD)

    if size == 0:
        return OperationResult.fail("File is empty", ErrorKind.INVALID_UPLOAD)

    return OperationResult.ok()
