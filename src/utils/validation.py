"""
Input validation utilities for CLI and service arguments.

Checks file identifiers, status names, pagination values and local paths
before they are placed into store URLs or used to open files.
"""

import re

from src.core.models import FileId, FileStatus


class ValidationError(ValueError):
    """Raised when input validation fails."""
    pass


def validate_file_id(file_id: str, field_name: str = "file_id") -> FileId:
    """
    Validate a file identifier.

    File IDs are opaque, but they end up in ``id=eq.<id>`` filters, so only
    alphanumeric characters, hyphens, underscores and dots are accepted.

    Args:
        file_id: The identifier to validate
        field_name: Name of the field (for error messages)

    Returns:
        The identifier, stripped of whitespace, as a FileId

    Raises:
        ValidationError: If validation fails

    Examples:
        >>> validate_file_id("6f1c2a0e-3b7d-4f7e-9a51-1d2b3c4d5e6f")
        '6f1c2a0e-3b7d-4f7e-9a51-1d2b3c4d5e6f'
    """
    if not file_id or not isinstance(file_id, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_id = file_id.strip()

    if not file_id:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if not re.match(r'^[a-zA-Z0-9_\-\.]+$', file_id):
        raise ValidationError(
            f"{field_name} contains invalid characters. "
            "Only alphanumeric, hyphens, underscores, and dots are allowed."
        )

    if len(file_id) > 255:
        raise ValidationError(f"{field_name} exceeds maximum length of 255 characters")

    return FileId(file_id)


def validate_status(status: str, field_name: str = "status") -> FileStatus:
    """
    Validate a file status name.

    Raises:
        ValidationError: If the name is not a known status
    """
    try:
        return FileStatus(str(status).strip().lower())
    except ValueError:
        allowed = ", ".join(s.value for s in FileStatus)
        raise ValidationError(f"{field_name} must be one of: {allowed}") from None


def validate_limit(limit: int, field_name: str = "limit", max_limit: int = 1000) -> int:
    """
    Validate a page size.

    Args:
        limit: The limit value to validate
        field_name: Name of the field (for error messages)
        max_limit: Maximum allowed limit value

    Returns:
        The validated limit value

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(limit, int):
        raise ValidationError(f"{field_name} must be an integer, got {type(limit).__name__}")

    if limit <= 0:
        raise ValidationError(f"{field_name} must be a positive integer, got {limit}")

    if limit > max_limit:
        raise ValidationError(f"{field_name} exceeds maximum of {max_limit}")

    return limit


def validate_page(page: int, field_name: str = "page") -> int:
    """
    Validate a zero-based page number.

    Raises:
        ValidationError: If validation fails
    """
    if not isinstance(page, int):
        raise ValidationError(f"{field_name} must be an integer, got {type(page).__name__}")

    if page < 0:
        raise ValidationError(f"{field_name} must be a non-negative integer, got {page}")

    return page


def validate_file_path(file_path: str, field_name: str = "file_path") -> str:
    """
    Validate a local file path.

    Args:
        file_path: The file path to validate
        field_name: Name of the field (for error messages)

    Returns:
        The validated file path (stripped of whitespace)

    Raises:
        ValidationError: If validation fails
    """
    if not file_path or not isinstance(file_path, str):
        raise ValidationError(f"{field_name} must be a non-empty string")

    file_path = file_path.strip()

    if not file_path:
        raise ValidationError(f"{field_name} cannot be empty or whitespace-only")

    if "\x00" in file_path:
        raise ValidationError(f"{field_name} contains null bytes")

    if len(file_path) > 4096:
        raise ValidationError(f"{field_name} exceeds maximum length of 4096 characters")

    return file_path
