"""
Structural validation of a CSV file: a header row plus at least one data row.
"""

from typing import Sequence

from src.core.models import CSVValidationResult, ErrorKind
from src.core.parsing import parse_csv_line

EMPTY_FILE_MESSAGE = "CSV file is empty"
NO_DATA_ROWS_MESSAGE = "No data rows found in CSV"


def validate_business_csv(lines: Sequence[str]) -> CSVValidationResult:
    """
    Validate the structure of a CSV file given as non-blank lines.

    Blank lines must already have been removed by the caller.

    Args:
        lines: Header line followed by data lines

    Returns:
        CSVValidationResult with ``headers`` on success, ``error`` otherwise
    """
    if len(lines) == 0:
        return CSVValidationResult(
            is_valid=False,
            error=EMPTY_FILE_MESSAGE,
            error_kind=ErrorKind.EMPTY_FILE,
        )

    if len(lines) == 1:
        return CSVValidationResult(
            is_valid=False,
            error=NO_DATA_ROWS_MESSAGE,
            error_kind=ErrorKind.NO_DATA_ROWS,
        )

    return CSVValidationResult(is_valid=True, headers=parse_csv_line(lines[0]))
