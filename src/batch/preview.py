"""
Paginated, searchable preview of a CSV file's rows.
"""

from typing import List

from pydantic import BaseModel, Field

from src.core.parsing import parse_csv_line, split_csv_lines

MAX_PREVIEW_LIMIT = 1000


class CSVPreview(BaseModel):
    """
    One page of parsed CSV rows.

    Attributes:
        headers: Parsed header row
        data: Parsed rows on this page
        total_rows: Data rows matching the search
        current_page: Zero-based page number
        has_next_page: Whether more matching rows follow this page
    """

    headers: List[str] = Field(default_factory=list)
    data: List[List[str]] = Field(default_factory=list)
    total_rows: int = 0
    current_page: int = 0
    has_next_page: bool = False


def preview_csv(csv_text: str, page: int = 0, limit: int = 100, search: str = "") -> CSVPreview:
    """
    Parse one page of a CSV file.

    The search term is matched case-insensitively against each raw data
    line before pagination. ``limit`` is capped at MAX_PREVIEW_LIMIT.

    Args:
        csv_text: Full file contents
        page: Zero-based page number
        limit: Rows per page
        search: Optional substring filter

    Returns:
        CSVPreview for the requested page
    """
    limit = min(limit, MAX_PREVIEW_LIMIT)
    lines = split_csv_lines(csv_text)

    if not lines:
        return CSVPreview(current_page=page)

    headers = parse_csv_line(lines[0])
    data_lines = lines[1:]

    if search.strip():
        needle = search.lower()
        data_lines = [line for line in data_lines if needle in line.lower()]

    start = page * limit
    end = start + limit

    return CSVPreview(
        headers=headers,
        data=[parse_csv_line(line) for line in data_lines[start:end]],
        total_rows=len(data_lines),
        current_page=page,
        has_next_page=end < len(data_lines),
    )
