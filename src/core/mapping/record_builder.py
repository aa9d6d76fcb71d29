"""
Builds flat business records from parsed CSV rows.
"""

from typing import Any, Dict, Mapping, Sequence

from src.core.models import FileId

FILE_ID_KEY = "file_id"


def build_business_record(
    values: Sequence[str],
    column_map: Mapping[str, int],
    file_id: FileId,
) -> Dict[str, Any]:
    """
    Build one record tagged with its owning file.

    A mapped column whose index is beyond the end of the row is set to
    None; a column absent from the mapping is not set at all. Values are
    passed through as strings.

    Args:
        values: Parsed field values of one data line
        column_map: Logical column name -> header index
        file_id: Owning file identifier

    Returns:
        Record dictionary containing ``file_id`` and one key per mapped column
    """
    record: Dict[str, Any] = {FILE_ID_KEY: file_id}

    for column, index in column_map.items():
        record[column] = values[index] if 0 <= index < len(values) else None

    return record
