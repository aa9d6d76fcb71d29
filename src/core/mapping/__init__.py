"""
Header-to-schema column mapping and record building.
"""

from .column_mapper import (
    EXPECTED_COLUMNS,
    ColumnConfigLoader,
    create_column_mapping,
)
from .record_builder import FILE_ID_KEY, build_business_record

__all__ = [
    "EXPECTED_COLUMNS",
    "ColumnConfigLoader",
    "create_column_mapping",
    "FILE_ID_KEY",
    "build_business_record",
]
