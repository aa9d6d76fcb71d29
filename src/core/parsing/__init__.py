"""
Line-oriented CSV parsing.
"""

from .line_parser import parse_csv_line, split_csv_lines

__all__ = [
    "parse_csv_line",
    "split_csv_lines",
]
