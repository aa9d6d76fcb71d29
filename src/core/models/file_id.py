"""
Nominal identifier for uploaded files.
"""

from typing import NewType

FileId = NewType("FileId", str)
