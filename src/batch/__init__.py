"""
CSV ingestion, upload and preview services.
"""

from .file_manager import FileManager, UploadResult
from .pipeline import IngestionPipeline
from .prerelease import PreReleaseIngestor
from .preview import CSVPreview, preview_csv

__all__ = [
    "IngestionPipeline",
    "PreReleaseIngestor",
    "FileManager",
    "UploadResult",
    "CSVPreview",
    "preview_csv",
]
