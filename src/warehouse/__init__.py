"""
Remote store access: REST client, batch inserts, file records and object storage.
"""

from .batch_insert import BATCH_SIZE, BusinessBatchInserter, chunked
from .connection import StoreClient, SupabaseConfigError
from .file_records import FileRecordError, FileRecordStore
from .storage import ObjectStorage, StorageError, generate_unique_file_path

__all__ = [
    "BATCH_SIZE",
    "BusinessBatchInserter",
    "chunked",
    "StoreClient",
    "SupabaseConfigError",
    "FileRecordError",
    "FileRecordStore",
    "ObjectStorage",
    "StorageError",
    "generate_unique_file_path",
]
