"""Data layer utilities for content definitions and blob storage."""

from .errors import DataLoadError, DataValidationError, StorageError
from .paths import get_definitions_path, get_package_root
from .storage import BlobStore, FileBlobStore, MemoryBlobStore

__all__ = [
    "BlobStore",
    "DataLoadError",
    "DataValidationError",
    "FileBlobStore",
    "MemoryBlobStore",
    "StorageError",
    "get_definitions_path",
    "get_package_root",
]
