"""Custom exceptions for data loading, validation and storage."""


class DataError(Exception):
    """Base exception for the data layer."""


class DataLoadError(DataError):
    """Raised when JSON files are missing or invalid."""


class DataValidationError(DataError):
    """Raised when JSON content fails structural validation."""


class StorageError(DataError):
    """Raised when a blob store cannot read or write a key."""
