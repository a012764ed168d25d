"""Error types for storage."""


class StorageError(Exception):
    """Raised when data cannot be written."""

    pass


__all__ = ["StorageError"]
