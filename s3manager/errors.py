"""Error types raised by the storage facade."""

from __future__ import annotations


class S3ManagerError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(S3ManagerError):
    """A required configuration key is missing or empty."""

    def __init__(self, key: str, message: str | None = None):
        self.key = key
        super().__init__(f"{key}: {message}" if message else f"environment variable {key} is missing")


class StorageError(S3ManagerError):
    """Wraps underlying storage exceptions with operation context."""

    def __init__(self, op: str, bucket: str | None, key: str | None, message: str):
        self.op = op
        self.bucket = bucket
        self.key = key
        self.message = message
        super().__init__(self.__str__())

    def __str__(self) -> str:
        bucket_repr = self.bucket or "<unknown>"
        key_repr = self.key or "<unknown>"
        return f"{self.op} failed for bucket={bucket_repr} key={key_repr}: {self.message}"


class ListError(StorageError):
    """Listing buckets or objects could not complete."""


class BucketCreationError(StorageError):
    """Creating the bucket, or waiting for it to appear, failed."""


class UploadError(StorageError):
    pass


class DownloadError(StorageError):
    pass


class DeleteError(StorageError):
    pass


class LocalIOError(StorageError):
    """A local filesystem operation failed."""


__all__ = [
    "S3ManagerError",
    "ConfigurationError",
    "StorageError",
    "ListError",
    "BucketCreationError",
    "UploadError",
    "DownloadError",
    "DeleteError",
    "LocalIOError",
]
