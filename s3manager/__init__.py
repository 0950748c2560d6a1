"""s3manager: bucket-scoped object storage facade with a local mirror folder."""

from s3manager.errors import (
    BucketCreationError,
    ConfigurationError,
    DeleteError,
    DownloadError,
    ListError,
    LocalIOError,
    S3ManagerError,
    StorageError,
    UploadError,
)
from s3manager.facade import StorageFacade, resolve_local_path

__all__ = [
    "StorageFacade",
    "resolve_local_path",
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
