"""Storage package: object store abstraction."""

from s3manager.storage.contracts import ObjectListing, ObjectStoreClient, RemoteObjectRef
from s3manager.storage.minio_impl import MinioObjectStore

__all__ = ["ObjectListing", "ObjectStoreClient", "RemoteObjectRef", "MinioObjectStore"]
