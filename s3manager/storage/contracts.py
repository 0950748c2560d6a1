"""Storage interfaces and value types."""

from __future__ import annotations

from typing import BinaryIO, Protocol, runtime_checkable

from pydantic import BaseModel, ConfigDict


class RemoteObjectRef(BaseModel):
    """Identifies an object within a bucket."""

    model_config = ConfigDict(frozen=True)

    key: str


# Order is whatever the remote service returned.
ObjectListing = list[RemoteObjectRef]


@runtime_checkable
class ObjectStoreClient(Protocol):
    """Contract for the remote object store the facade talks to.

    Implementations raise ``StorageError`` for remote failures.
    """

    def create_bucket(self, name: str, region: str | None = None) -> None:
        ...

    def wait_until_bucket_exists(self, name: str, timeout: float) -> None:
        ...

    def list_buckets(self) -> list[str]:
        ...

    def list_objects(self, bucket: str) -> ObjectListing:
        ...

    def get_object(self, bucket: str, key: str, dest: BinaryIO) -> int:
        ...

    def put_object(self, bucket: str, key: str, source: BinaryIO, length: int) -> None:
        ...

    def delete_object(self, bucket: str, key: str) -> None:
        ...


__all__ = ["RemoteObjectRef", "ObjectListing", "ObjectStoreClient"]
